"""
Infrastructure layer - everything that produces bytes or touches disk.

- archive: hand-rolled CRC-32 and store-only ZIP writer/reader
- backup: timestamped backup artifacts in the backups folder
- files: atomic writes and directory creation
"""
