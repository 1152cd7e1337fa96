"""
Hand-rolled ZIP support: CRC-32, a store-only writer and a local-header reader.
"""

from .crc32 import crc32
from .zip_reader import entries, file_names, file_names_at
from .zip_writer import ZipEntry, build_archive, dos_date_time, write_archive

__all__ = [
    "crc32",
    "entries",
    "file_names",
    "file_names_at",
    "ZipEntry",
    "build_archive",
    "dos_date_time",
    "write_archive",
]
