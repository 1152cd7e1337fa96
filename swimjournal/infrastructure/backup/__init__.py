"""
Backup orchestration: pick a format, a directory and a timestamped file name.
"""

from .service import (
    BackupConfiguration,
    BackupError,
    ExportFormat,
    NoDataError,
    export_files,
    perform_backup,
)

__all__ = [
    "BackupConfiguration",
    "BackupError",
    "ExportFormat",
    "NoDataError",
    "export_files",
    "perform_backup",
]
