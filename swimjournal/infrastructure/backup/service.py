"""
Backup orchestration.

Takes the journal's sessions and competitions, encodes them in the
requested format and writes exactly one timestamped artifact into the
backups directory:

- csv        -> <app>-Training-<yyyyMMdd-HHmm>.csv (training table only)
- json       -> <app>-<yyyyMMdd-HHmm>.json
- zipBundle  -> <app>-<yyyyMMdd-HHmm>.zip with training.csv,
                wettkaempfe.csv and export.json

Two backups within the same minute share a file name; the later one
replaces the earlier one.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ...config.settings import get_settings
from ...core.export import competition_csv, export_json, training_csv
from ...core.journal.models import Competition, TrainingSession
from ..archive.zip_writer import ZipEntry, build_archive
from ..files import atomic_write_bytes, atomic_write_text, ensure_directory

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d-%H%M"

TRAINING_CSV_NAME = "training.csv"
COMPETITION_CSV_NAME = "wettkaempfe.csv"
JSON_NAME = "export.json"


class BackupError(Exception):
    """Base class for backup failures that aren't plain I/O errors."""
    pass


class NoDataError(BackupError):
    """Raised when there is neither a session nor a competition to back up."""

    def __init__(self, message: str = "Es gibt keine Trainings- oder Wettkampfdaten zum Sichern.") -> None:
        super().__init__(message)


class ExportFormat(Enum):
    """Output formats a backup can be written in."""
    JSON = "json"
    CSV = "csv"
    ZIP_BUNDLE = "zipBundle"

    @property
    def title(self) -> str:
        return {
            ExportFormat.JSON: "JSON",
            ExportFormat.CSV: "CSV",
            ExportFormat.ZIP_BUNDLE: "ZIP-Bundle",
        }[self]

    @property
    def description(self) -> str:
        return {
            ExportFormat.JSON: "Enthält alle Daten strukturiert für Backups & Shortcuts.",
            ExportFormat.CSV: "Einfaches Tabellenformat für Tabellenkalkulationen.",
            ExportFormat.ZIP_BUNDLE: "JSON + CSV in einer ZIP-Datei für komplette Sicherungen.",
        }[self]

    @property
    def file_extension(self) -> str:
        return {
            ExportFormat.JSON: "json",
            ExportFormat.CSV: "csv",
            ExportFormat.ZIP_BUNDLE: "zip",
        }[self]


def default_backup_directory() -> Path:
    """The configured backups folder, e.g. ~/Documents/SchwimmTagebuchBackups."""
    return get_settings().backup_directory


@dataclass
class BackupConfiguration:
    """
    Collaborators of a backup run.

    Tests inject a fixed clock and a temporary directory; production uses
    the wall clock and the configured backups folder.
    """
    clock: Callable[[], datetime] = datetime.now
    directory_provider: Callable[[], Path] = default_backup_directory
    app_name: str = field(default_factory=lambda: get_settings().app_name)


def backup_timestamp(moment: datetime) -> str:
    """Format a moment as yyyyMMdd-HHmm in local time."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime(TIMESTAMP_FORMAT)


def bundle_entries(
    sessions: Sequence[TrainingSession],
    competitions: Sequence[Competition],
    timestamp: Optional[datetime] = None,
) -> list[ZipEntry]:
    """The three files that make up a complete export."""
    moment = timestamp or datetime.now()
    return [
        ZipEntry(TRAINING_CSV_NAME, training_csv(sessions).encode("utf-8"), moment),
        ZipEntry(COMPETITION_CSV_NAME, competition_csv(competitions).encode("utf-8"), moment),
        ZipEntry(JSON_NAME, export_json(sessions, competitions).encode("utf-8"), moment),
    ]


def perform_backup(
    sessions: Sequence[TrainingSession],
    competitions: Sequence[Competition],
    fmt: Union[ExportFormat, str],
    configuration: Optional[BackupConfiguration] = None,
) -> Path:
    """
    Write one backup artifact and return its absolute path.

    Raises:
        NoDataError: both lists are empty. Checked before any file access.
        OSError: the directory couldn't be created or the file written.
    """
    if not sessions and not competitions:
        logger.warning("Backup requested without any journal data")
        raise NoDataError()

    fmt = ExportFormat(fmt)
    configuration = configuration or BackupConfiguration()

    now = configuration.clock()
    directory = ensure_directory(Path(configuration.directory_provider()))
    timestamp = backup_timestamp(now)
    prefix = configuration.app_name

    if fmt is ExportFormat.JSON:
        path = atomic_write_text(
            directory / f"{prefix}-{timestamp}.json",
            export_json(sessions, competitions),
        )
    elif fmt is ExportFormat.CSV:
        path = atomic_write_text(
            directory / f"{prefix}-Training-{timestamp}.csv",
            training_csv(sessions),
        )
    else:
        path = atomic_write_bytes(
            directory / f"{prefix}-{timestamp}.zip",
            build_archive(bundle_entries(sessions, competitions, now)),
        )

    logger.info(
        "Backup written",
        extra={
            "format": fmt.value,
            "path": str(path),
            "sessions": len(sessions),
            "competitions": len(competitions),
        }
    )

    return path


def export_files(
    sessions: Sequence[TrainingSession],
    competitions: Sequence[Competition],
    directory: Path,
) -> list[Path]:
    """
    Write training.csv, wettkaempfe.csv and export.json as loose files.

    This is the "share" export: fixed names, no timestamp, existing files
    are replaced.
    """
    directory = ensure_directory(Path(directory))

    paths = [
        atomic_write_text(directory / TRAINING_CSV_NAME, training_csv(sessions)),
        atomic_write_text(directory / COMPETITION_CSV_NAME, competition_csv(competitions)),
        atomic_write_text(directory / JSON_NAME, export_json(sessions, competitions)),
    ]

    logger.info(
        "Export files written",
        extra={"directory": str(directory), "files": [path.name for path in paths]}
    )

    return paths
