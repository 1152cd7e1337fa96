"""
Unit tests for the backup orchestrator.

File system access goes to pytest's tmp_path; the clock is fixed so file
names are predictable.
"""

import io
import json
import os
import zipfile
from datetime import datetime
from pathlib import Path

import pytest

from swimjournal.config.settings import Settings
from swimjournal.infrastructure.archive import file_names_at
from swimjournal.infrastructure.backup import (
    BackupConfiguration,
    BackupError,
    ExportFormat,
    NoDataError,
    export_files,
    perform_backup,
)
from swimjournal.infrastructure.backup.service import backup_timestamp
from swimjournal.core.journal.models import (
    Competition,
    CourseType,
    RaceResult,
    Stroke,
    TrainingSession,
)

FIXED_NOW = datetime(1970, 1, 1, 0, 0)


@pytest.fixture
def session() -> TrainingSession:
    return TrainingSession(date=datetime(1970, 1, 1), total_meters=1500, total_duration_sec=1800, borg=6)


@pytest.fixture
def competition() -> Competition:
    return Competition(
        date=datetime(1970, 1, 2),
        name="Sommer",
        venue="Hamburg",
        course=CourseType.LONG_COURSE_50M,
        results=[RaceResult(stroke=Stroke.FREESTYLE, distance=100, time_sec=60)],
    )


@pytest.fixture
def configuration(tmp_path) -> BackupConfiguration:
    return BackupConfiguration(
        clock=lambda: FIXED_NOW,
        directory_provider=lambda: tmp_path,
        app_name="SchwimmTagebuch",
    )


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

class TestNoData:
    """An empty journal is rejected before any file access."""

    @pytest.mark.parametrize("fmt", list(ExportFormat))
    def test_raises_for_every_format(self, fmt, tmp_path):
        def forbidden_directory() -> Path:
            pytest.fail("directory provider must not be called without data")

        configuration = BackupConfiguration(
            clock=lambda: FIXED_NOW,
            directory_provider=forbidden_directory,
            app_name="SchwimmTagebuch",
        )

        with pytest.raises(NoDataError):
            perform_backup([], [], fmt, configuration)

        assert list(tmp_path.iterdir()) == []

    def test_error_message_and_hierarchy(self):
        error = NoDataError()

        assert isinstance(error, BackupError)
        assert "keine Trainings- oder Wettkampfdaten" in str(error)


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------

class TestPerformBackup:
    """One artifact per call, named after the clock."""

    def test_json_backup(self, session, competition, configuration, tmp_path):
        path = perform_backup([session], [competition], ExportFormat.JSON, configuration)

        assert path == tmp_path / "SchwimmTagebuch-19700101-0000.json"
        document = json.loads(path.read_text(encoding="utf-8"))
        assert len(document["trainings"]) == 1
        assert document["competitions"][0]["name"] == "Sommer"

    def test_csv_backup_contains_trainings_only(self, session, competition, configuration, tmp_path):
        path = perform_backup([session], [competition], ExportFormat.CSV, configuration)

        assert path.name == "SchwimmTagebuch-Training-19700101-0000.csv"
        assert path.read_text(encoding="utf-8").split("\n") == [
            "date,totalMeters,totalMinutes,borg,location,feeling,notes,equipment,technique",
            "1970-01-01,1500,30,6,Becken,,,,",
        ]
        assert sorted(p.name for p in tmp_path.iterdir()) == [path.name]

    def test_csv_backup_with_competitions_only_writes_header(self, competition, configuration):
        """The CSV format never includes the competition table."""
        path = perform_backup([], [competition], ExportFormat.CSV, configuration)

        assert path.read_text(encoding="utf-8") == (
            "date,totalMeters,totalMinutes,borg,location,feeling,notes,equipment,technique"
        )

    def test_zip_bundle_contains_all_files(self, session, competition, configuration, tmp_path):
        path = perform_backup([session], [competition], ExportFormat.ZIP_BUNDLE, configuration)

        assert path.name == "SchwimmTagebuch-19700101-0000.zip"
        assert set(file_names_at(path)) == {"training.csv", "wettkaempfe.csv", "export.json"}

        # No working directory is left next to the archive
        assert [p.name for p in tmp_path.iterdir()] == [path.name]

    def test_zip_bundle_payloads(self, session, competition, configuration):
        path = perform_backup([session], [competition], "zipBundle", configuration)

        with zipfile.ZipFile(io.BytesIO(path.read_bytes())) as archive:
            competitions_csv = archive.read("wettkaempfe.csv").decode("utf-8")
            document = json.loads(archive.read("export.json"))

        assert competitions_csv.split("\n")[1] == "1970-01-02,Sommer,Hamburg,50 m,Freistil,100,60,0,false"
        assert document["trainings"][0]["totalDurationSec"] == 1800

    def test_accepts_format_strings(self, session, configuration):
        path = perform_backup([session], [], "json", configuration)
        assert path.suffix == ".json"

    def test_rejects_unknown_format(self, session, configuration):
        with pytest.raises(ValueError):
            perform_backup([session], [], "xml", configuration)

    def test_returns_absolute_path(self, session, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configuration = BackupConfiguration(
            clock=lambda: FIXED_NOW,
            directory_provider=lambda: Path("relative-backups"),
            app_name="SchwimmTagebuch",
        )

        path = perform_backup([session], [], ExportFormat.JSON, configuration)

        assert path.is_absolute()
        assert path.parent == tmp_path / "relative-backups"

    def test_creates_missing_directory(self, session, tmp_path):
        target = tmp_path / "Documents" / "SchwimmTagebuchBackups"
        configuration = BackupConfiguration(
            clock=lambda: FIXED_NOW,
            directory_provider=lambda: target,
            app_name="SchwimmTagebuch",
        )

        path = perform_backup([session], [], ExportFormat.JSON, configuration)
        again = perform_backup([session], [], ExportFormat.JSON, configuration)

        assert path == again
        assert path.parent == target

    def test_same_minute_overwrites(self, session, competition, configuration):
        """Two backups in one minute share a name; the later one wins."""
        first = perform_backup([session], [], ExportFormat.JSON, configuration)
        second = perform_backup([session], [competition], ExportFormat.JSON, configuration)

        assert first == second
        assert len(json.loads(second.read_text(encoding="utf-8"))["competitions"]) == 1


class TestWriteFailures:
    """I/O errors propagate and leave nothing behind."""

    def test_replace_failure_leaves_no_file(self, session, configuration, tmp_path, monkeypatch):
        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError, match="disk full"):
            perform_backup([session], [], ExportFormat.ZIP_BUNDLE, configuration)

        assert list(tmp_path.iterdir()) == []

    def test_directory_creation_failure_propagates(self, session, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("x")
        configuration = BackupConfiguration(
            clock=lambda: FIXED_NOW,
            directory_provider=lambda: blocker / "Backups",
        )

        with pytest.raises(OSError):
            perform_backup([session], [], ExportFormat.JSON, configuration)


# ---------------------------------------------------------------------------
# Helpers and configuration
# ---------------------------------------------------------------------------

class TestTimestamp:

    def test_format(self):
        assert backup_timestamp(datetime(2024, 5, 17, 7, 5, 59)) == "20240517-0705"


class TestExportFormat:

    def test_titles_and_extensions(self):
        assert [fmt.title for fmt in ExportFormat] == ["JSON", "CSV", "ZIP-Bundle"]
        assert [fmt.file_extension for fmt in ExportFormat] == ["json", "csv", "zip"]
        assert ExportFormat("zipBundle") is ExportFormat.ZIP_BUNDLE


class TestExportFiles:
    """The loose-file share export."""

    def test_writes_three_fixed_names(self, session, competition, tmp_path):
        paths = export_files([session], [competition], tmp_path / "share")

        assert [path.name for path in paths] == ["training.csv", "wettkaempfe.csv", "export.json"]
        assert all(path.exists() for path in paths)
        assert paths[1].read_text(encoding="utf-8").startswith("date,name,venue,course")


class TestSettingsBackupDirectory:

    def test_defaults_below_documents_root(self, tmp_path):
        settings = Settings(documents_root=tmp_path, app_name="SchwimmTagebuch")
        assert settings.backup_directory == tmp_path / "SchwimmTagebuchBackups"

    def test_explicit_backup_dir_wins(self, tmp_path):
        settings = Settings(documents_root=tmp_path, backup_dir=tmp_path / "elsewhere")
        assert settings.backup_directory == tmp_path / "elsewhere"

    def test_default_configuration_uses_settings(self, session, tmp_path, monkeypatch):
        """Without injected collaborators the configured folder is used."""
        monkeypatch.setattr(
            "swimjournal.infrastructure.backup.service.get_settings",
            lambda: Settings(documents_root=tmp_path),
        )

        path = perform_backup([session], [], ExportFormat.JSON)

        assert path.parent == tmp_path / "SchwimmTagebuchBackups"
        assert path.name.startswith("SchwimmTagebuch-")
