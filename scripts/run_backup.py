#!/usr/bin/env python3
"""
Write a journal backup from a JSON snapshot on disk.

The snapshot has the shape {"sessions": [...], "competitions": [...]}
(see swimjournal.core.journal.snapshot). The backup lands in the configured
backups folder unless --output-dir is given.

Usage:
    python scripts/run_backup.py journal.json --format zipBundle
    python scripts/run_backup.py journal.json --share --output-dir ./export

Requires:
    - .env file (optional) with BACKUP_DIR / DOCUMENTS_ROOT overrides
"""

import sys
from pathlib import Path

# Add the project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables
load_dotenv()

from swimjournal.config.settings import get_settings
from swimjournal.core.journal.snapshot import JournalSnapshot
from swimjournal.infrastructure.backup.service import (
    BackupConfiguration,
    ExportFormat,
    NoDataError,
    export_files,
    perform_backup,
)


def load_snapshot(filepath: Path) -> JournalSnapshot:
    """Read and validate a journal snapshot."""
    with open(filepath, 'r', encoding='utf-8') as f:
        return JournalSnapshot.model_validate_json(f.read())


def main():
    import argparse

    settings = get_settings()

    parser = argparse.ArgumentParser(description='Back up a swim journal snapshot')
    parser.add_argument('snapshot', help='Journal snapshot JSON file')
    parser.add_argument(
        '--format',
        default=settings.default_export_format,
        choices=[fmt.value for fmt in ExportFormat],
        help='Backup format',
    )
    parser.add_argument('--output-dir', help='Write here instead of the backups folder')
    parser.add_argument(
        '--share',
        action='store_true',
        help='Write training.csv, wettkaempfe.csv and export.json as loose files',
    )
    args = parser.parse_args()

    filepath = Path(args.snapshot)
    if not filepath.exists():
        print(f"ERROR: Cannot find {args.snapshot}")
        sys.exit(1)

    try:
        snapshot = load_snapshot(filepath)
    except ValidationError as e:
        print(f"ERROR: Invalid snapshot: {e}")
        sys.exit(1)

    sessions, competitions = snapshot.to_domain()
    print(f"Loaded {len(sessions)} sessions and {len(competitions)} competitions")

    output_dir = Path(args.output_dir) if args.output_dir else settings.backup_directory

    if args.share:
        for path in export_files(sessions, competitions, output_dir):
            print(f"[OK] {path}")
        sys.exit(0)

    configuration = BackupConfiguration(
        directory_provider=lambda: output_dir,
        app_name=settings.app_name,
    )

    try:
        path = perform_backup(sessions, competitions, ExportFormat(args.format), configuration)
    except NoDataError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"[OK] Backup written: {path}")
    sys.exit(0)


if __name__ == '__main__':
    main()
