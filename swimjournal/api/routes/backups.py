"""
Backup endpoint.

Runs the backup orchestrator against the configured backups folder and
reports where the artifact was written.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from ...core.journal.snapshot import JournalSnapshot
from ...infrastructure.backup.service import ExportFormat, NoDataError, perform_backup
from ..dependencies import AuthenticatedUser, BackupConfigurationDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()


class BackupResponse(BaseModel):
    """Where the backup went."""
    path: str = Field(description="Absolute path of the written artifact")
    file_name: str = Field(description="File name of the artifact")
    format: str = Field(description="Format the backup was written in")


@router.post(
    "",
    response_model=BackupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Write a backup",
    description="Encode the journal and write a timestamped artifact into the backups folder",
    responses={422: {"description": "Snapshot contains no sessions and no competitions"}},
)
async def create_backup(
    snapshot: JournalSnapshot,
    settings: SettingsDep,
    configuration: BackupConfigurationDep,
    format: Optional[ExportFormat] = Query(default=None, description="json, csv or zipBundle"),
    api_key: AuthenticatedUser = None,
) -> BackupResponse:
    """
    Write one backup artifact.

    Without a ``format`` query parameter the configured default is used.
    File system errors surface as 500 responses; nothing is left behind.
    """
    fmt = format or ExportFormat(settings.default_export_format)
    sessions, competitions = snapshot.to_domain()

    try:
        path = perform_backup(sessions, competitions, fmt, configuration)
    except NoDataError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except OSError as e:
        logger.error(
            "Backup failed",
            extra={"format": fmt.value, "error": str(e)}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Backup failed: {e}",
        )

    return BackupResponse(path=str(path), file_name=path.name, format=fmt.value)
