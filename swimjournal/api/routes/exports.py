"""
Export download endpoints.

Each endpoint takes a journal snapshot in the request body and returns one
encoded artifact directly, without writing anything to disk:

- training.csv      one row per session
- competitions.csv  one row per race result
- export.json       the combined JSON document
- bundle.zip        all three in a store-only ZIP
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...core.export import competition_csv, export_json, training_csv
from ...core.journal.snapshot import JournalSnapshot
from ...infrastructure.archive.zip_writer import build_archive
from ...infrastructure.backup.service import NoDataError, bundle_entries
from ..dependencies import AuthenticatedUser

logger = logging.getLogger(__name__)

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
JSON_MEDIA_TYPE = "application/json"
ZIP_MEDIA_TYPE = "application/zip"


def _attachment(file_name: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{file_name}"'}


@router.post(
    "/training.csv",
    summary="Export trainings as CSV",
    response_class=Response,
)
async def export_training_csv(
    snapshot: JournalSnapshot,
    api_key: AuthenticatedUser = None,
) -> Response:
    sessions, _ = snapshot.to_domain()
    logger.info("Exporting training CSV", extra={"sessions": len(sessions)})

    return Response(
        content=training_csv(sessions).encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment("training.csv"),
    )


@router.post(
    "/competitions.csv",
    summary="Export competitions as CSV",
    response_class=Response,
)
async def export_competition_csv(
    snapshot: JournalSnapshot,
    api_key: AuthenticatedUser = None,
) -> Response:
    _, competitions = snapshot.to_domain()
    logger.info("Exporting competition CSV", extra={"competitions": len(competitions)})

    return Response(
        content=competition_csv(competitions).encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment("wettkaempfe.csv"),
    )


@router.post(
    "/export.json",
    summary="Export the whole journal as JSON",
    response_class=Response,
)
async def export_document(
    snapshot: JournalSnapshot,
    api_key: AuthenticatedUser = None,
) -> Response:
    sessions, competitions = snapshot.to_domain()

    return Response(
        content=export_json(sessions, competitions).encode("utf-8"),
        media_type=JSON_MEDIA_TYPE,
        headers=_attachment("export.json"),
    )


@router.post(
    "/bundle.zip",
    summary="Export CSV and JSON files in one ZIP",
    response_class=Response,
    responses={422: {"description": "Snapshot contains no sessions and no competitions"}},
)
async def export_bundle(
    snapshot: JournalSnapshot,
    api_key: AuthenticatedUser = None,
) -> Response:
    """
    Bundle training.csv, wettkaempfe.csv and export.json.

    An empty journal is rejected, matching the backup behaviour.
    """
    sessions, competitions = snapshot.to_domain()

    if not sessions and not competitions:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(NoDataError()),
        )

    archive = build_archive(bundle_entries(sessions, competitions))

    logger.info(
        "Exporting ZIP bundle",
        extra={
            "sessions": len(sessions),
            "competitions": len(competitions),
            "size_bytes": len(archive),
        }
    )

    return Response(
        content=archive,
        media_type=ZIP_MEDIA_TYPE,
        headers=_attachment("export.zip"),
    )
