"""
FastAPI dependency injection.

Dependencies provide configuration and the backup configuration to route
handlers. Tests override them through ``app.dependency_overrides``.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from ..config.settings import Settings, get_settings
from ..infrastructure.backup.service import BackupConfiguration

logger = logging.getLogger(__name__)

# API Key security scheme
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

async def verify_api_key(
    settings: Annotated[Settings, Depends(get_settings)],
    api_key: str = Security(api_key_header),
) -> str:
    """
    Validate API key from request header.

    Raises 403 if key is invalid or missing.
    """
    if not api_key:
        logger.warning("Request missing API key")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="API key required. Provide X-API-Key header.",
        )

    if api_key not in settings.api_keys_list:
        logger.warning(
            "Invalid API key attempt",
            extra={"key_prefix": api_key[:8]}
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
        )

    return api_key


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_backup_configuration(
    settings: Annotated[Settings, Depends(get_settings)],
) -> BackupConfiguration:
    """
    Provide the backup configuration for the configured backups folder.

    Uses the wall clock; tests override this dependency with a fixed clock
    and a temporary directory.
    """
    return BackupConfiguration(
        directory_provider=lambda: settings.backup_directory,
        app_name=settings.app_name,
    )


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

AuthenticatedUser = Annotated[str, Depends(verify_api_key)]
BackupConfigurationDep = Annotated[BackupConfiguration, Depends(get_backup_configuration)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
