"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables with sensible defaults.
Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing with different configurations
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For lists (like api_keys), use comma-separated values in env.
    """

    # Journal
    app_name: str = Field(
        default="SchwimmTagebuch",
        description="Prefix for backup file names and stem of the backups folder name."
    )

    # Backups
    documents_root: Path = Field(
        default_factory=lambda: Path.home() / "Documents",
        description="Platform documents folder. Backups live one level below it."
    )
    backup_dir: Optional[Path] = Field(
        default=None,
        description="Explicit backup directory. Overrides <documents_root>/<app_name>Backups."
    )
    default_export_format: str = Field(
        default="json",
        description="Format used when a backup request doesn't name one (json, csv, zipBundle)."
    )

    # API Configuration
    api_title: str = "SwimJournal Export API"
    api_version: str = "v1"
    api_keys: str = Field(
        default="dev-key-1,dev-key-2",
        description="Comma-separated API keys. Using a list enables key rotation without downtime."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins. Use * for development only."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def backup_directory(self) -> Path:
        """Where backups are written, e.g. ~/Documents/SchwimmTagebuchBackups."""
        if self.backup_dir is not None:
            return self.backup_dir.expanduser()
        return self.documents_root.expanduser() / f"{self.app_name}Backups"

    @property
    def api_keys_list(self) -> list[str]:
        """Parse comma-separated API keys into a list."""
        return [key.strip() for key in self.api_keys.split(",") if key.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once per process.
    For tests, call get_settings.cache_clear() to reset.
    """
    return Settings()
