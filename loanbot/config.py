"""Application configuration via pydantic-settings.

Values come from environment variables (or a .env file). Settings are
organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Where the offer catalog and the answer vocabulary live."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    offers_path: Path = Field(
        default=Path("bank_offers.json"),
        description="JSON array of offer records, loaded once at startup",
    )
    vocabulary_path: Path | None = Field(
        default=None,
        description="Optional JSON vocabulary replacing the built-in Russian/English tables",
    )


class ServerSettings(BaseSettings):
    """HTTP listener and static hosting."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, description="Read from PORT")
    static_dir: Path = Field(
        default=Path("public"),
        description="Served at / when the directory exists",
    )


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.catalog.offers_path
        settings.server.port
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton, import wherever settings are needed.
settings = Settings()
