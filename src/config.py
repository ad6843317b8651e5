"""Application configuration via pydantic-settings.

All values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ViesSettings(BaseSettings):
    """EU VIES registry endpoint and call budget."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    vies_url: str = Field(
        default="https://ec.europa.eu/taxation_customs/vies/services/checkVatService",
        description="SOAP endpoint of the VIES checkVat service",
    )
    vies_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Wall-clock budget in seconds for a single registry call",
    )
    vies_connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="TCP connect timeout in seconds for the shared HTTP client",
    )


class ServerSettings(BaseSettings):
    """HTTP listener settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    service_host: str = Field(default="0.0.0.0", description="Bind address")
    service_port: int = Field(default=3000, description="Listen port (SERVICE_PORT)")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.vies.vies_url
        settings.server.service_port
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Composed settings (loaded from same .env)
    vies: ViesSettings = Field(default_factory=ViesSettings)
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
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton — import this wherever settings are needed.
settings = Settings()
