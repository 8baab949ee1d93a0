"""Configuration management for the Library API.

Settings are read from ``LIBRARY_API_*`` environment variables or a ``.env``
file and validated with Pydantic v2.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SQLITE_PREFIX = "sqlite:///"


class ServerConfig(BaseSettings):
    """Library API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LIBRARY_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Database Configuration ===

    database_url: str = Field(
        default=f"{SQLITE_PREFIX}data/library.db",
        description="SQLAlchemy connection string for the book catalog",
    )

    # === HTTP Configuration ===

    host: str = Field(
        default="127.0.0.1",
        description="Interface the HTTP server binds to",
    )

    port: int = Field(
        default=8000,
        description="Port the HTTP server listens on",
        ge=1,
        le=65535,
    )

    # === Security Configuration ===

    api_key: str | None = Field(
        default=None,
        description="Value expected in the Authorization header; auth is off when unset",
        repr=False,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Observability ===

    logfire_enabled: bool = Field(
        default=False,
        description="Instrument the HTTP app with Logfire",
    )

    logfire_token: str | None = Field(
        default=None,
        description="Logfire write token; spans stay local when unset",
        repr=False,
    )

    environment: str = Field(
        default="development",
        description="Deployment environment reported to Logfire",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Reject blank connection strings."""
        v = v.strip()
        if not v:
            raise ValueError("database_url must not be empty")
        return v

    # === Computed Properties ===

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level

    @property
    def sqlite_path(self) -> Path | None:
        """Filesystem path of a file-backed SQLite database, else None."""
        if not self.database_url.startswith(SQLITE_PREFIX):
            return None
        raw = self.database_url[len(SQLITE_PREFIX) :].split("?", 1)[0]
        if not raw or raw == ":memory:" or raw.startswith("file:"):
            return None
        return Path(raw)


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = ServerConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
