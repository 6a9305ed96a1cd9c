"""Provider configuration for playiam.

Pydantic-validated settings for the Google Play provider. All code
receives a ProviderConfig; the environment is read in exactly one place,
:func:`load_config_from_env`.

Authentication is supplied from outside: either an ``access_token`` that
is sent as a bearer token, or an already-authorized ``httpx.AsyncClient``
handed to the provider directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator

from .exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "https://androidpublisher.googleapis.com/androidpublisher/v3/"


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ProviderConfig(BaseModel):
    """Settings shared by every resource and data source of the provider.

    Environment variables:
        GOOGLEPLAY_DEVELOPER_ID      — numeric developer account id
        GOOGLEPLAY_ACCESS_TOKEN      — OAuth access token (bearer)
        GOOGLEPLAY_API_URL           — API base URL override
        GOOGLEPLAY_TIMEOUT_SECONDS   — per-request timeout
        GOOGLEPLAY_PAGE_SIZE         — users per page when listing
        LOG_LEVEL / LOG_JSON         — logging
    """

    developer_id: str = Field(
        description="Google Play developer account id (digits only)",
    )
    access_token: Optional[SecretStr] = Field(
        default=None,
        description="OAuth 2.0 access token sent as 'Authorization: Bearer'",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the Google Play Developer API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Users requested per page when listing",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    @field_validator("developer_id")
    @classmethod
    def validate_developer_id(cls, v: str) -> str:
        """Developer ids are decimal strings."""
        v = v.strip()
        if not v.isdigit():
            raise ValueError(f"Developer id must contain only digits, got {v!r}")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate URL scheme and normalize the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v if v.endswith("/") else v + "/"

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "extra": "forbid",  # Prevent accidental extra fields
    }


def _env_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def load_config_from_env() -> ProviderConfig:
    """Load provider configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Returns:
        ProviderConfig instance with values from environment or defaults.

    Raises:
        ConfigurationError: a variable is missing or invalid.
    """
    import os

    developer_id = os.getenv("GOOGLEPLAY_DEVELOPER_ID")
    if not developer_id:
        raise ConfigurationError("GOOGLEPLAY_DEVELOPER_ID is not set", variable="GOOGLEPLAY_DEVELOPER_ID")

    try:
        return ProviderConfig(
            developer_id=developer_id,
            access_token=os.getenv("GOOGLEPLAY_ACCESS_TOKEN") or None,
            api_base_url=os.getenv("GOOGLEPLAY_API_URL", DEFAULT_API_BASE_URL),
            timeout_seconds=os.getenv("GOOGLEPLAY_TIMEOUT_SECONDS", "30"),
            page_size=os.getenv("GOOGLEPLAY_PAGE_SIZE", "100"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_env_bool(os.getenv("LOG_JSON", "false")),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid provider configuration: {e}") from e


__all__ = [
    "DEFAULT_API_BASE_URL",
    "LogLevel",
    "ProviderConfig",
    "load_config_from_env",
]
