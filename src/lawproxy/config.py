"""
Proxy configuration and environment settings.
"""

import logging
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ConfigurationError(RuntimeError):
    """Raised when the process cannot run with the given configuration."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Server settings
    app_name: str = "Law Proxy API"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # CORS settings
    cors_origins: list[str] = ["*"]

    # Shared upstream credential (required)
    oc: str = Field(..., description="law.go.kr OC credential")

    # Upstream settings
    upstream_base_url: str = "http://www.law.go.kr/DRF"
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)
    upstream_max_retries: int = Field(default=1, ge=0, le=3)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    display_count: int = 100
    precedent_org_code: str = "400201"

    # Echo service returning our public IP, used in auth-failure diagnostics
    outbound_ip_echo_url: str | None = None

    @field_validator("oc")
    @classmethod
    def _require_credential(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("OC must not be blank")
        return value

    @property
    def credential_configured(self) -> bool:
        return bool(self.oc)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def load_settings() -> Settings:
    """
    Load settings or terminate the process.

    A missing or blank OC is fatal: the server must never bind a port
    without a credential to inject.
    """
    try:
        return get_settings()
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        logger.error(f"Error: invalid configuration ({', '.join(missing)}); is the OC environment variable set?")
        raise SystemExit(1) from e
