"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_TOKEN = "test-token-for-development"

_LOG_LEVEL_ALIASES = {"WARN": "WARNING"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Central settings pulled from .env / environment.

    Validated once at startup and frozen afterwards; components receive
    the instance explicitly instead of reaching for the module global.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # App
    app_env: str = "development"
    log_level: str = Field("INFO", validate_default=True)

    # Serpstat API
    serpstat_api_token: str = Field("", validate_default=True)
    """Static API token, attached to every request as the ``token`` query parameter."""

    serpstat_api_url: str = "https://api.serpstat.com/v4"

    # Request client
    max_retries: int = Field(1, ge=0)
    """Extra attempts after a transient failure; total attempts = max_retries + 1."""

    request_timeout: float = Field(30.0, gt=0)
    retry_delay_seconds: float = Field(1.0, ge=0)

    # MCP
    mcp_server_name: str = "serpstat-mcp-server"
    mcp_server_version: str = "1.0.0"

    disabled_tool_categories: str = ""
    """Comma-separated tool categories to leave out of the registry (e.g. ``site_audit,page_audit``)."""

    # SSE transport
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 8000

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("serpstat_api_token")
    @classmethod
    def _require_token_in_production(cls, value: str, info: ValidationInfo) -> str:
        if value:
            return value
        if info.data.get("app_env") == "production":
            raise ValueError("SERPSTAT_API_TOKEN environment variable is required in production")
        return DEVELOPMENT_TOKEN

    @property
    def disabled_categories(self) -> frozenset[str]:
        return frozenset(
            part.strip().lower() for part in self.disabled_tool_categories.split(",") if part.strip()
        )


settings = Settings()
