"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WHATSAPP_API_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are frozen: they are read once at startup and passed to the
    components that need them.
    """

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # WhatsApp Configuration
    whatsapp_webhook_verify_token: str = Field(
        ..., min_length=1, description="Shared secret for the webhook handshake"
    )
    meta_access_token: str = Field(
        ..., min_length=1, description="Meta access token for the Cloud API"
    )
    whatsapp_phone_number_id: str = Field(
        ..., min_length=1, description="Sending phone number ID"
    )

    graph_api_base_url: str = Field(
        default=GRAPH_API_BASE_URL, description="Graph API host"
    )
    graph_api_version: str = Field(
        default=GRAPH_API_VERSION, description="Graph API version, e.g. v19.0"
    )
    whatsapp_api_timeout_seconds: float = Field(
        default=WHATSAPP_API_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for WhatsApp Cloud API calls (seconds)",
    )

    # Server
    host: str = Field(default=DEFAULT_HOST, description="Interface to bind")
    port: int = Field(
        default=DEFAULT_PORT, ge=1, le=65535, description="Port to listen on"
    )

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Sentry traces sample rate"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token (optional)"
    )

    @property
    def messages_url(self) -> str:
        """Cloud API endpoint for sending messages from this phone number."""
        return (
            f"{self.graph_api_base_url.rstrip('/')}/{self.graph_api_version}"
            f"/{self.whatsapp_phone_number_id}/messages"
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
