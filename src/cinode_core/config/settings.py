"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for cinode-sync."""

    model_config = SettingsConfigDict(
        env_prefix="CINODE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # --- Credentials ---
    app_id: str = Field(description="Cinode API application id")
    app_secret: SecretStr = Field(description="Cinode API application secret")
    company_id: str = Field(description="Cinode company id all requests are scoped to")

    # --- Endpoints ---
    token_endpoint: str = Field(
        default="https://api.cinode.com/token",
        description="Token endpoint; '/refresh' is appended for refreshes",
    )
    api_endpoint: str = Field(
        default="https://api.cinode.com/v0.1",
        description="Base URL of the REST API",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout per HTTP request in seconds",
    )

    # --- Pacing ---
    api_delay_ms: int = Field(
        default=1000,
        validation_alias=AliasChoices("API_DELAY_MS", "CINODE_API_DELAY_MS"),
        description="Minimum interval between per-item requests in milliseconds",
    )
    event_delay_ms: int = Field(
        default=100,
        description="Minimum interval between candidate event requests in milliseconds",
    )
    pdf_delay_ms: int = Field(
        default=3000,
        description="Pause between resume PDF downloads in milliseconds",
    )

    # --- Storage ---
    store_backend: Literal["json", "disk"] = Field(
        default="json",
        description="Snapshot store: 'json' for a flat file, 'disk' for diskcache",
    )
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory holding the snapshot store",
    )

    # --- Output ---
    export_path: Path = Field(
        default=Path("./candidates.xlsx"),
        description="Excel file written by the candidate export",
    )
    download_dir: Path = Field(
        default=Path("./downloads"),
        description="Directory for downloaded resume PDFs",
    )

    # --- Web app (PDF download) ---
    app_url: str = Field(
        default="https://app.cinode.com",
        description="Base URL of the Cinode web application",
    )
    company_slug: str = Field(
        default="",
        description="Company path segment used in the web app referer",
    )
    resume_template: str = Field(
        default="teamit-cv",
        description="Resume template slug used for public URLs and PDF export",
    )
    web_email: str | None = Field(
        default=None,
        validation_alias=AliasChoices("EMAIL", "CINODE_WEB_EMAIL"),
        description="Web app login email (PDF download only)",
    )
    web_password: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("PASSWORD", "CINODE_WEB_PASSWORD"),
        description="Web app login password (PDF download only)",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for machines",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file that receives JSON log lines",
    )

    @field_validator("token_endpoint", "api_endpoint", "app_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize base URLs so path joins never produce '//'."""
        return value.rstrip("/")

    @field_validator("api_delay_ms", "event_delay_ms", "pdf_delay_ms")
    @classmethod
    def validate_delay(cls, value: int) -> int:
        """Reject negative delays."""
        if value < 0:
            msg = f"delay must be >= 0 ms, got {value}"
            raise ValueError(msg)
        return value
