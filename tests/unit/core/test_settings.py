"""Tests for Settings configuration."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cinode_core.config.settings import Settings


def _base_env() -> dict[str, str]:
    """Return minimum required env vars for Settings."""
    return {
        "CINODE_APP_ID": "app",
        "CINODE_APP_SECRET": "secret",
        "CINODE_COMPANY_ID": "42",
    }


@pytest.mark.unit
class TestSettings:
    """Test Settings validation and defaults."""

    def test_default_settings(self) -> None:
        """Settings loads with required keys and correct defaults."""
        with patch.dict(os.environ, _base_env(), clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.token_endpoint == "https://api.cinode.com/token"
        assert s.api_endpoint == "https://api.cinode.com/v0.1"
        assert s.api_delay_ms == 1000
        assert s.event_delay_ms == 100
        assert s.pdf_delay_ms == 3000
        assert s.store_backend == "json"
        assert s.resume_template == "teamit-cv"
        assert s.web_email is None

    def test_secret_is_masked(self) -> None:
        """The app secret does not leak through repr."""
        with patch.dict(os.environ, _base_env(), clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert "secret" not in repr(s.app_secret)
        assert s.app_secret.get_secret_value() == "secret"

    def test_missing_credentials_raise(self) -> None:
        """Missing app id, secret and company id fail validation."""
        with patch.dict(os.environ, {}, clear=True), pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_unprefixed_delay_and_web_login(self) -> None:
        """API_DELAY_MS, EMAIL and PASSWORD are read without the prefix."""
        env = {**_base_env(), "API_DELAY_MS": "250", "EMAIL": "me@x.se", "PASSWORD": "pw"}
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.api_delay_ms == 250
        assert s.web_email == "me@x.se"
        assert s.web_password is not None
        assert s.web_password.get_secret_value() == "pw"

    def test_trailing_slash_stripped(self) -> None:
        """Base URLs lose trailing slashes."""
        env = {**_base_env(), "CINODE_API_ENDPOINT": "https://api.example.com/v0.1/"}
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.api_endpoint == "https://api.example.com/v0.1"

    def test_negative_delay_rejected(self) -> None:
        """Negative delays fail validation."""
        env = {**_base_env(), "CINODE_EVENT_DELAY_MS": "-1"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_invalid_store_backend(self) -> None:
        """Unknown store backend fails validation."""
        env = {**_base_env(), "CINODE_STORE_BACKEND": "redis"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_reads_env_file(self, tmp_path: Path) -> None:
        """Values in a .env file are picked up."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "CINODE_APP_ID=file-app\nCINODE_APP_SECRET=s\nCINODE_COMPANY_ID=7\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=env_file)  # type: ignore[call-arg]
        assert s.app_id == "file-app"
        assert s.company_id == "7"
