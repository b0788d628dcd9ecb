"""Resume PDF download through the web application's session cookie.

The REST API has no PDF export, so this logs in to the web app with the
user's email and password and fetches the rendered resume like a browser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING

import httpx
import structlog

from cinode_core.exceptions import PdfDownloadError

if TYPE_CHECKING:
    from cinode_core.config.settings import Settings

logger = structlog.get_logger()

LOGIN_PATH = "/_app/login/password"
_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\s]+")


@dataclass
class DownloadResult:
    """Outcome of one resume download."""

    success: bool
    path: Path | None = None
    error: str | None = None


def pdf_filename(username: str, resume_id: int | str) -> str:
    """'Resume-<name>-<resumeId>.pdf' with path-unsafe characters replaced."""
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", username.strip()) or "unknown"
    return f"Resume-{safe_name}-{resume_id}.pdf"


class ResumePdfDownloader:
    """Log in once per instance, then download resume PDFs.

    A failed login is remembered and fails every later download without
    another login attempt.
    """

    def __init__(self, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        """Initialize with settings; http is injectable for tests."""
        self._settings = settings
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        self._cookie: str | None = None
        self._login_error: str | None = None

    async def __aenter__(self) -> ResumePdfDownloader:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def login(self) -> str:
        """Log in to the web app and keep the session cookie."""
        email = self._settings.web_email
        password = self._settings.web_password
        if not email or password is None:
            msg = "EMAIL and PASSWORD must be set to download resume PDFs"
            raise PdfDownloadError(msg)

        url = f"{self._settings.app_url}{LOGIN_PATH}"
        try:
            response = await self._http.post(
                url,
                json={
                    "email": email,
                    "password": password.get_secret_value(),
                    "rememberMe": False,
                    "returnUrl": None,
                },
                headers={"Accept": "application/json, text/plain, */*", "Referer": url},
            )
        except httpx.HTTPError as e:
            msg = f"Login request failed: {e}"
            raise PdfDownloadError(msg) from e

        if not response.is_success:
            msg = f"Login failed with status: {response.status_code}"
            raise PdfDownloadError(msg)

        cookie = "; ".join(f"{name}={value}" for name, value in response.cookies.items())
        if not cookie:
            msg = "No cookie received from server"
            raise PdfDownloadError(msg)

        self._cookie = cookie
        logger.info("web_session_established")
        return cookie

    async def download(self, username: str, resume_id: int | str) -> DownloadResult:
        """Download one resume PDF into download_dir; failures are returned, not raised."""
        if self._login_error is not None:
            return DownloadResult(success=False, error=self._login_error)
        try:
            if self._cookie is None:
                try:
                    await self.login()
                except PdfDownloadError as e:
                    self._login_error = str(e)
                    raise
            path = await self._fetch_pdf(username, resume_id)
        except PdfDownloadError as e:
            logger.warning("resume_pdf_failed", resume_id=resume_id, error=str(e))
            return DownloadResult(success=False, error=str(e))
        return DownloadResult(success=True, path=path)

    async def _fetch_pdf(self, username: str, resume_id: int | str) -> Path:
        app_url = self._settings.app_url
        url = f"{app_url}/resumes/{resume_id}/{self._settings.resume_template}/pdf"
        slug = self._settings.company_slug
        referer = f"{app_url}/{slug}/resumes" if slug else f"{app_url}/resumes"
        try:
            response = await self._http.get(
                url,
                headers={
                    "Accept": "application/json, text/plain, */*",
                    "Cache-Control": "no-cache",
                    "Cookie": self._cookie or "",
                    "Referer": referer,
                },
            )
        except httpx.HTTPError as e:
            msg = f"PDF download failed: {e}"
            raise PdfDownloadError(msg) from e

        if not response.is_success:
            msg = f"Failed to download PDF: {response.status_code} {response.reason_phrase}"
            raise PdfDownloadError(msg)

        download_dir = self._settings.download_dir
        path = download_dir / pdf_filename(username, resume_id)
        try:
            download_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(response.content)
        except OSError as e:
            msg = f"Could not write {path}: {e}"
            raise PdfDownloadError(msg) from e

        logger.info("resume_pdf_downloaded", path=str(path), bytes=len(response.content))
        return path
