"""Custom exception hierarchy for cinode-sync."""

from __future__ import annotations


class CinodeError(Exception):
    """Base exception for all cinode-sync errors."""


class AuthenticationError(CinodeError):
    """Raised when fetching or refreshing an access token fails."""


class TokenDecodeError(CinodeError):
    """Raised when an access token payload cannot be decoded."""


class TransportError(CinodeError):
    """Raised when the vendor API cannot be reached (DNS, connect, timeout)."""


class HttpStatusError(CinodeError):
    """Raised when the vendor API answers with a non-2xx status."""

    def __init__(self, status_code: int, url: str = "") -> None:
        """Store the status code and build the error message."""
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error! status: {status_code}")


class EmptyResponseError(CinodeError):
    """Raised when a 2xx response carries no usable body."""


class MalformedPayloadError(CinodeError):
    """Raised when a 2xx body does not have the expected shape."""


class SnapshotStoreError(CinodeError):
    """Raised when the local snapshot store cannot be read or written."""


class ExportError(CinodeError):
    """Raised when writing an export file fails."""


class PdfDownloadError(CinodeError):
    """Raised when logging in to the web app or fetching a resume PDF fails."""
