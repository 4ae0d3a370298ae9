"""
Domain models for signed video URLs.

Nothing here is persisted. A SignedURL is produced per request and
discarded once the response has been sent.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


# Ten minutes.
SIGNED_URL_EXPIRY_SECONDS = 600


@dataclass(frozen=True)
class SignedURL:
    """
    A time-limited download URL for one object.

    Frozen because it is a value: the URL and its expiry are fixed the
    moment it is signed.
    """
    key: str
    url: str
    issued_at: datetime
    expires_in: int = SIGNED_URL_EXPIRY_SECONDS

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Signed URL requires an object key")
        if self.expires_in <= 0:
            raise ValueError("Expiry must be positive")

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expires_in)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class VideoURLError(Exception):
    """
    Base class for errors reported to API clients.

    Carries the HTTP status and the client-facing message so the API
    layer can render every subclass the same way.
    """
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class InvalidRequest(VideoURLError):
    """The request is missing the object key."""
    status_code = 400


class SigningFailure(VideoURLError):
    """The storage backend could not produce a signed URL."""
    status_code = 500
