"""
Signed URL issuance for course videos.

This is the only request-path logic in the application: validate the
key, ask the signer for a ten-minute GET URL, and translate whatever
goes wrong into an error the API layer knows how to render.

There is deliberately no purchase/entitlement check yet. Anyone who
knows a key can get a URL for it.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol

from .models import (
    SIGNED_URL_EXPIRY_SECONDS,
    InvalidRequest,
    SignedURL,
    SigningFailure,
)

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Video key is required"
SIGNING_FAILED_MESSAGE = "Failed to generate video URL"


class URLSigner(Protocol):
    """
    Anything that can presign a GET for an object key.

    The S3 storage client satisfies this, as do test fakes.
    """

    async def get_presigned_url(
        self,
        storage_path: str,
        expiry_seconds: int = SIGNED_URL_EXPIRY_SECONDS,
    ) -> str:
        ...


class VideoURLService:
    """
    Issues signed download URLs.

    Stateless: the signer and its bucket are fixed at construction and
    every call is independent, so one instance can serve concurrent
    requests.
    """

    def __init__(self, signer: URLSigner) -> None:
        self._signer = signer

    async def issue_signed_url(self, key: Optional[str]) -> SignedURL:
        """
        Sign a GET URL for `key`, valid for SIGNED_URL_EXPIRY_SECONDS.

        Raises:
            InvalidRequest: key is missing or empty. The signer is not called.
            SigningFailure: the signer raised; the message is kept as detail.
        """
        if not key:
            raise InvalidRequest(MISSING_KEY_MESSAGE)

        # Purchase check goes here once users and orders exist.

        issued_at = datetime.now(timezone.utc)
        try:
            url = await self._signer.get_presigned_url(
                key,
                expiry_seconds=SIGNED_URL_EXPIRY_SECONDS,
            )
        except Exception as e:
            logger.error(
                "Signed URL error",
                extra={"key": key, "error": str(e)},
                exc_info=e,
            )
            raise SigningFailure(SIGNING_FAILED_MESSAGE, detail=str(e)) from e

        logger.debug("Issued signed URL", extra={"key": key})

        return SignedURL(
            key=key,
            url=url,
            issued_at=issued_at,
            expires_in=SIGNED_URL_EXPIRY_SECONDS,
        )
