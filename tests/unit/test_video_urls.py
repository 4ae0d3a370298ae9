"""
Unit tests for signed URL issuance.

These tests verify the service logic without touching S3: the signer is
a small fake that records what it was asked to sign.

Testing philosophy:
- Test behavior, not implementation
- Each test should have a clear "given/when/then" structure
- Prefer real objects over mocks where practical
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from src.core.videos import (
    SIGNED_URL_EXPIRY_SECONDS,
    InvalidRequest,
    SignedURL,
    SigningFailure,
    VideoURLService,
)


class RecordingSigner:
    """Signer fake that remembers every key it signed."""

    def __init__(self, bucket: str = "eastculture-video-nz") -> None:
        self.bucket = bucket
        self.calls: list[tuple[str, int]] = []

    async def get_presigned_url(self, storage_path: str, expiry_seconds: int = 600) -> str:
        self.calls.append((storage_path, expiry_seconds))
        return f"https://{self.bucket}.s3.amazonaws.com/{storage_path}?X-Amz-Expires={expiry_seconds}"


class FailingSigner:
    """Signer fake that always raises."""

    def __init__(self, message: str) -> None:
        self.message = message

    async def get_presigned_url(self, storage_path: str, expiry_seconds: int = 600) -> str:
        raise RuntimeError(self.message)


# ---------------------------------------------------------------------------
# SignedURL Tests
# ---------------------------------------------------------------------------

class TestSignedURL:
    """Tests for the SignedURL value object."""

    def test_expires_ten_minutes_after_issue(self):
        """Expiry is derived from the issue time and the fixed window."""
        issued = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        signed = SignedURL(key="a.mp4", url="https://x/a.mp4", issued_at=issued)

        assert signed.expires_in == 600
        assert signed.expires_at == issued + timedelta(minutes=10)

    def test_rejects_empty_key(self):
        with pytest.raises(ValueError, match="object key"):
            SignedURL(key="", url="https://x", issued_at=datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# VideoURLService Tests
# ---------------------------------------------------------------------------

class TestVideoURLService:
    """Tests for VideoURLService.issue_signed_url."""

    def test_signs_requested_key_for_ten_minutes(self):
        """The signer receives the key unchanged and a 600 second window."""
        signer = RecordingSigner()
        service = VideoURLService(signer=signer)
        key = "face-yoga/lesson-01-introduction-guide.mp4"

        before = datetime.now(timezone.utc)
        signed = asyncio.run(service.issue_signed_url(key))
        after = datetime.now(timezone.utc)

        assert signer.calls == [(key, SIGNED_URL_EXPIRY_SECONDS)]
        assert signed.key == key
        assert "eastculture-video-nz" in signed.url
        assert key in signed.url
        assert before + timedelta(seconds=600) <= signed.expires_at <= after + timedelta(seconds=600)

    @pytest.mark.parametrize("key", ["", None])
    def test_missing_key_is_invalid_request(self, key):
        """Empty and absent keys fail before the signer is called."""
        signer = RecordingSigner()
        service = VideoURLService(signer=signer)

        with pytest.raises(InvalidRequest) as exc_info:
            asyncio.run(service.issue_signed_url(key))

        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {"error": "Video key is required"}
        assert signer.calls == []

    def test_signer_error_becomes_signing_failure(self):
        """The underlying message is kept as detail."""
        service = VideoURLService(signer=FailingSigner("InvalidAccessKeyId"))

        with pytest.raises(SigningFailure) as exc_info:
            asyncio.run(service.issue_signed_url("lesson.mp4"))

        error = exc_info.value
        assert error.status_code == 500
        assert error.to_dict() == {
            "error": "Failed to generate video URL",
            "detail": "InvalidAccessKeyId",
        }
        assert isinstance(error.__cause__, RuntimeError)

    def test_keys_are_not_validated_beyond_presence(self):
        """Odd but non-empty keys go straight to the signer."""
        signer = RecordingSigner()
        service = VideoURLService(signer=signer)

        asyncio.run(service.issue_signed_url("../weird key ü.mp4"))

        assert signer.calls[0][0] == "../weird key ü.mp4"
