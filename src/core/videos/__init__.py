"""
Signed video URL issuance.

Contains the URL service, its value types and the errors it reports.
"""

from .models import (
    SIGNED_URL_EXPIRY_SECONDS,
    InvalidRequest,
    SignedURL,
    SigningFailure,
    VideoURLError,
)
from .service import URLSigner, VideoURLService

__all__ = [
    "SIGNED_URL_EXPIRY_SECONDS",
    "InvalidRequest",
    "SignedURL",
    "SigningFailure",
    "VideoURLError",
    "URLSigner",
    "VideoURLService",
]
