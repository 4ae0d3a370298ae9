"""
Video URL endpoint.

GET /api/video-url?key=face-yoga/lesson-01-introduction-guide.mp4

The frontend asks for a URL right before playback and hands it straight
to the <video> element. Errors are raised as VideoURLError subclasses
and rendered by the handler registered in create_app().
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from ..dependencies import VideoURLServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class VideoURLResponse(BaseModel):
    """Signed URL for the requested video."""
    url: str = Field(description="Presigned GET URL, valid for 10 minutes")


class ErrorResponse(BaseModel):
    """Error body returned for 400 and 500 responses."""
    error: str
    detail: Optional[str] = None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/video-url",
    response_model=VideoURLResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a signed video URL",
    description="Returns a presigned download URL for the video object named by `key`.",
    responses={
        400: {"description": "Missing video key", "model": ErrorResponse},
        500: {"description": "Signing failed", "model": ErrorResponse},
    },
)
async def get_video_url(
    service: VideoURLServiceDep,
    key: Optional[str] = Query(
        default=None,
        description="Object key within the bucket, e.g. face-yoga/lesson-01-introduction-guide.mp4",
    ),
) -> VideoURLResponse:
    """
    Issue a signed URL for one video.

    The key is optional at the FastAPI level so that a missing key gets
    our own 400 body instead of the framework's 422.
    """
    signed = await service.issue_signed_url(key)
    return VideoURLResponse(url=signed.url)
