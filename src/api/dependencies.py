"""
FastAPI dependency injection.

Dependencies provide the settings, storage client and URL service to
route handlers. Everything comes from app.state, which create_app()
fills once at startup, so routes never read the environment and tests
can swap any piece through app.dependency_overrides.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from ..config.settings import Settings
from ..core.videos import VideoURLService
from ..infrastructure.datastore import DatastoreConnection
from ..infrastructure.storage.client import StorageClient

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_storage_client(request: Request) -> StorageClient:
    """
    Provide the storage client built at startup.

    One client per process: its configuration is immutable and boto3
    clients are safe to share between requests.
    """
    return request.app.state.storage_client


def get_video_url_service(
    storage_client: Annotated[StorageClient, Depends(get_storage_client)],
) -> VideoURLService:
    """
    Provide VideoURLService bound to the storage client.

    The service is stateless, so we create a new instance per request.
    """
    return VideoURLService(signer=storage_client)


def get_datastore(request: Request) -> DatastoreConnection:
    """Optional MongoDB connection. Only the readiness check looks at it."""
    return request.app.state.datastore


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
VideoURLServiceDep = Annotated[VideoURLService, Depends(get_video_url_service)]
DatastoreDep = Annotated[DatastoreConnection, Depends(get_datastore)]
