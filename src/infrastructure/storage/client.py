"""
Object storage client for signing video download URLs.

Supports AWS S3 and S3-compatible stores (MinIO, R2) through boto3, with
a mock mode for local development.

The client only signs. Signing a GET URL is a local computation over the
credentials, so a bad key pair or region is not detected here; S3 rejects
the URL when the browser uses it.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when storage operations fail."""
    pass


@dataclass(frozen=True)
class StorageConfig:
    """
    Configuration for S3-compatible storage.

    Frozen because it is built once from the settings at startup and
    shared by every request.
    """
    bucket_name: str
    region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None


class StorageClient(Protocol):
    """
    Protocol for object storage operations.

    Using a protocol means tests can provide fakes and the service does
    not care which backend produced the URL.
    """

    @property
    def bucket_name(self) -> str:
        """Bucket the client signs URLs for."""
        ...

    async def get_presigned_url(
        self,
        storage_path: str,
        expiry_seconds: int = 600,
    ) -> str:
        """Generate temporary download URL."""
        ...


class S3StorageClient:
    """
    AWS S3 object storage client.

    The boto3 client is created on first use rather than in __init__, so
    an incomplete configuration never breaks application startup. Any
    problem building it surfaces from get_presigned_url() as a
    StorageError, like any other signing problem.
    """

    def __init__(self, config: StorageConfig) -> None:
        self._config = config
        self._s3_client = None

    @property
    def bucket_name(self) -> str:
        return self._config.bucket_name

    def _client(self):
        if self._s3_client is not None:
            return self._s3_client

        try:
            import boto3
            from botocore.config import Config
        except ImportError:
            raise ImportError(
                "boto3 is required for S3 storage. Install with: pip install boto3"
            )

        # Presigned URLs must use SigV4; custom endpoints usually need path-style keys
        s3_options = {'addressing_style': 'path'} if self._config.endpoint_url else {}
        boto_config = Config(
            signature_version='s3v4',
            s3=s3_options,
        )

        self._s3_client = boto3.client(
            's3',
            endpoint_url=self._config.endpoint_url,
            aws_access_key_id=self._config.access_key_id,
            aws_secret_access_key=self._config.secret_access_key,
            region_name=self._config.region,
            config=boto_config,
        )

        logger.info(
            "Initialized S3 storage client",
            extra={
                "bucket": self._config.bucket_name,
                "region": self._config.region,
                "endpoint": self._config.endpoint_url,
            }
        )

        return self._s3_client

    async def get_presigned_url(
        self,
        storage_path: str,
        expiry_seconds: int = 600,
    ) -> str:
        """
        Generate a temporary download URL for one object.

        The URL authorizes a GET of exactly this key in the configured
        bucket until it expires.
        """
        try:
            return self._client().generate_presigned_url(
                'get_object',
                Params={
                    'Bucket': self._config.bucket_name,
                    'Key': storage_path,
                },
                ExpiresIn=expiry_seconds,
            )

        except Exception as e:
            logger.debug(
                "Failed to generate presigned URL",
                extra={"storage_path": storage_path, "error": str(e)}
            )
            raise StorageError(str(e)) from e


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockStorageClient:
    """
    Signer that never talks to S3.

    Returns mock:// URLs carrying the bucket, key and expiry, enabling the
    frontend to be developed without provisioning a bucket. Not suitable
    for production.
    """

    def __init__(self, bucket_name: str = "mock-bucket") -> None:
        self._bucket_name = bucket_name or "mock-bucket"
        logger.info("Initialized mock storage client (in-memory)")

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    async def get_presigned_url(
        self,
        storage_path: str,
        expiry_seconds: int = 600,
    ) -> str:
        """Return a placeholder URL for the object."""
        return f"mock://{self._bucket_name}/{storage_path}?Expires={expiry_seconds}"


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_storage_client(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> StorageClient:
    """
    Create storage client based on configuration.

    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, return mock client for local development

    Returns:
        StorageClient implementation (S3 or Mock)
    """
    if mock_mode:
        return MockStorageClient(config.bucket_name if config else "mock-bucket")

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return S3StorageClient(config)
