"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (and an optional .env
file) once per process. Routes never read the environment directly: the
settings are turned into small frozen config objects that get handed to
the storage client and the datastore connection at startup.

Missing storage credentials do not stop the process. They are reported by
validate_required_fields() and logged at startup; signing requests then
fail individually.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import __version__
from ..infrastructure.datastore.client import DatastoreConfig
from ..infrastructure.storage.client import StorageConfig


DEFAULT_MONGODB_URI = "mongodb://127.0.0.1:27017/eastculture"

# Shown in the startup warning when required settings are absent.
REQUIRED_ENV_EXAMPLES = {
    "AWS_REGION": "ap-southeast-2",
    "S3_BUCKET_NAME": "eastculture-video-nz",
    "AWS_ACCESS_KEY_ID": "xxx",
    "AWS_SECRET_ACCESS_KEY": "xxx",
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    For lists (like cors_origins), use comma-separated values in env.
    """

    # API Configuration
    api_title: str = "EastCulture Video API"
    api_version: str = __version__
    host: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to when run as a script"
    )
    port: int = Field(
        default=3001,
        description="Port uvicorn listens on when run as a script"
    )

    # S3 Storage Configuration
    aws_region: str = Field(
        default="",
        description="Region of the video bucket. Must match the bucket's region."
    )
    s3_bucket_name: str = Field(
        default="",
        description="Bucket holding the video assets"
    )
    aws_access_key_id: str = Field(
        default="",
        description="Access key ID used to sign download URLs"
    )
    aws_secret_access_key: str = Field(
        default="",
        description="Secret access key used to sign download URLs"
    )
    s3_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores (MinIO, R2). Leave unset for AWS."
    )
    storage_mock_mode: bool = Field(
        default=False,
        description="Sign with an in-memory mock instead of S3. Enables local dev without a bucket."
    )

    # MongoDB Configuration (optional, not used by any route)
    mongodb_uri: str = Field(
        default=DEFAULT_MONGODB_URI,
        description="MongoDB connection string"
    )
    mongodb_enabled: bool = Field(
        default=True,
        description="Attempt the MongoDB connection at startup"
    )
    mongodb_server_selection_timeout_ms: int = Field(
        default=5000,
        description="How long the startup ping waits for a reachable server"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173,https://eastculture.vercel.app",
        description="Comma-separated list of frontend origins allowed to call the API."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def storage_config(self) -> StorageConfig:
        """Snapshot the storage settings into an immutable config."""
        return StorageConfig(
            bucket_name=self.s3_bucket_name,
            region=self.aws_region or None,
            access_key_id=self.aws_access_key_id or None,
            secret_access_key=self.aws_secret_access_key or None,
            endpoint_url=self.s3_endpoint_url or None,
        )

    def datastore_config(self) -> DatastoreConfig:
        """Snapshot the MongoDB settings into an immutable config."""
        return DatastoreConfig(
            uri=self.mongodb_uri or DEFAULT_MONGODB_URI,
            enabled=self.mongodb_enabled,
            server_selection_timeout_ms=self.mongodb_server_selection_timeout_ms,
        )

    def validate_required_fields(self) -> list[str]:
        """
        Return the names of required settings that are missing.

        This is separate from Pydantic validation on purpose: an
        incomplete configuration is reported, not rejected, so the
        server still starts and the health endpoint stays reachable.
        """
        if self.storage_mock_mode:
            return []

        values = {
            "AWS_REGION": self.aws_region,
            "S3_BUCKET_NAME": self.s3_bucket_name,
            "AWS_ACCESS_KEY_ID": self.aws_access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.aws_secret_access_key,
        }
        return [name for name, value in values.items() if not value]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once per process. For tests, build a Settings
    directly and pass it to create_app(), or call
    get_settings.cache_clear() to reset.
    """
    return Settings()
