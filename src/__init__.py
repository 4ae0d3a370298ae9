"""
EastCulture Video API - signed download URLs for course videos.

This package contains the complete application:
- core: Framework-agnostic signed URL issuance
- infrastructure: External service integrations (S3, MongoDB)
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
