"""
Object storage integration for video downloads.

Supports AWS S3 and S3-compatible stores via the S3 API.
Includes mock mode for local development without credentials.
"""
