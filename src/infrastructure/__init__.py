"""
Infrastructure layer - external service integrations.

Each subdirectory wraps an external dependency:
- storage: Object storage (S3) URL signing
- datastore: Optional MongoDB connection

These wrappers keep SDK details out of the core service.
"""
