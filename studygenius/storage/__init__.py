"""
StudyGenius Storage Module

Read-only blob store adapters for uploaded course materials:
- Google Cloud Storage
- Public/pre-signed HTTP URLs
- Local directory
"""

from .blob_store import (
    BaseBlobStore,
    BlobFetchError,
    GCSBlobStore,
    HttpBlobStore,
    LocalBlobStore,
    create_blob_store
)

__all__ = [
    "BaseBlobStore",
    "BlobFetchError",
    "GCSBlobStore",
    "HttpBlobStore",
    "LocalBlobStore",
    "create_blob_store"
]
