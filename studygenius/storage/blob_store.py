"""
Blob store adapters for uploaded course materials.

The planner only needs read access: ``fetch(source_ref) -> bytes``. Upload,
deletion and access control belong to the application that owns the
materials.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class BlobFetchError(Exception):
    """A stored document could not be read."""


class BaseBlobStore(ABC):
    """Read-only access to stored documents."""

    @abstractmethod
    def fetch(self, source_ref: str) -> bytes:
        """Return the raw bytes of the document, raising BlobFetchError on failure."""
        pass


class GCSBlobStore(BaseBlobStore):
    """Reads materials from a Google Cloud Storage bucket."""

    def __init__(self, bucket_name: Optional[str] = None, client=None):
        """
        Initialize the bucket handle.

        Args:
            bucket_name: GCS bucket name
            client: Optional pre-built ``google.cloud.storage.Client``
        """
        if not bucket_name:
            raise ValueError(
                "GCS_BUCKET_NAME not set. Set it as environment variable "
                "or pass bucket_name parameter."
            )
        if client is None:
            from google.cloud import storage
            client = storage.Client()

        self.bucket_name = bucket_name
        self.client = client
        self.bucket = client.bucket(bucket_name)

    def fetch(self, source_ref: str) -> bytes:
        from google.cloud.exceptions import NotFound

        # Accept both "user/course/file.pdf" and "gs://bucket/user/course/file.pdf"
        prefix = f"gs://{self.bucket_name}/"
        blob_name = source_ref[len(prefix):] if source_ref.startswith(prefix) else source_ref

        try:
            return self.bucket.blob(blob_name).download_as_bytes()
        except NotFound as e:
            raise BlobFetchError(f"gs://{self.bucket_name}/{blob_name} not found") from e


class HttpBlobStore(BaseBlobStore):
    """Reads materials from their public (or pre-signed) blob URLs."""

    def __init__(self, timeout: float = 30):
        self.timeout = timeout

    def fetch(self, source_ref: str) -> bytes:
        try:
            response = requests.get(source_ref, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise BlobFetchError(f"Failed to fetch URL: {e}") from e
        return response.content


class LocalBlobStore(BaseBlobStore):
    """Reads materials from a directory on disk (development and CLI use)."""

    def __init__(self, root: str = "."):
        self.root = Path(root).resolve()

    def fetch(self, source_ref: str) -> bytes:
        path = (self.root / source_ref).resolve()
        if self.root not in path.parents and path != self.root:
            raise BlobFetchError(f"{source_ref} is outside the blob directory")
        if not path.is_file():
            raise BlobFetchError(f"{source_ref} not found")
        return path.read_bytes()


def create_blob_store(config) -> BaseBlobStore:
    """Create the blob store selected by BLOB_STORE_BACKEND."""
    backend = getattr(config, 'BLOB_STORE_BACKEND', 'local').lower()

    if backend == 'gcs':
        return GCSBlobStore(getattr(config, 'GCS_BUCKET_NAME', None))
    if backend == 'http':
        return HttpBlobStore(timeout=getattr(config, 'FETCH_TIMEOUT_SECONDS', 30))
    if backend == 'local':
        return LocalBlobStore(getattr(config, 'LOCAL_BLOB_DIR', '.'))

    raise ValueError(f"Unknown BLOB_STORE_BACKEND: {backend}")
