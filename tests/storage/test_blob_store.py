"""
Tests for storage/blob_store.py - Blob store adapters
"""
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from studygenius.storage.blob_store import (
    BlobFetchError,
    GCSBlobStore,
    HttpBlobStore,
    LocalBlobStore,
    create_blob_store,
)


class TestLocalBlobStore:
    """Test LocalBlobStore"""

    def test_fetch(self, tmp_path):
        (tmp_path / "course").mkdir()
        (tmp_path / "course" / "notes.txt").write_bytes(b"hello")

        assert LocalBlobStore(str(tmp_path)).fetch("course/notes.txt") == b"hello"

    def test_missing_file(self, tmp_path):
        with pytest.raises(BlobFetchError):
            LocalBlobStore(str(tmp_path)).fetch("nope.txt")

    def test_path_outside_root(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "secret.txt").write_bytes(b"secret")

        with pytest.raises(BlobFetchError, match="outside"):
            LocalBlobStore(str(root)).fetch("../secret.txt")


class TestGCSBlobStore:
    """Test GCSBlobStore with a mocked client"""

    def test_requires_bucket(self):
        with pytest.raises(ValueError):
            GCSBlobStore(None, client=MagicMock())

    def test_fetch_strips_bucket_prefix(self):
        client = MagicMock()
        client.bucket.return_value.blob.return_value.download_as_bytes.return_value = b"pdf bytes"
        store = GCSBlobStore("materials", client=client)

        assert store.fetch("gs://materials/u1/c1/syllabus.pdf") == b"pdf bytes"
        client.bucket.return_value.blob.assert_called_with("u1/c1/syllabus.pdf")

    def test_not_found(self):
        from google.cloud.exceptions import NotFound

        client = MagicMock()
        client.bucket.return_value.blob.return_value.download_as_bytes.side_effect = NotFound("gone")
        store = GCSBlobStore("materials", client=client)

        with pytest.raises(BlobFetchError):
            store.fetch("u1/c1/missing.pdf")


class TestHttpBlobStore:
    """Test HttpBlobStore"""

    @patch("studygenius.storage.blob_store.requests.get")
    def test_fetch(self, mock_get):
        mock_response = Mock()
        mock_response.content = b"data"
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        assert HttpBlobStore(timeout=3).fetch("https://blob.example.com/a.pdf") == b"data"
        mock_get.assert_called_once_with("https://blob.example.com/a.pdf", timeout=3)

    @patch("studygenius.storage.blob_store.requests.get")
    def test_http_error(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        mock_get.return_value = mock_response

        with pytest.raises(BlobFetchError):
            HttpBlobStore().fetch("https://blob.example.com/missing.pdf")


class TestCreateBlobStore:
    """Test backend selection"""

    def test_local(self, mock_config, tmp_path):
        mock_config.LOCAL_BLOB_DIR = str(tmp_path)
        store = create_blob_store(mock_config)
        assert isinstance(store, LocalBlobStore)

    def test_http(self, mock_config):
        mock_config.BLOB_STORE_BACKEND = "http"
        assert isinstance(create_blob_store(mock_config), HttpBlobStore)

    def test_unknown(self, mock_config):
        mock_config.BLOB_STORE_BACKEND = "s3"
        with pytest.raises(ValueError):
            create_blob_store(mock_config)
