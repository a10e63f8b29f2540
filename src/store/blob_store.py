"""Content-addressed blob persistence.

Blobs live under ``blobs/<prefix>/<digest>`` so byte-identical content
always maps to one stored object regardless of where it came from.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import BLOBS_DIR_NAME
from core.errors import FetchKeepStoreError
from core.logging_config import get_logger
from core.types import ContentBlob
from store.atomic_io import atomic_write_bytes

_LOGGER = get_logger(__name__)


class BlobStore:
    """Immutable blob storage keyed by content hash."""

    def __init__(self, store_root: Path) -> None:
        self._blobs_root = store_root / BLOBS_DIR_NAME

    def write_blob(self, blob: ContentBlob) -> str:
        """Persist a blob unless an identical one already exists.

        Args:
            blob: Content to store.

        Returns:
            Content hash addressing the stored blob.

        Raises:
            FetchKeepStoreError: If the blob cannot be written.
        """
        content_hash = blob.content_hash
        blob_path = self._blob_path(content_hash)
        if blob_path.exists():
            return content_hash
        try:
            atomic_write_bytes(blob_path, blob.data)
        except OSError as error:
            raise FetchKeepStoreError(
                f"Failed to write blob {content_hash} at {blob_path}: {error}. "
                "Check write permissions and available disk space."
            ) from error
        _LOGGER.info("blob_written", value_hash=content_hash, size_bytes=len(blob))
        return content_hash

    def read_blob(self, content_hash: str) -> ContentBlob:
        """Load a blob by content hash.

        Raises:
            FetchKeepStoreError: If the blob is missing or unreadable.
        """
        blob_path = self._blob_path(content_hash)
        if not blob_path.is_file():
            raise FetchKeepStoreError(
                f"Blob {content_hash} not found at {blob_path}. "
                "The store may be incomplete; refetch the source."
            )
        try:
            return ContentBlob(data=blob_path.read_bytes())
        except OSError as error:
            raise FetchKeepStoreError(
                f"Failed to read blob {content_hash} at {blob_path}: {error}."
            ) from error

    def has_blob(self, content_hash: str) -> bool:
        """Return whether a blob with this hash is stored."""
        return self._blob_path(content_hash).is_file()

    def _blob_path(self, content_hash: str) -> Path:
        return self._blobs_root / content_hash[:2] / content_hash
