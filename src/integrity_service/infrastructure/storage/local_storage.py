"""Local Filesystem Storage Implementation

Async local object storage for development and self-hosted deployments.
Uses aiofiles for non-blocking I/O to match S3Storage performance characteristics.
"""

import hashlib
import logging
import os
from pathlib import Path

import aiofiles

from integrity_service.core.exceptions import StorageFailure
from integrity_service.infrastructure.storage.provider import StorageProvider, StoredObject

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536  # 64KB


class LocalStorage(StorageProvider):
    """Local filesystem storage provider for development and self-hosted deployments."""

    def __init__(self, base_path: str = None):
        """Initialize local storage provider.

        Args:
            base_path: Base directory for object storage (default: ./data/documents)
        """
        if not base_path:
            base_path = os.getenv("STORAGE_LOCAL_PATH", "./data/documents")

        self.base_path = Path(base_path).resolve()

        # Ensure directory exists on startup
        self.base_path.mkdir(parents=True, exist_ok=True)

        logger.info(f"Local storage initialized at: {self.base_path}")

    def _get_path(self, key: str) -> Path:
        """Resolve a storage key under base_path.

        Raises:
            StorageFailure: If the key attempts directory traversal
        """
        # Reject keys such as "../../etc/passwd"
        safe_path = (self.base_path / key).resolve()

        if not safe_path.is_relative_to(self.base_path) or safe_path == self.base_path:
            logger.error(f"Path traversal attempt detected: {key}")
            raise StorageFailure(f"Invalid storage key: {key}")

        return safe_path

    async def put(self, key: str, payload: bytes, content_type: str) -> StoredObject:
        file_path = self._get_path(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            async with aiofiles.open(file_path, 'wb') as out_file:
                for start in range(0, len(payload), CHUNK_SIZE):
                    await out_file.write(payload[start:start + CHUNK_SIZE])
        except OSError as e:
            logger.error(f"Local upload failed for {key}: {e}")
            raise StorageFailure(f"Local upload failed: {e}") from e

        logger.info(f"Uploaded object to local storage: {file_path} ({content_type})")
        return StoredObject(key=key, etag=hashlib.md5(payload).hexdigest())

    async def get(self, key: str) -> bytes:
        file_path = self._get_path(key)

        if not file_path.exists():
            logger.warning(f"Object not found in local storage: {key}")
            raise StorageFailure(f"Object not found: {key}")

        try:
            async with aiofiles.open(file_path, 'rb') as in_file:
                payload = await in_file.read()
        except OSError as e:
            logger.error(f"Local download failed for {key}: {e}")
            raise StorageFailure(f"Local download failed: {e}") from e

        logger.info(f"Read object from local storage: {file_path}")
        return payload

    async def delete(self, key: str) -> bool:
        file_path = self._get_path(key)

        if not file_path.exists():
            logger.warning(f"Object not found for deletion: {key}")
            return False

        try:
            os.remove(file_path)
        except OSError as e:
            logger.error(f"Failed to delete object {key}: {e}")
            raise StorageFailure(f"Local delete failed: {e}") from e

        logger.info(f"Deleted object from local storage: {file_path}")
        return True

    async def exists(self, key: str) -> bool:
        try:
            return self._get_path(key).exists()
        except StorageFailure:
            # Path traversal attempt
            return False

    async def health_check(self) -> bool:
        """Check local storage health by verifying write access."""
        try:
            test_file = self.base_path / ".health_check"
            test_file.touch()
            test_file.unlink()

            logger.debug(f"Local storage health check passed: {self.base_path}")
            return True

        except OSError as e:
            logger.error(f"Local storage health check failed: {e}")
            return False
