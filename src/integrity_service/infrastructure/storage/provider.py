"""Storage Provider Interface

Abstract base class defining the contract for binary object storage.
Supports both local filesystem (development/self-hosted) and S3 (enterprise/K8s).
Objects are keyed by "{document_id}_{file_name}".
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class StoredObject(BaseModel):
    """Result of writing an object"""

    key: str
    etag: str


def build_storage_key(document_id: str, file_name: str) -> str:
    """Object key for a document's binary payload"""
    return f"{document_id}_{file_name}"


class StorageProvider(ABC):
    """Abstract storage provider interface for deployment-neutral object storage."""

    @abstractmethod
    async def put(self, key: str, payload: bytes, content_type: str) -> StoredObject:
        """Store an object, replacing any previous object under the key.

        Args:
            key: Object key (e.g., "3f2a..._report.pdf")
            payload: Object bytes
            content_type: MIME type (e.g., "application/pdf")

        Returns:
            StoredObject with key and etag

        Raises:
            StorageFailure: If the write fails
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Read an object's bytes.

        Raises:
            StorageFailure: If the object is missing or the read fails
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete an object.

        Returns:
            True if deleted, False if the object did not exist

        Raises:
            StorageFailure: If the backend rejects the delete
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if an object exists."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage backend is healthy and accessible."""
        pass
