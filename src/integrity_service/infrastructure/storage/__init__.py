"""Storage infrastructure module.

Provides deployment-neutral object storage via the StorageProvider interface.
"""

from integrity_service.infrastructure.storage.factory import get_storage_provider, reset_storage_provider
from integrity_service.infrastructure.storage.provider import StorageProvider, StoredObject, build_storage_key
from integrity_service.infrastructure.storage.local_storage import LocalStorage
from integrity_service.infrastructure.storage.s3_storage import S3Storage

__all__ = [
    "get_storage_provider",
    "reset_storage_provider",
    "StorageProvider",
    "StoredObject",
    "build_storage_key",
    "LocalStorage",
    "S3Storage",
]
