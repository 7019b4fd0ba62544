"""Storage Provider Factory

Factory pattern for deployment-neutral storage selection.
Chooses between local filesystem and S3 based on STORAGE_PROVIDER env var.
"""

import logging
import os
from typing import Optional

from integrity_service.infrastructure.storage.provider import StorageProvider
from integrity_service.infrastructure.storage.local_storage import LocalStorage
from integrity_service.infrastructure.storage.s3_storage import S3Storage

logger = logging.getLogger(__name__)

# Singleton instance to avoid recreating sessions
_storage_instance: Optional[StorageProvider] = None


def get_storage_provider() -> StorageProvider:
    """Get or create the process-wide storage provider instance.

    Environment Variables:
        STORAGE_PROVIDER: "local" or "s3" (default: "local")

        For local storage:
            STORAGE_LOCAL_PATH: Base directory (default: "./data/documents")

        For S3 storage:
            S3_BUCKET_NAME: S3 bucket name (required)
            S3_REGION: AWS region (default: "us-east-1")
            S3_ENDPOINT_URL: Custom endpoint for MinIO/LocalStack (optional)
            AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY: credentials (optional)
    """
    global _storage_instance

    if _storage_instance is not None:
        return _storage_instance

    provider_type = os.getenv("STORAGE_PROVIDER", "local").lower()

    logger.info(f"Initializing storage provider: {provider_type}")

    if provider_type == "s3":
        _storage_instance = S3Storage(
            bucket_name=os.getenv("S3_BUCKET_NAME"),
            region=os.getenv("S3_REGION", "us-east-1"),
            endpoint_url=os.getenv("S3_ENDPOINT_URL"),
            access_key=os.getenv("AWS_ACCESS_KEY_ID"),
            secret_key=os.getenv("AWS_SECRET_ACCESS_KEY")
        )

    else:
        local_path = os.getenv("STORAGE_LOCAL_PATH", "./data/documents")
        _storage_instance = LocalStorage(base_path=local_path)

    return _storage_instance


def reset_storage_provider():
    """Reset the process-wide storage provider instance.

    Used for testing or reconfiguration.
    """
    global _storage_instance
    _storage_instance = None
    logger.warning("Storage provider instance reset")
