"""S3/MinIO Storage Implementation

S3-compatible object storage using aioboto3 for non-blocking async I/O.
Supports AWS S3 and self-hosted MinIO for enterprise deployments.
"""

import logging
import os

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from integrity_service.core.exceptions import StorageFailure
from integrity_service.infrastructure.storage.provider import StorageProvider, StoredObject

logger = logging.getLogger(__name__)


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class S3Storage(StorageProvider):
    """S3/MinIO storage provider for production Kubernetes deployments.

    Supports both AWS S3 and self-hosted MinIO via endpoint_url configuration.
    """

    def __init__(
        self,
        bucket_name: str = None,
        region: str = None,
        endpoint_url: str = None,
        access_key: str = None,
        secret_key: str = None
    ):
        """Initialize S3 storage provider.

        Args:
            bucket_name: S3 bucket name (required)
            region: AWS region (default: us-east-1)
            endpoint_url: Custom S3 endpoint for MinIO/LocalStack (optional)
            access_key: AWS access key ID (optional, falls back to env)
            secret_key: AWS secret access key (optional, falls back to env)

        Raises:
            ValueError: If bucket_name is not provided
        """
        self.bucket_name = bucket_name or os.getenv("S3_BUCKET_NAME")
        self.region = region or os.getenv("S3_REGION", "us-east-1")
        self.endpoint_url = endpoint_url or os.getenv("S3_ENDPOINT_URL")
        self.access_key = access_key or os.getenv("AWS_ACCESS_KEY_ID")
        self.secret_key = secret_key or os.getenv("AWS_SECRET_ACCESS_KEY")

        if not self.bucket_name:
            raise ValueError(
                "S3_BUCKET_NAME environment variable or bucket_name parameter is required"
            )

        self.session = aioboto3.Session(
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            region_name=self.region
        )

        logger.info(
            f"S3 storage initialized - bucket: {self.bucket_name}, "
            f"region: {self.region}, "
            f"endpoint: {self.endpoint_url or 'AWS'}"
        )

    def _client(self):
        return self.session.client(
            "s3",
            region_name=self.region,
            endpoint_url=self.endpoint_url
        )

    async def put(self, key: str, payload: bytes, content_type: str) -> StoredObject:
        try:
            async with self._client() as s3:
                response = await s3.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=payload,
                    ContentType=content_type
                )
        except ClientError as e:
            logger.error(f"S3 upload failed (error: {_error_code(e)}): {e}")
            raise StorageFailure(f"S3 upload failed: {_error_code(e)}") from e
        except BotoCoreError as e:
            logger.error(f"S3 upload failed: {e}")
            raise StorageFailure(f"S3 upload failed: {e}") from e

        logger.info(f"Uploaded object to S3: s3://{self.bucket_name}/{key}")
        return StoredObject(key=key, etag=response.get("ETag", "").strip('"'))

    async def get(self, key: str) -> bytes:
        try:
            async with self._client() as s3:
                response = await s3.get_object(Bucket=self.bucket_name, Key=key)
                async with response["Body"] as stream:
                    payload = await stream.read()
        except ClientError as e:
            code = _error_code(e)
            if code == "NoSuchKey":
                logger.warning(f"Object not found in S3: {key}")
                raise StorageFailure(f"Object not found: {key}") from e
            logger.error(f"S3 download failed (error: {code}): {e}")
            raise StorageFailure(f"S3 download failed: {code}") from e
        except BotoCoreError as e:
            logger.error(f"S3 download failed: {e}")
            raise StorageFailure(f"S3 download failed: {e}") from e

        logger.info(f"Read object from S3: s3://{self.bucket_name}/{key}")
        return payload

    async def delete(self, key: str) -> bool:
        # S3 delete_object succeeds even when the key is absent, so check first
        if not await self.exists(key):
            logger.warning(f"Object not found for deletion: {key}")
            return False

        try:
            async with self._client() as s3:
                await s3.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            logger.error(f"S3 delete failed for {key} (error: {_error_code(e)}): {e}")
            raise StorageFailure(f"S3 delete failed: {_error_code(e)}") from e
        except BotoCoreError as e:
            logger.error(f"S3 delete failed for {key}: {e}")
            raise StorageFailure(f"S3 delete failed: {e}") from e

        logger.info(f"Deleted object from S3: s3://{self.bucket_name}/{key}")
        return True

    async def exists(self, key: str) -> bool:
        try:
            async with self._client() as s3:
                await s3.head_object(Bucket=self.bucket_name, Key=key)
                return True
        except ClientError as e:
            if _error_code(e) in ("404", "NoSuchKey", "NotFound"):
                return False
            logger.error(f"Error checking object existence for {key}: {e}")
            raise StorageFailure(f"S3 head failed: {_error_code(e)}") from e

    async def health_check(self) -> bool:
        """Check S3 storage health by verifying bucket access."""
        try:
            async with self._client() as s3:
                await s3.list_objects_v2(Bucket=self.bucket_name, MaxKeys=1)
                logger.debug(f"S3 health check passed for bucket: {self.bucket_name}")
                return True

        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 health check failed: {e}")
            return False
