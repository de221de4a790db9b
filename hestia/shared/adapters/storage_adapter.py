"""
Storage adapter - AWS S3 object operations for gallery images.

Provides:
- Object upload with content type and cache headers
- Object deletion
- Public URL resolution

boto3 is blocking, so every call runs in a worker thread via
``asyncio.to_thread`` and never stalls the event loop.
"""

import asyncio
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hestia.config.settings import settings
from hestia.shared.core.exceptions import StorageError
from hestia.shared.core.logging import get_logger

logger = get_logger(__name__)


class StorageAdapter:
    """
    Adapter for S3-compatible object storage.

    Handles:
    - Uploading normalized gallery images
    - Best-effort cleanup of removed images
    - Mapping object keys to public URLs
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ):
        """
        Initialize storage adapter.

        Args:
            bucket: Bucket holding gallery images
            region: AWS region
            endpoint_url: Custom endpoint (MinIO, LocalStack)
            public_base_url: Base URL objects are served from
            aws_access_key_id: AWS access key
            aws_secret_access_key: AWS secret key
        """
        self.bucket = bucket or settings.GALLERY_BUCKET
        self.region = region or settings.AWS_REGION
        self.endpoint_url = endpoint_url or settings.S3_ENDPOINT_URL or None
        self.public_base_url = (public_base_url or settings.STORAGE_PUBLIC_BASE_URL).rstrip("/")
        self.aws_access_key_id = aws_access_key_id or settings.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = aws_secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            kwargs = {"region_name": self.region}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            if self.aws_access_key_id and self.aws_secret_access_key:
                kwargs["aws_access_key_id"] = self.aws_access_key_id
                kwargs["aws_secret_access_key"] = self.aws_secret_access_key
            # Otherwise default credentials (IAM role, environment, etc.)
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def public_url(self, key: str) -> str:
        """Public URL an object is served from."""
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload an object.

        Args:
            key: Object key (unique per upload)
            data: Encoded image bytes
            content_type: MIME type stored with the object

        Returns:
            Public URL of the uploaded object

        Raises:
            StorageError: If the upload fails
        """
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                CacheControl=f"max-age={settings.STORAGE_CACHE_SECONDS}",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("storage_upload_failed", key=key, error=str(e))
            raise StorageError("upload", key, str(e)) from e

        logger.info("storage_uploaded", key=key, size=len(data))
        return self.public_url(key)

    async def delete(self, key: str) -> None:
        """
        Delete an object.

        Raises:
            StorageError: If the delete fails
        """
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error("storage_delete_failed", key=key, error=str(e))
            raise StorageError("delete", key, str(e)) from e

        logger.debug("storage_deleted", key=key)
