"""S3-compatible media store (AWS S3, MinIO, DigitalOcean Spaces)."""

import asyncio
from typing import Any
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.portfolio.core.exceptions import StorageError
from src.portfolio.core.logging import get_logger
from src.portfolio.core.media.base import ImageUpload, generate_object_name

logger = get_logger(__name__)


def create_s3_client(
    endpoint_url: str | None,
    region: str,
    access_key: str | None,
    secret_key: str | None,
    timeout_seconds: float,
) -> Any:
    """Create a boto3 S3 client with bounded timeouts and no retries."""
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=region,
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        config=Config(
            connect_timeout=timeout_seconds,
            read_timeout=timeout_seconds,
            retries={"total_max_attempts": 1},
        ),
    )


class S3MediaStore:
    """Stores images as public-read objects and references them by public URL."""

    def __init__(
        self,
        client: Any,
        bucket: str,
        public_base_url: str,
        key_prefix: str = "uploads",
    ):
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.key_prefix = key_prefix.strip("/")

    async def prepare(self) -> None:
        # Bucket provisioning is out of band
        return None

    def object_key(self, namespace: str, name: str) -> str:
        parts = [self.key_prefix, namespace, name] if self.key_prefix else [namespace, name]
        return "/".join(parts)

    async def store(self, upload: ImageUpload, namespace: str) -> str:
        key = self.object_key(namespace, generate_object_name(upload))
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=upload.data,
                ACL="public-read",
                ContentType=upload.content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(error=f"Upload to s3://{self.bucket}/{key} failed: {e}") from e

        logger.debug("Image stored", bucket=self.bucket, key=key, size=len(upload.data))
        return f"{self.public_base_url}/{key}"

    async def release(self, reference: str) -> None:
        key = self.key_for(reference)
        if key is None:
            logger.debug("Reference not managed by S3 store", reference=reference)
            return

        try:
            # delete_object succeeds for keys that no longer exist
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(error=f"Delete of s3://{self.bucket}/{key} failed: {e}") from e

    def key_for(self, reference: str) -> str | None:
        """Extract the object key from a public URL, or None if it is foreign."""
        base = f"{self.public_base_url}/"
        if not reference or not reference.startswith(base):
            return None
        key = urlparse(reference).path[len(urlparse(base).path):]
        return key or None
