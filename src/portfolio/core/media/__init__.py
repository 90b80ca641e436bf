"""Media storage - local disk or S3-compatible bucket.

Re-exports the store contract and the backend factory.
"""

from src.portfolio.core.config import Settings
from src.portfolio.core.media.base import (
    IMAGE_EXTENSIONS,
    ImageUpload,
    MediaStore,
    generate_object_name,
)
from src.portfolio.core.media.local import LocalMediaStore
from src.portfolio.core.media.s3 import S3MediaStore, create_s3_client


def build_media_store(settings: Settings) -> MediaStore:
    """Build the configured media store backend."""
    if settings.media_backend == "s3":
        client = create_s3_client(
            endpoint_url=settings.s3_endpoint_url,
            region=settings.s3_region,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            timeout_seconds=settings.media_timeout_seconds,
        )
        return S3MediaStore(
            client,
            bucket=settings.s3_bucket or "",
            public_base_url=settings.s3_public_base_url or "",
            key_prefix=settings.s3_key_prefix,
        )
    return LocalMediaStore(settings.media_root, settings.media_url_prefix)


__all__ = [
    "IMAGE_EXTENSIONS",
    "ImageUpload",
    "LocalMediaStore",
    "MediaStore",
    "S3MediaStore",
    "build_media_store",
    "create_s3_client",
    "generate_object_name",
]
