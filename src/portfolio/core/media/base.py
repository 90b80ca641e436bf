"""Media store contract shared by the storage backends."""

import uuid
from dataclasses import dataclass
from typing import Protocol

# Allowed image types and the file extension each one is stored under
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@dataclass(frozen=True)
class ImageUpload:
    """An image file that already passed the upload size/type checks."""

    data: bytes
    content_type: str
    filename: str | None = None

    @property
    def extension(self) -> str:
        return IMAGE_EXTENSIONS.get(self.content_type, "bin")


def generate_object_name(upload: ImageUpload) -> str:
    """Generate a unique file name so concurrent uploads never collide."""
    return f"{uuid.uuid4().hex}.{upload.extension}"


class MediaStore(Protocol):
    """Stores image binaries and hands back durable references."""

    async def prepare(self) -> None:
        """Create whatever the backend needs before the first request."""
        ...

    async def store(self, upload: ImageUpload, namespace: str) -> str:
        """Store the upload under `namespace` and return its reference.

        Raises:
            StorageError: If the backend rejects or fails the write.
        """
        ...

    async def release(self, reference: str) -> None:
        """Delete the object behind `reference`.

        Idempotent: unknown or already-deleted references are not an error.

        Raises:
            StorageError: On transport failure.
        """
        ...
