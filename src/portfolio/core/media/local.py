"""Local filesystem media store, served as static files."""

import asyncio
from pathlib import Path

from src.portfolio.core.exceptions import StorageError
from src.portfolio.core.logging import get_logger
from src.portfolio.core.media.base import ImageUpload, generate_object_name

logger = get_logger(__name__)


class LocalMediaStore:
    """Writes images below `root` and returns URL paths below `url_prefix`.

    `<root>/projects/abc.jpg` is referenced as `<url_prefix>/projects/abc.jpg`.
    """

    def __init__(self, root: Path, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = "/" + url_prefix.strip("/")

    async def prepare(self) -> None:
        await asyncio.to_thread(self.root.mkdir, parents=True, exist_ok=True)

    async def store(self, upload: ImageUpload, namespace: str) -> str:
        name = generate_object_name(upload)
        directory = self.root / namespace
        path = directory / name

        def _write() -> None:
            directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(upload.data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise StorageError(error=f"Could not write {path}: {e}") from e

        logger.debug("Image stored", path=str(path), size=len(upload.data))
        return f"{self.url_prefix}/{namespace}/{name}"

    async def release(self, reference: str) -> None:
        path = self.resolve(reference)
        if path is None:
            logger.debug("Reference not managed by local store", reference=reference)
            return

        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            raise StorageError(error=f"Could not delete {path}: {e}") from e

    def resolve(self, reference: str) -> Path | None:
        """Map a reference back to a file below the root, or None if it is foreign."""
        prefix = f"{self.url_prefix}/"
        if not reference or not reference.startswith(prefix):
            return None

        root = self.root.resolve()
        path = (root / reference[len(prefix):]).resolve()
        # Refuse anything that escapes the media root
        if not path.is_relative_to(root) or path == root:
            return None
        return path
