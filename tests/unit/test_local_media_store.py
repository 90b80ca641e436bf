"""Tests for the local filesystem media store."""

from pathlib import Path

import pytest

from src.portfolio.core.exceptions import StorageError
from src.portfolio.core.media import ImageUpload, LocalMediaStore

pytestmark = pytest.mark.unit


@pytest.fixture
async def store(media_root: Path) -> LocalMediaStore:
    local_store = LocalMediaStore(media_root, "/uploads")
    await local_store.prepare()
    return local_store


async def test_prepare_creates_root(media_root: Path):
    await LocalMediaStore(media_root).prepare()

    assert media_root.is_dir()


async def test_store_writes_file_and_returns_url_path(store, media_root, png_upload):
    reference = await store.store(png_upload, "projects")

    assert reference.startswith("/uploads/projects/")
    assert reference.endswith(".png")
    path = media_root / "projects" / reference.rsplit("/", 1)[-1]
    assert path.read_bytes() == png_upload.data


async def test_store_generates_unique_names(store, png_upload):
    first = await store.store(png_upload, "projects")
    second = await store.store(png_upload, "projects")

    assert first != second


async def test_extension_follows_content_type(store):
    upload = ImageUpload(data=b"jpeg", content_type="image/jpg", filename="photo.JPG")

    reference = await store.store(upload, "projects")

    assert reference.endswith(".jpg")


async def test_release_deletes_file(store, png_upload):
    reference = await store.store(png_upload, "projects")
    path = store.resolve(reference)
    assert path is not None and path.exists()

    await store.release(reference)

    assert not path.exists()


async def test_release_is_idempotent(store, png_upload):
    reference = await store.store(png_upload, "projects")

    await store.release(reference)
    await store.release(reference)


@pytest.mark.parametrize(
    "reference",
    [
        "",
        "https://cdn.example.com/projects/a.png",
        "/static/projects/a.png",
        "/uploads/../outside.png",
        "/uploads/",
    ],
)
async def test_release_ignores_foreign_references(store, media_root, reference):
    outside = media_root.parent / "outside.png"
    outside.write_bytes(b"keep")

    await store.release(reference)

    assert outside.exists()


def test_resolve_refuses_paths_outside_root(media_root):
    store = LocalMediaStore(media_root, "uploads/")

    assert store.resolve("/uploads/../../etc/passwd") is None
    assert store.resolve("/uploads/projects/a.png") == (media_root / "projects" / "a.png").resolve()


async def test_store_failure_raises_storage_error(tmp_path, png_upload):
    # A regular file where the root directory should be
    blocked = tmp_path / "blocked"
    blocked.write_bytes(b"")
    store = LocalMediaStore(blocked, "/uploads")

    with pytest.raises(StorageError) as exc_info:
        await store.store(png_upload, "projects")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Image storage failed"
