"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Configure the environment before any app imports read settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENABLE_METRICS", "false")
os.environ.setdefault("MEDIA_BACKEND", "local")

# ruff: noqa: E402 - Imports must be after env var setup
from pathlib import Path

import pytest

from src.portfolio.core.config import Settings, get_settings
from src.portfolio.core.media import ImageUpload

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

# Smallest valid PNG header; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """Per-test directory for locally stored images."""
    return tmp_path / "uploads"


@pytest.fixture
def settings(media_root: Path) -> Settings:
    """Settings for tests: in-memory SQLite, local media under tmp_path."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        media_backend="local",
        media_root=media_root,
        enable_metrics=False,
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def png_upload() -> ImageUpload:
    """A small PNG that passed the upload checks."""
    return ImageUpload(data=PNG_BYTES, content_type="image/png", filename="shot.png")
