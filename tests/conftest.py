"""Pytest configuration and fixtures."""

import io
import random
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.datastructures import Headers, UploadFile

from codestore.config import Settings
from codestore.main import create_app
from codestore.services import CodeStore
from codestore.storage import FileStorage, TimestampStore

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Empty content directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, content_dir: Path) -> Settings:
    """Settings pointing at temporary directories."""
    return Settings(
        content_dir=content_dir,
        metadata_dir=tmp_path / "metadata",
        persist_metadata=True,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Create test client with isolated temp directories."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def storage(content_dir: Path) -> FileStorage:
    """File storage over the temporary content directory."""
    return FileStorage(content_dir)


@pytest.fixture
def store(storage: FileStorage) -> CodeStore:
    """Code store with in-memory timestamps and a seeded RNG."""
    return CodeStore(storage, TimestampStore(), rng=random.Random(1234))


@pytest.fixture
def make_upload() -> Callable[..., UploadFile]:
    """Factory for in-memory uploads."""

    def _make(
        data: bytes = JPEG_BYTES,
        filename: str = "photo.jpg",
        content_type: str = "image/jpeg",
    ) -> UploadFile:
        return UploadFile(
            io.BytesIO(data),
            size=len(data),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )

    return _make
