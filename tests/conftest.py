"""Pytest fixtures for change checksum tests."""

from __future__ import annotations

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from change_checksum.config import Settings, override_settings, reset_settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_settings() -> Generator[Settings, None, None]:
    """Provide test settings with a small chunk size to exercise chunk boundaries."""
    settings = Settings(
        log_level="DEBUG",
        stream_chunk_size=3,
        standardize_line_endings=True,
    )
    override_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture
def changelog_file(temp_dir: Path) -> Path:
    """Provide a SQL changeset file with Windows line endings."""
    path = temp_dir / "001_create_users.sql"
    path.write_bytes(b"CREATE TABLE users (\r\n  id INT\r\n);\r\n")
    return path
