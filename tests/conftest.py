"""Shared fixtures for wallpaper service tests."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from wallpaper.config.settings import Settings
from wallpaper.storage.backend import LocalContentStore


def make_png(size: tuple[int, int] = (100, 100), color: tuple[int, ...] = (30, 144, 255), mode: str = "RGB") -> bytes:
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_jpeg(size: tuple[int, int] = (100, 100)) -> bytes:
    buffer = BytesIO()
    Image.effect_noise(size, 64).convert("RGB").save(buffer, format="JPEG", quality=90)
    return buffer.getvalue()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture
def settings(store_root: Path) -> Settings:
    return Settings(store_root=str(store_root), external_url="https://wallpapers.test/ignored/path")


@pytest.fixture
def store(store_root: Path) -> LocalContentStore:
    return LocalContentStore(store_root)


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()
