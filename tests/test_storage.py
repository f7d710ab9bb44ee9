"""Tests for the write-once content-addressable store."""

from __future__ import annotations

import asyncio
import hashlib
import os
from pathlib import Path

import pytest
import pytest_mock

from wallpaper.services.errors import NotFound, StoreWriteError
from wallpaper.storage.backend import LocalContentStore

DIGEST = hashlib.md5(b"raw upload").hexdigest()


def test_object_name_accepts_bytes_and_hex() -> None:
    raw = hashlib.md5(b"raw upload").digest()

    assert LocalContentStore.object_name(raw) == f"{DIGEST}.png"
    assert LocalContentStore.object_name(DIGEST.upper()) == f"{DIGEST}.png"


@pytest.mark.asyncio
async def test_put_creates_object(store: LocalContentStore, store_root: Path) -> None:
    result = await store.put(DIGEST, b"canonical")

    assert result.created
    assert result.name == f"{DIGEST}.png"
    assert (store_root / result.name).read_bytes() == b"canonical"


@pytest.mark.asyncio
async def test_put_is_idempotent(store: LocalContentStore, store_root: Path) -> None:
    first = await store.put(DIGEST, b"canonical")
    path = store_root / first.name
    before = path.stat().st_mtime_ns

    second = await store.put(DIGEST, b"something else")

    assert not second.created
    assert second.name == first.name
    assert path.read_bytes() == b"canonical"
    assert path.stat().st_mtime_ns == before


@pytest.mark.asyncio
async def test_concurrent_puts_write_once(store: LocalContentStore, store_root: Path) -> None:
    results = await asyncio.gather(*(store.put(DIGEST, b"canonical") for _ in range(8)))

    assert sum(result.created for result in results) == 1
    assert sorted(os.listdir(store_root)) == [f"{DIGEST}.png"]


@pytest.mark.asyncio
async def test_failed_write_leaves_no_object(
    store: LocalContentStore,
    store_root: Path,
    mocker: pytest_mock.MockerFixture,
) -> None:
    mocker.patch("wallpaper.storage.backend.os.link", side_effect=PermissionError("read-only"))

    with pytest.raises(StoreWriteError, match="read-only"):
        await store.put(DIGEST, b"canonical")

    assert os.listdir(store_root) == []


@pytest.mark.asyncio
async def test_get_returns_metadata(store: LocalContentStore) -> None:
    await store.put(DIGEST, b"canonical")

    stored = await store.get(f"{DIGEST}.png")

    assert stored.size == len(b"canonical")
    assert stored.digest == DIGEST
    assert stored.etag == f'"{DIGEST}"'
    assert await store.read_bytes(stored.name) == b"canonical"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name",
    [f"{DIGEST}.png", "../secrets.png", "not-a-digest.png", f"{DIGEST}.jpg"],
)
async def test_get_missing_raises_not_found(store: LocalContentStore, name: str) -> None:
    with pytest.raises(NotFound):
        await store.get(name)


@pytest.mark.asyncio
async def test_open_returns_reader(store: LocalContentStore) -> None:
    await store.put(DIGEST, b"canonical")

    handle, stored = await store.open(f"{DIGEST}.png")
    with handle:
        assert handle.read() == b"canonical"
    assert stored.name == f"{DIGEST}.png"
