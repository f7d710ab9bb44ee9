"""Content-addressable storage for canonical wallpaper files."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from wallpaper.imgproc.normalize import CANONICAL_EXTENSION
from wallpaper.services.errors import NotFound, StoreWriteError

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[0-9a-f]{32}\.png$")


@dataclass(frozen=True, slots=True)
class StoredObject:
    """Metadata describing a persisted canonical object."""

    name: str
    path: Path
    size: int
    modified_at: float

    @property
    def digest(self) -> str:
        return self.name[: -len(CANONICAL_EXTENSION)]

    @property
    def etag(self) -> str:
        return f'"{self.digest}"'


@dataclass(frozen=True, slots=True)
class PutResult:
    """Outcome of a store commit."""

    name: str
    created: bool


class LocalContentStore:
    """Flat directory keyed by content digest; each name is written at most once."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def object_name(digest: bytes | str) -> str:
        """Return the stored-object name for ``digest``."""

        hex_digest = digest.hex() if isinstance(digest, bytes) else digest.lower()
        return f"{hex_digest}{CANONICAL_EXTENSION}"

    @staticmethod
    def is_valid_name(name: str) -> bool:
        return bool(_NAME_PATTERN.fullmatch(name))

    def _path_for(self, name: str) -> Path:
        if not self.is_valid_name(name):
            raise NotFound(name)
        return self._root / name

    async def put(self, digest: bytes | str, data: bytes) -> PutResult:
        """Persist ``data`` under the digest name unless it already exists.

        A concurrent writer with the same digest carries byte-identical data,
        so whichever link lands first is kept and the other becomes a no-op.
        """

        name = self.object_name(digest)
        target = self._path_for(name)
        try:
            created = await asyncio.to_thread(self._write_once, target, data)
        except OSError as exc:
            raise StoreWriteError(f"failed to store {name}: {exc}") from exc
        if not created:
            logger.debug("Object %s already stored, skipping write", name)
        return PutResult(name=name, created=created)

    def _write_once(self, target: Path, data: bytes) -> bool:
        if target.exists():
            return False

        fd, tmp_name = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=self._root)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, 0o644)
            try:
                os.link(tmp_name, target)
            except FileExistsError:
                return False
            return True
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)

    async def get(self, name: str) -> StoredObject:
        """Return metadata for ``name`` or raise :class:`NotFound`."""

        path = self._path_for(name)
        try:
            stat = await asyncio.to_thread(path.stat)
        except FileNotFoundError as exc:
            raise NotFound(name) from exc
        return StoredObject(name=name, path=path, size=stat.st_size, modified_at=stat.st_mtime)

    async def open(self, name: str) -> tuple[BinaryIO, StoredObject]:
        """Open ``name`` for reading and return the handle with its metadata."""

        stored = await self.get(name)
        try:
            handle = await asyncio.to_thread(stored.path.open, "rb")
        except FileNotFoundError as exc:
            raise NotFound(name) from exc
        return handle, stored

    async def read_bytes(self, name: str) -> bytes:
        """Return the full content stored under ``name``."""

        handle, _ = await self.open(name)
        with handle:
            return await asyncio.to_thread(handle.read)
