"""Decode, hash, normalise and commit uploaded wallpapers."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import BinaryIO
from urllib.parse import urlsplit, urlunsplit

from PIL import Image

from wallpaper.imgproc.decoder import decode_image
from wallpaper.imgproc.hashing import HashingReader
from wallpaper.imgproc.normalize import encode_canonical
from wallpaper.metrics.prometheus_exporter import store_writes_total
from wallpaper.services.errors import DecodeError
from wallpaper.storage.backend import LocalContentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Outcome of a successful upload."""

    digest: str
    name: str
    public_url: str
    created: bool


def build_public_url(external_url: str, base_path: str, name: str) -> str:
    """Return the absolute download link for ``name``.

    Only scheme and host of ``external_url`` are kept; its path is replaced.
    """

    parts = urlsplit(external_url)
    return urlunsplit((parts.scheme, parts.netloc, f"{base_path}/download/{name}", "", ""))


def decode_and_hash(stream: BinaryIO, content_type: str | None) -> tuple[Image.Image, str]:
    """Decode ``stream`` while hashing the very same bytes in one pass."""

    reader = HashingReader(stream)
    try:
        image = decode_image(reader, content_type)
    except DecodeError:
        reader.drain()
        logger.debug("Discarding digest %s of undecodable upload", reader.hexdigest())
        raise
    reader.drain()
    return image, reader.hexdigest()


class IngestService:
    """Runs the decode/hash and commit stages of an upload."""

    def __init__(self, store: LocalContentStore, *, external_url: str, base_path: str = "") -> None:
        self._store = store
        self._external_url = external_url
        self._base_path = base_path

    def public_url(self, name: str) -> str:
        return build_public_url(self._external_url, self._base_path, name)

    async def ingest(self, stream: BinaryIO, content_type: str | None) -> IngestResult:
        """Store the canonical form of ``stream`` and return its public reference."""

        started = time.perf_counter()
        image, digest = await asyncio.to_thread(decode_and_hash, stream, content_type)
        logger.debug("Decode and hash took %.3fs", time.perf_counter() - started)

        started = time.perf_counter()
        try:
            data = await asyncio.to_thread(encode_canonical, image, force_alpha=True)
        finally:
            image.close()
        result = await self._store.put(digest, data)
        logger.debug("PNG encode and commit took %.3fs", time.perf_counter() - started)

        store_writes_total.labels(result="written" if result.created else "deduplicated").inc()
        logger.info(
            "Stored upload %s (%s)",
            result.name,
            "new" if result.created else "already present",
        )
        return IngestResult(
            digest=digest,
            name=result.name,
            public_url=self.public_url(result.name),
            created=result.created,
        )
