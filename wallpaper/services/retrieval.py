"""Lookup and conditional-request helpers for stored wallpapers."""

from __future__ import annotations

from datetime import timezone
from email.utils import formatdate, parsedate_to_datetime
from typing import Mapping

from wallpaper.storage.backend import LocalContentStore, StoredObject

CACHE_CONTROL = "public, max-age=31536000, immutable"


class RetrievalService:
    """Resolves object names and decides whether a cached copy is still valid."""

    def __init__(self, store: LocalContentStore) -> None:
        self._store = store

    async def resolve(self, name: str) -> StoredObject:
        """Return the stored object for ``name``; raises ``NotFound``."""

        return await self._store.get(name)

    @staticmethod
    def response_headers(stored: StoredObject) -> dict[str, str]:
        return {
            "etag": stored.etag,
            "last-modified": formatdate(stored.modified_at, usegmt=True),
            "cache-control": CACHE_CONTROL,
        }

    @staticmethod
    def is_not_modified(request_headers: Mapping[str, str], stored: StoredObject) -> bool:
        """Evaluate ``If-None-Match`` first, then ``If-Modified-Since``."""

        if_none_match = request_headers.get("if-none-match")
        if if_none_match is not None:
            tags = [tag.strip() for tag in if_none_match.split(",")]
            return "*" in tags or any(tag.removeprefix("W/") == stored.etag for tag in tags)

        if_modified_since = request_headers.get("if-modified-since")
        if not if_modified_since:
            return False
        try:
            since = parsedate_to_datetime(if_modified_since)
        except (TypeError, ValueError):
            return False
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        return since.timestamp() >= int(stored.modified_at)
