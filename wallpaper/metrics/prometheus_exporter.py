"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest


uploads_total = Counter(
    "wallpaper_uploads_total",
    "Upload requests by outcome.",
    ["outcome"],
)

store_writes_total = Counter(
    "wallpaper_store_writes_total",
    "Store commits split into physical writes and deduplicated skips.",
    ["result"],
)

downloads_total = Counter(
    "wallpaper_downloads_total",
    "Download requests by outcome.",
    ["outcome"],
)


def render_latest() -> tuple[bytes, str]:
    """Return the exposition payload and its content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
