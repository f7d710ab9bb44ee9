"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised service settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    external_url: str = "https://groob.io"
    base_path: str = ""
    store_root: str = "data/wallpapers"
    max_upload_bytes: int = 10 << 20
    upload_field: str = "wallpaper"

    host: str = "0.0.0.0"
    port: int = 8080


def _normalize_base_path(raw: str) -> str:
    stripped = raw.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        external_url=os.getenv("WALLPAPER_EXTERNAL_URL", "https://groob.io"),
        base_path=_normalize_base_path(os.getenv("WALLPAPER_BASE_PATH", "")),
        store_root=os.getenv("WALLPAPER_STORE_ROOT", "data/wallpapers"),
        max_upload_bytes=int(os.getenv("WALLPAPER_MAX_UPLOAD_BYTES", str(10 << 20))),
        upload_field=os.getenv("WALLPAPER_UPLOAD_FIELD", "wallpaper"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
