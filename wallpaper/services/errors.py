"""Error taxonomy shared by the ingest and retrieval paths."""

from __future__ import annotations

from wallpaper.services.stages import IngestStage


class WallpaperError(Exception):
    """Base class for failures surfaced to HTTP callers."""

    stage: IngestStage | None = None

    def __init__(self, message: str, *, stage: IngestStage | None = None) -> None:
        if stage is not None:
            self.stage = stage
        super().__init__(message)


class SizeLimitExceeded(WallpaperError):
    """Raised when the request body grows past the configured ceiling."""

    stage = IngestStage.RECEIVING_BODY

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"request body too large: limit is {limit} bytes")


class MalformedRequest(WallpaperError):
    """Raised for broken multipart bodies or a missing upload field."""

    stage = IngestStage.PARSING


class UnsupportedFormat(WallpaperError):
    """Raised when the declared content type is not a supported encoding."""

    stage = IngestStage.DECODING_HASHING

    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__(f"unrecognized image format: {content_type or ''}")


class DecodeError(WallpaperError):
    """Raised when bytes cannot be decoded as the claimed encoding."""

    stage = IngestStage.DECODING_HASHING


class StoreWriteError(WallpaperError):
    """Raised when the canonical object cannot be persisted."""

    stage = IngestStage.COMMITTING


class NotFound(WallpaperError):
    """Raised when a stored object name does not resolve."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"object not found: {name}")
