"""Entry point for launching the HTTP server."""

from __future__ import annotations

import uvicorn

from wallpaper.config.settings import get_settings
from wallpaper.monitoring.logging import configure_logging


def main() -> None:
    """Configure logging and serve the application."""

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "wallpaper.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
