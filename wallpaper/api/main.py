"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from wallpaper.api.pages import render_index, render_upload_result
from wallpaper.api.upload import read_upload
from wallpaper.config.settings import Settings, get_settings
from wallpaper.imgproc.normalize import CANONICAL_MEDIA_TYPE
from wallpaper.metrics.prometheus_exporter import downloads_total, render_latest, uploads_total
from wallpaper.services.errors import NotFound, WallpaperError
from wallpaper.services.ingest import IngestService
from wallpaper.services.retrieval import RetrievalService
from wallpaper.services.stages import IngestStage
from wallpaper.storage.backend import LocalContentStore

logger = logging.getLogger(__name__)

STATIC_CSS_DIR = Path(__file__).parent / "static" / "css"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()
    store = LocalContentStore(Path(settings.store_root))
    ingest = IngestService(store, external_url=settings.external_url, base_path=settings.base_path)
    retrieval = RetrievalService(store)

    app = FastAPI(
        title="Mac Login Wallpaper",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )
    router = APIRouter(prefix=settings.base_path)

    async def index() -> HTMLResponse:
        return HTMLResponse(render_index(settings.base_path, settings.upload_field))

    app.add_api_route("/", index, methods=["GET"], include_in_schema=False)
    if settings.base_path:
        app.add_api_route(settings.base_path, index, methods=["GET"], include_in_schema=False)

    @router.post("/upload", tags=["wallpapers"])
    async def upload(request: Request) -> Response:
        """Convert an uploaded JPEG or PNG and return a link to the stored PNG."""

        started = time.perf_counter()
        try:
            async with read_upload(
                request,
                field=settings.upload_field,
                limit=settings.max_upload_bytes,
            ) as upload_file:
                logger.debug("Parse took %.3fs", time.perf_counter() - started)
                result = await ingest.ingest(upload_file.file, upload_file.content_type)
        except WallpaperError as exc:
            stage = exc.stage or IngestStage.RESPONDED_ERROR
            logger.error("Upload failed during %s: %s", stage.value, exc)
            uploads_total.labels(outcome=type(exc).__name__).inc()
            return PlainTextResponse(str(exc), status_code=500)

        logger.info("Upload %s: %s", IngestStage.RESPONDED_SUCCESS.value, result.name)
        uploads_total.labels(outcome="success").inc()
        return HTMLResponse(render_upload_result(settings.base_path, result.public_url))

    @router.get("/download/{name}", tags=["wallpapers"])
    async def download(name: str, request: Request) -> Response:
        """Stream a stored wallpaper with conditional and range request support."""

        try:
            stored = await retrieval.resolve(name)
        except NotFound as exc:
            logger.info("Download miss: %s", name)
            downloads_total.labels(outcome="not_found").inc()
            return PlainTextResponse(str(exc), status_code=404)
        except OSError as exc:
            logger.error("Download of %s failed: %s", name, exc)
            downloads_total.labels(outcome="error").inc()
            return PlainTextResponse(str(exc), status_code=500)

        headers = retrieval.response_headers(stored)
        if retrieval.is_not_modified(request.headers, stored):
            downloads_total.labels(outcome="not_modified").inc()
            return Response(status_code=304, headers=headers)

        downloads_total.labels(outcome="served").inc()
        return FileResponse(stored.path, media_type=CANONICAL_MEDIA_TYPE, headers=headers)

    app.include_router(router)
    app.mount(
        f"{settings.base_path}/css",
        StaticFiles(directory=STATIC_CSS_DIR, check_dir=False),
        name="css",
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/metrics", tags=["system"], include_in_schema=False)
    async def metrics() -> Response:
        payload, content_type = render_latest()
        return Response(content=payload, media_type=content_type)

    return app
