"""Request-body bounding and multipart extraction for uploads."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect, Request
from starlette.types import Message, Receive

from wallpaper.services.errors import MalformedRequest, SizeLimitExceeded


class BoundedReceive:
    """ASGI receive wrapper that fails once the body passes ``limit`` bytes."""

    def __init__(self, receive: Receive, limit: int) -> None:
        self._receive = receive
        self._limit = limit
        self.received = 0

    async def __call__(self) -> Message:
        message = await self._receive()
        if message["type"] == "http.request":
            self.received += len(message.get("body", b""))
            if self.received > self._limit:
                raise SizeLimitExceeded(self._limit)
        return message


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None or not raw.strip().isdigit():
        return None
    return int(raw)


@asynccontextmanager
async def read_upload(request: Request, *, field: str, limit: int) -> AsyncIterator[UploadFile]:
    """Yield the uploaded file part named ``field``.

    The body ceiling is checked against ``Content-Length`` first and then
    enforced on the bytes actually received while the parser consumes them.
    """

    declared = _declared_length(request)
    if declared is not None and declared > limit:
        raise SizeLimitExceeded(limit)

    bounded = Request(request.scope, receive=BoundedReceive(request.receive, limit))
    try:
        form = await bounded.form(max_files=1)
    except ClientDisconnect as exc:
        raise MalformedRequest("client disconnected during upload") from exc
    except MultiPartException as exc:
        raise MalformedRequest(f"malformed multipart body: {exc.message}") from exc
    except HTTPException as exc:
        raise MalformedRequest(f"malformed multipart body: {exc.detail}") from exc

    try:
        upload = form.get(field)
        if not isinstance(upload, UploadFile):
            raise MalformedRequest(f"missing upload field: {field}")
        yield upload
    finally:
        await form.close()
