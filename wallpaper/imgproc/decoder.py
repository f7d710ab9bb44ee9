"""Decoding of uploaded JPEG and PNG payloads into Pillow images."""

from __future__ import annotations

import struct
from typing import BinaryIO

from PIL import Image

from wallpaper.services.errors import DecodeError, UnsupportedFormat

SUPPORTED_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
}


def media_type(content_type: str | None) -> str:
    """Return the bare, lower-cased media type without parameters."""

    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def decode_image(stream: BinaryIO, content_type: str | None) -> Image.Image:
    """Decode ``stream`` as the encoding named by ``content_type``.

    Pixel data is loaded eagerly so truncated payloads fail here rather than
    later during re-encoding.
    """

    image_format = SUPPORTED_FORMATS.get(media_type(content_type))
    if image_format is None:
        raise UnsupportedFormat(content_type)

    try:
        image = Image.open(stream, formats=[image_format])
        image.load()
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"image dimensions rejected: {exc}") from exc
    except (OSError, SyntaxError, ValueError, EOFError, struct.error) as exc:
        raise DecodeError(f"invalid {image_format} data: {exc}") from exc
    return image
