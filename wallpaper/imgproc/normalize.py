"""Image normalisation helpers."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

CANONICAL_FORMAT = "PNG"
CANONICAL_EXTENSION = ".png"
CANONICAL_MEDIA_TYPE = "image/png"


def _is_opaque(image: Image.Image) -> bool:
    if "A" not in image.getbands():
        return True
    low, _ = image.getchannel("A").getextrema()
    return low == 255


def normalize_image(image: Image.Image, *, force_alpha: bool = True) -> Image.Image:
    """Copy ``image`` into a fresh RGBA pixel grid of the same size.

    With ``force_alpha`` the result keeps its alpha plane even when every
    pixel is opaque; otherwise opaque sources are reduced to RGB.
    """

    rgba = image.convert("RGBA")
    if force_alpha or not _is_opaque(rgba):
        return rgba
    return rgba.convert("RGB")


def encode_canonical(image: Image.Image, *, force_alpha: bool = True) -> bytes:
    """Return canonical PNG bytes for ``image``."""

    buffer = BytesIO()
    normalize_image(image, force_alpha=force_alpha).save(buffer, format=CANONICAL_FORMAT)
    return buffer.getvalue()
