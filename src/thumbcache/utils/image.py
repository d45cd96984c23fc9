"""Image decoding utilities."""

from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from thumbcache.errors.exceptions import DecodeError


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded PIL image.

    Raises DecodeError if the bytes are empty, truncated, or not an image
    format Pillow understands.
    """
    if not data:
        raise DecodeError("Empty image data")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (
        UnidentifiedImageError,
        OSError,
        SyntaxError,
        ValueError,
        Image.DecompressionBombError,
    ) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e
    return img


def describe_image(img: Image.Image) -> str:
    """Short human-readable summary, e.g. ``PNG 64x48 RGB``."""
    fmt = img.format or "image"
    return f"{fmt} {img.width}x{img.height} {img.mode}"
