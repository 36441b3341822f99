"""Skin PNG loading and validation.

A skin is a PNG exactly ATLAS_WIDTH pixels wide and one of
SUPPORTED_TEXTURE_HEIGHTS tall.  Anything else is rejected here, before a
model is built.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from skinforge.constants import ATLAS_WIDTH, SUPPORTED_TEXTURE_HEIGHTS

logger = logging.getLogger(__name__)


class SkinFormatError(ValueError):
    """Raised when image data is not a usable skin PNG."""


@dataclass
class SkinTexture:
    """A decoded, validated skin."""
    image: Image.Image
    width: int
    height: int
    png_bytes: bytes


def _open_png(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
    except UnidentifiedImageError as e:
        raise SkinFormatError("Could not detect image format") from e
    if image.format != "PNG":
        raise SkinFormatError(f"Skin must be a PNG, got {image.format}")
    try:
        image.load()
    except OSError as e:
        raise SkinFormatError(f"Could not read PNG: {e}") from e
    return image


def _check_size(width: int, height: int) -> None:
    if width != ATLAS_WIDTH or height not in SUPPORTED_TEXTURE_HEIGHTS:
        allowed = " or ".join(f"{ATLAS_WIDTH}x{h}" for h in SUPPORTED_TEXTURE_HEIGHTS)
        raise SkinFormatError(f"Invalid skin size {width}x{height}, expected {allowed}")


def validate_skin_png(data: bytes) -> tuple[int, int]:
    """Check that ``data`` is a PNG skin of a supported size.

    Returns (width, height).
    """
    image = _open_png(data)
    _check_size(*image.size)
    return image.size


def optimize_skin_png(data: bytes) -> bytes:
    """Validate and re-encode a skin as a plain RGBA PNG."""
    image = _open_png(data)
    _check_size(*image.size)
    return _encode_rgba(image)


def _encode_rgba(image: Image.Image) -> bytes:
    rgba = image.convert("RGBA")
    out = io.BytesIO()
    rgba.save(out, format="PNG", optimize=True)
    return out.getvalue()


def load_skin(path: str | Path) -> SkinTexture:
    """Read a skin PNG from disk."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Skin file not found: {path}")
    data = path.read_bytes()

    image = _open_png(data)
    _check_size(*image.size)
    rgba = image.convert("RGBA")
    png_bytes = _encode_rgba(rgba)
    logger.info("Loaded skin %s (%dx%d)", path.name, *rgba.size)
    return SkinTexture(image=rgba, width=rgba.width, height=rgba.height, png_bytes=png_bytes)
