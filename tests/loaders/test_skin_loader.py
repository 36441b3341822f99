"""Tests for skin PNG loading and validation."""

import io

import pytest
from PIL import Image

from skinforge.loaders.skin_loader import (
    SkinFormatError, load_skin, optimize_skin_png, validate_skin_png,
)


def _png_bytes(width=64, height=64, mode="RGBA", fmt="PNG"):
    image = Image.new(mode, (width, height))
    out = io.BytesIO()
    image.save(out, format=fmt)
    return out.getvalue()


@pytest.mark.parametrize("height", [64, 128])
def test_validate_supported_sizes(height):
    assert validate_skin_png(_png_bytes(64, height)) == (64, height)


@pytest.mark.parametrize("size", [(64, 32), (128, 128), (32, 64), (64, 96)])
def test_validate_rejects_other_sizes(size):
    with pytest.raises(SkinFormatError, match="Invalid skin size"):
        validate_skin_png(_png_bytes(*size))


def test_validate_rejects_non_png():
    with pytest.raises(SkinFormatError, match="PNG"):
        validate_skin_png(_png_bytes(mode="RGB", fmt="BMP"))


def test_validate_rejects_garbage():
    with pytest.raises(SkinFormatError):
        validate_skin_png(b"not an image at all")


def test_skin_format_error_is_value_error():
    assert issubclass(SkinFormatError, ValueError)


def test_optimize_converts_to_rgba():
    data = optimize_skin_png(_png_bytes(mode="P"))
    image = Image.open(io.BytesIO(data))
    assert image.format == "PNG"
    assert image.mode == "RGBA"
    assert image.size == (64, 64)


def test_optimize_keeps_pixels():
    image = Image.new("RGBA", (64, 64))
    image.putpixel((8, 8), (255, 0, 0, 255))
    out = io.BytesIO()
    image.save(out, format="PNG")
    result = Image.open(io.BytesIO(optimize_skin_png(out.getvalue())))
    assert result.getpixel((8, 8)) == (255, 0, 0, 255)
    assert result.getpixel((0, 0)) == (0, 0, 0, 0)


def test_load_skin(tmp_path):
    path = tmp_path / "steve.png"
    path.write_bytes(_png_bytes(64, 128, mode="RGB"))
    skin = load_skin(path)
    assert (skin.width, skin.height) == (64, 128)
    assert skin.image.mode == "RGBA"
    assert validate_skin_png(skin.png_bytes) == (64, 128)


def test_load_skin_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_skin(tmp_path / "missing.png")


def test_load_skin_invalid(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(_png_bytes(64, 32))
    with pytest.raises(SkinFormatError):
        load_skin(path)
