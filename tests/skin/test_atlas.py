"""Tests for atlas rectangle → UV conversion."""

import pytest

from skinforge.skin.atlas import FACE_NAMES, CuboidUV, FaceRect, UVRect, face_uv


def test_face_uv_formula():
    uv = face_uv(FaceRect(8, 8, 8, 8), 64, 64)
    assert uv.u0 == pytest.approx(8 / 64)
    assert uv.u1 == pytest.approx(16 / 64)
    assert uv.v0 == pytest.approx(1 - 8 / 64)
    assert uv.v1 == pytest.approx(1 - 16 / 64)


def test_face_uv_flips_vertically():
    # Lower on the image (larger y) means smaller v
    upper = face_uv(FaceRect(0, 0, 4, 4), 64, 64)
    lower = face_uv(FaceRect(0, 48, 4, 4), 64, 64)
    assert upper.v0 == pytest.approx(1.0)
    assert upper.v0 > upper.v1
    assert lower.v0 < upper.v1


def test_face_uv_uses_atlas_height():
    uv = face_uv(FaceRect(40, 16, 4, 12), 64, 128)
    assert uv.u0 == pytest.approx(40 / 64)
    assert uv.v0 == pytest.approx(1 - 16 / 128)
    assert uv.v1 == pytest.approx(1 - 28 / 128)


def test_full_atlas_maps_to_unit_square():
    uv = face_uv(FaceRect(0, 0, 64, 64), 64, 64)
    assert (uv.u0, uv.v0, uv.u1, uv.v1) == pytest.approx((0.0, 1.0, 1.0, 0.0))


def test_uv_corner_order():
    corners = UVRect(u0=0.1, v0=0.9, u1=0.2, v1=0.7).corners()
    # top-left, top-right, bottom-left, bottom-right
    assert corners == ((0.1, 0.9), (0.2, 0.9), (0.1, 0.7), (0.2, 0.7))


@pytest.mark.parametrize("rect, expected", [
    (FaceRect(0, 0, 8, 8), True),
    (FaceRect(56, 56, 8, 8), True),
    (FaceRect(60, 0, 8, 8), False),
    (FaceRect(0, 60, 4, 8), False),
    (FaceRect(-1, 0, 4, 4), False),
    (FaceRect(4, 4, 0, 4), False),
])
def test_face_rect_fits(rect, expected):
    assert rect.fits(64, 64) is expected


def test_cuboid_uv_rects_cover_all_faces():
    rects = {name: FaceRect(i, 0, 1, 1) for i, name in enumerate(FACE_NAMES)}
    cuboid = CuboidUV(**rects)
    assert cuboid.rects() == rects
    assert cuboid.face("front") is rects["front"]
