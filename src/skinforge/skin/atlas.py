"""Skin atlas rectangles and their conversion to per-face UV coordinates.

Atlas rectangles are given in pixels with a top-left origin, the way skin
templates are drawn. UV space has a bottom-left origin, so ``v`` is flipped:
``v = 1 - y / height``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FaceRect:
    """Pixel rectangle on the atlas (top-left origin)."""
    x: float
    y: float
    width: float
    height: float

    def fits(self, atlas_width: int, atlas_height: int) -> bool:
        """True when the rectangle lies fully inside the atlas."""
        return (
            0 <= self.x and self.x + self.width <= atlas_width
            and 0 <= self.y and self.y + self.height <= atlas_height
            and self.width > 0 and self.height > 0
        )


@dataclass(frozen=True)
class CuboidUV:
    """The six face rectangles of one textured box."""
    up: FaceRect
    down: FaceRect
    right: FaceRect
    front: FaceRect
    left: FaceRect
    back: FaceRect

    def face(self, name: str) -> FaceRect:
        return getattr(self, name)

    def rects(self) -> dict[str, FaceRect]:
        return {name: self.face(name) for name in FACE_NAMES}


# Canonical face names, in the order the cuboid builder emits them
FACE_NAMES = ("right", "left", "up", "down", "front", "back")


@dataclass(frozen=True)
class UVRect:
    """Normalized UV extent of one face.

    (u0, v0) is the image's top-left corner, (u1, v1) its bottom-right;
    because of the vertical flip v0 > v1.
    """
    u0: float
    v0: float
    u1: float
    v1: float

    def corners(self) -> tuple[tuple[float, float], ...]:
        """UV pairs for the face vertices: top-left, top-right, bottom-left, bottom-right."""
        return (
            (self.u0, self.v0),
            (self.u1, self.v0),
            (self.u0, self.v1),
            (self.u1, self.v1),
        )


def face_uv(rect: FaceRect, atlas_width: int, atlas_height: int) -> UVRect:
    """Convert an atlas pixel rectangle to normalized UV coordinates."""
    return UVRect(
        u0=rect.x / atlas_width,
        v0=1.0 - rect.y / atlas_height,
        u1=(rect.x + rect.width) / atlas_width,
        v1=1.0 - (rect.y + rect.height) / atlas_height,
    )
