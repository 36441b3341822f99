"""Textured box builder.

Every face of a box is an independent quad (24 verts, 12 tris) so each can
carry its own atlas rectangle.  The humanoid faces +Z; face names are the
humanoid's own sides, so the ``right`` face points to -X.

``FACE_FRAMES`` is the only place that ties semantic face names to
geometry.  For each face it stores the outward normal and the directions
of the texture image's right and up edges as seen from outside the face,
so every rectangle lands upright and unmirrored.
"""

import numpy as np

from skinforge.core.material import Material
from skinforge.core.mesh import BufferGeometry, MeshInstance
from skinforge.core.scene_graph import SceneNode
from skinforge.skin.atlas import FACE_NAMES, CuboidUV, face_uv

# face: (outward normal, image right, image up)
FACE_FRAMES: dict[str, tuple[tuple[int, int, int], ...]] = {
    "right": ((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
    "left":  ((1, 0, 0), (0, 0, -1), (0, 1, 0)),
    # Top image: lower edge meets the front face
    "up":    ((0, 1, 0), (1, 0, 0), (0, 0, -1)),
    # Bottom image: upper edge meets the front face
    "down":  ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
    "front": ((0, 0, 1), (1, 0, 0), (0, 1, 0)),
    "back":  ((0, 0, -1), (-1, 0, 0), (0, 1, 0)),
}

# Two CCW triangles over (top-left, top-right, bottom-left, bottom-right)
_QUAD_TRIANGLES = (0, 2, 1, 2, 3, 1)


def box_face_corners(
    size: tuple[float, float, float], face: str,
) -> np.ndarray:
    """Return the 4 corners of a box face centered at the origin.

    Rows are top-left, top-right, bottom-left, bottom-right as seen from
    outside the face, matching :meth:`UVRect.corners`.
    """
    normal, right, up = (np.array(v, dtype=np.float64) for v in FACE_FRAMES[face])
    half = np.asarray(size, dtype=np.float64) / 2
    center = normal * np.dot(np.abs(normal), half)
    r = right * np.dot(np.abs(right), half)
    u = up * np.dot(np.abs(up), half)
    return np.array([
        center - r + u,
        center + r + u,
        center - r - u,
        center + r - u,
    ])


def make_textured_box(
    size: tuple[float, float, float],
    uv: CuboidUV,
    atlas_size: tuple[int, int],
) -> BufferGeometry:
    """Create a box centered at the origin with per-face atlas UVs."""
    atlas_width, atlas_height = atlas_size
    positions = []
    normals = []
    uvs = []
    indices = []

    for face in FACE_NAMES:
        base = len(positions)
        positions.extend(box_face_corners(size, face))
        normals.extend([FACE_FRAMES[face][0]] * 4)
        uvs.extend(face_uv(uv.face(face), atlas_width, atlas_height).corners())
        indices.extend(base + i for i in _QUAD_TRIANGLES)

    return BufferGeometry(
        positions=np.array(positions, dtype=np.float32).ravel(),
        normals=np.array(normals, dtype=np.float32).ravel(),
        uvs=np.array(uvs, dtype=np.float32).ravel(),
        indices=np.array(indices, dtype=np.uint32),
    )


def face_slice(face: str) -> slice:
    """Vertex range of ``face`` inside a box built by :func:`make_textured_box`."""
    start = FACE_NAMES.index(face) * 4
    return slice(start, start + 4)


def build_cuboid(
    name: str,
    size: tuple[float, float, float],
    position: tuple[float, float, float],
    uv: CuboidUV,
    atlas_size: tuple[int, int],
    material: Material,
    part: object = None,
    layer: object = None,
) -> SceneNode:
    """Build a positioned, textured box as a scene node holding one mesh."""
    node = SceneNode(name=name)
    node.mesh = MeshInstance(
        name=name,
        geometry=make_textured_box(size, uv, atlas_size),
        material=material,
        part=part,
        layer=layer,
    )
    node.set_position(*position)
    return node
