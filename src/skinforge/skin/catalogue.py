"""Body-part catalogue for the humanoid skin model.

Sizes and positions are in model units (1 unit == 1 skin pixel).  Atlas
rectangles follow the standard 64px-wide skin layout; each box is
described by the top-left corner of its unwrapped net on the atlas, see
:func:`box_uv`.

Part keys name where a part sits from the viewer's side when the model
faces the camera: ``leftArm`` is at -X and uses the atlas region of the
character's right arm.
"""

from dataclasses import dataclass
from enum import Enum

from skinforge.constants import ARM_ATTACH_X, CLASSIC_ARM_WIDTH, SLIM_ARM_WIDTH
from skinforge.skin.atlas import CuboidUV, FaceRect

Size3 = tuple[float, float, float]


class ModelVariant(Enum):
    CLASSIC = "classic"
    SLIM = "slim"


class LayerKind(Enum):
    BASE = "base"
    OVERLAY = "overlay"


class BodyPartKey(Enum):
    HEAD = "head"
    BODY = "body"
    LEFT_ARM = "leftArm"
    RIGHT_ARM = "rightArm"
    LEFT_LEG = "leftLeg"
    RIGHT_LEG = "rightLeg"


@dataclass(frozen=True)
class PartLayout:
    """Geometry and atlas mapping of one body part, both layers."""
    part: BodyPartKey
    base_size: Size3
    overlay_size: Size3
    position: Size3
    base_uv: CuboidUV
    overlay_uv: CuboidUV

    def size(self, layer: LayerKind) -> Size3:
        return self.base_size if layer is LayerKind.BASE else self.overlay_size

    def uv(self, layer: LayerKind) -> CuboidUV:
        return self.base_uv if layer is LayerKind.BASE else self.overlay_uv


def box_uv(u: float, v: float, width: float, height: float, depth: float) -> CuboidUV:
    """Face rectangles of a box net whose top-left corner is at (u, v).

    Net layout::

                 [ up ][down]
        [right][front][left][back]
    """
    return CuboidUV(
        up=FaceRect(u + depth, v, width, depth),
        down=FaceRect(u + depth + width, v, width, depth),
        right=FaceRect(u, v + depth, depth, height),
        front=FaceRect(u + depth, v + depth, width, height),
        left=FaceRect(u + depth + width, v + depth, depth, height),
        back=FaceRect(u + 2 * depth + width, v + depth, width, height),
    )


def arm_width(variant: ModelVariant) -> int:
    return SLIM_ARM_WIDTH if variant is ModelVariant.SLIM else CLASSIC_ARM_WIDTH


def arm_offset(variant: ModelVariant) -> float:
    """Horizontal distance of each arm's center from the body centerline."""
    return ARM_ATTACH_X + arm_width(variant) / 2


_HEAD = PartLayout(
    part=BodyPartKey.HEAD,
    base_size=(8, 8, 8),
    overlay_size=(9, 9, 9),
    position=(0, 24, 0),
    base_uv=box_uv(0, 0, 8, 8, 8),
    overlay_uv=box_uv(32, 0, 8, 8, 8),
)

_BODY = PartLayout(
    part=BodyPartKey.BODY,
    base_size=(8, 12, 4),
    overlay_size=(8.5, 12.5, 4.5),
    position=(0, 14, 0),
    base_uv=box_uv(16, 16, 8, 12, 4),
    overlay_uv=box_uv(16, 32, 8, 12, 4),
)

_LEFT_LEG = PartLayout(
    part=BodyPartKey.LEFT_LEG,
    base_size=(4, 12, 4),
    overlay_size=(4.5, 12.5, 4.5),
    position=(-2, 2, 0),
    base_uv=box_uv(0, 16, 4, 12, 4),
    overlay_uv=box_uv(0, 32, 4, 12, 4),
)

# The overlay net sits in the shared leg-overlay block at rows 48-64,
# left of the base net.
_RIGHT_LEG = PartLayout(
    part=BodyPartKey.RIGHT_LEG,
    base_size=(4, 12, 4),
    overlay_size=(4.5, 12.5, 4.5),
    position=(2, 2, 0),
    base_uv=box_uv(16, 48, 4, 12, 4),
    overlay_uv=box_uv(0, 48, 4, 12, 4),
)

# part: (x sign, base net origin, overlay net origin)
_ARM_NETS = {
    BodyPartKey.LEFT_ARM: (-1, (40, 16), (40, 32)),
    BodyPartKey.RIGHT_ARM: (1, (32, 48), (48, 48)),
}


def _arm_layout(part: BodyPartKey, variant: ModelVariant) -> PartLayout:
    sign, base_origin, overlay_origin = _ARM_NETS[part]
    w = arm_width(variant)
    return PartLayout(
        part=part,
        base_size=(w, 12, 4),
        overlay_size=(w + 0.5, 12.5, 4.5),
        position=(sign * arm_offset(variant), 14, 0),
        base_uv=box_uv(*base_origin, w, 12, 4),
        overlay_uv=box_uv(*overlay_origin, w, 12, 4),
    )


def part_catalogue(variant: ModelVariant) -> tuple[PartLayout, ...]:
    """All six part layouts for ``variant``, in assembly order."""
    return (
        _HEAD,
        _BODY,
        _arm_layout(BodyPartKey.LEFT_ARM, variant),
        _arm_layout(BodyPartKey.RIGHT_ARM, variant),
        _LEFT_LEG,
        _RIGHT_LEG,
    )
