"""Skin-to-mesh model builder: atlas mapping, textured boxes, humanoid assembly."""

from skinforge.skin.atlas import CuboidUV, FaceRect, UVRect, face_uv
from skinforge.skin.catalogue import (
    BodyPartKey, LayerKind, ModelVariant, PartLayout,
    arm_offset, arm_width, part_catalogue,
)
from skinforge.skin.cuboid import build_cuboid, make_textured_box
from skinforge.skin.humanoid import (
    LayerVisibility,
    apply_layer_visibility,
    build_skin_model,
    create_skin_materials,
    default_layer_visibility,
    mesh_name,
    read_layer_visibility,
    set_layer_visible,
)

__all__ = [
    "BodyPartKey",
    "CuboidUV",
    "FaceRect",
    "LayerKind",
    "LayerVisibility",
    "ModelVariant",
    "PartLayout",
    "UVRect",
    "apply_layer_visibility",
    "arm_offset",
    "arm_width",
    "build_cuboid",
    "build_skin_model",
    "create_skin_materials",
    "default_layer_visibility",
    "face_uv",
    "make_textured_box",
    "mesh_name",
    "part_catalogue",
    "read_layer_visibility",
    "set_layer_visible",
]
