"""Humanoid assembler: builds the layered skin model from the part catalogue.

Hierarchy::

    skin_model                  (root, translated by MODEL_ROOT_OFFSET)
      head                      (group per part)
        head-base               (mesh node)
        head-overlay            (mesh node)
      body
      ...

The model is rebuilt when the texture, variant or texture height change.
Layer visibility is mutated in place on the mesh nodes.
"""

import logging
from typing import Optional

from skinforge.constants import (
    ATLAS_WIDTH, MATERIALS_CONFIG, MODEL_ROOT_NAME, MODEL_ROOT_OFFSET,
)
from skinforge.core.config_loader import load_config
from skinforge.core.material import Material
from skinforge.core.scene_graph import SceneNode
from skinforge.skin.catalogue import BodyPartKey, LayerKind, ModelVariant, part_catalogue
from skinforge.skin.cuboid import build_cuboid

logger = logging.getLogger(__name__)

LayerVisibility = dict[BodyPartKey, dict[LayerKind, bool]]


def default_layer_visibility() -> LayerVisibility:
    """Every part with both layers visible."""
    return {part: {LayerKind.BASE: True, LayerKind.OVERLAY: True} for part in BodyPartKey}


def mesh_name(part: BodyPartKey, layer: LayerKind) -> str:
    return f"{part.value}-{layer.value}"


def create_skin_materials(
    texture: object, settings: Optional[dict] = None,
) -> dict[LayerKind, Material]:
    """Create the two shared materials, one per layer.

    ``settings`` maps "base"/"overlay" to material options; when omitted
    they are read from skin_materials.json.
    """
    if settings is None:
        settings = load_config(MATERIALS_CONFIG)
    materials = {}
    for layer in LayerKind:
        layer_settings = settings.get(layer.value)
        if layer_settings is None:
            logger.warning("No material settings for %s layer, using defaults", layer.value)
            layer_settings = {"double_sided": layer is LayerKind.OVERLAY}
        materials[layer] = Material.from_settings(f"skin-{layer.value}", texture, layer_settings)
    return materials


def build_skin_model(
    texture: object,
    variant: ModelVariant,
    texture_height: int,
    visibility: Optional[LayerVisibility] = None,
    materials: Optional[dict[LayerKind, Material]] = None,
) -> SceneNode:
    """Build the full layered humanoid for a skin texture.

    ``texture_height`` must be one of SUPPORTED_TEXTURE_HEIGHTS; it is not
    validated here.  Parts or layers missing from ``visibility`` are shown.
    """
    if visibility is None:
        visibility = default_layer_visibility()
    if materials is None:
        materials = create_skin_materials(texture)
    atlas_size = (ATLAS_WIDTH, texture_height)

    root = SceneNode(name=MODEL_ROOT_NAME)
    for layout in part_catalogue(variant):
        group = SceneNode(name=layout.part.value)
        for layer in LayerKind:
            node = build_cuboid(
                mesh_name(layout.part, layer),
                layout.size(layer),
                layout.position,
                layout.uv(layer),
                atlas_size,
                materials[layer],
                part=layout.part,
                layer=layer,
            )
            node.visible = visibility.get(layout.part, {}).get(layer, True)
            group.add(node)
        root.add(group)

    root.set_position(*MODEL_ROOT_OFFSET)
    logger.debug("Built %s skin model (%dx%d atlas)", variant.value, *atlas_size)
    return root


def get_layer_node(root: SceneNode, part: BodyPartKey, layer: LayerKind) -> SceneNode:
    node = root.find(mesh_name(part, layer))
    if node is None:
        raise KeyError(mesh_name(part, layer))
    return node


def set_layer_visible(
    root: SceneNode, part: BodyPartKey, layer: LayerKind, visible: bool,
) -> None:
    """Show or hide one layer mesh of one part."""
    get_layer_node(root, part, layer).visible = visible


def apply_layer_visibility(root: SceneNode, visibility: LayerVisibility) -> None:
    """Apply every flag present in ``visibility`` to the built model."""
    for part, layers in visibility.items():
        for layer, visible in layers.items():
            set_layer_visible(root, part, layer, visible)


def read_layer_visibility(root: SceneNode) -> LayerVisibility:
    """Current visibility flags of a built model."""
    return {
        part: {layer: get_layer_node(root, part, layer).visible for layer in LayerKind}
        for part in BodyPartKey
    }
