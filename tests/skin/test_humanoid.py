"""Tests for the humanoid assembler."""

import numpy as np
import pytest

from skinforge.core.scene_graph import SceneNode
from skinforge.skin.catalogue import BodyPartKey, LayerKind, ModelVariant
from skinforge.skin.humanoid import (
    apply_layer_visibility,
    build_skin_model,
    create_skin_materials,
    default_layer_visibility,
    mesh_name,
    read_layer_visibility,
    set_layer_visible,
)

TEXTURE = object()


def _mesh_nodes(root):
    nodes = []
    root.traverse(lambda n: nodes.append(n) if n.mesh is not None else None)
    return nodes


def _visibility_flags(root):
    return {n.name: n.visible for n in _mesh_nodes(root)}


def _signature(root):
    """Structure and geometry of a model, for equality checks."""
    sig = []

    def _visit(node):
        entry = [node.name, tuple(node.position), node.visible]
        if node.mesh is not None:
            geom = node.mesh.geometry
            entry += [geom.positions.tobytes(), geom.uvs.tobytes(), geom.indices.tobytes()]
        sig.append(tuple(entry))

    root.traverse(_visit)
    return sig


@pytest.fixture
def model():
    return build_skin_model(TEXTURE, ModelVariant.CLASSIC, 64, default_layer_visibility())


def test_model_structure(model):
    assert model.name == "skin_model"
    assert len(model.children) == 6
    assert [g.name for g in model.children] == [p.value for p in BodyPartKey]
    for group in model.children:
        assert len(group.children) == 2
        assert all(child.mesh is not None for child in group.children)
    assert len(_mesh_nodes(model)) == 12


def test_root_offset(model):
    np.testing.assert_array_equal(model.position, [0, -12, 0])


def test_mesh_names_and_tags(model):
    for part in BodyPartKey:
        group = model.find(part.value)
        assert group is not None and group.mesh is None
        for layer in LayerKind:
            node = model.find(mesh_name(part, layer))
            assert node.parent is group
            assert node.mesh.part is part
            assert node.mesh.layer is layer


def test_mesh_name_format():
    assert mesh_name(BodyPartKey.LEFT_ARM, LayerKind.OVERLAY) == "leftArm-overlay"
    assert mesh_name(BodyPartKey.HEAD, LayerKind.BASE) == "head-base"


def test_layers_share_position(model):
    for part in BodyPartKey:
        base = model.find(mesh_name(part, LayerKind.BASE))
        overlay = model.find(mesh_name(part, LayerKind.OVERLAY))
        np.testing.assert_array_equal(base.position, overlay.position)


def test_overlay_encloses_base(model):
    for part in BodyPartKey:
        base = model.find(mesh_name(part, LayerKind.BASE)).mesh.geometry.get_size()
        overlay = model.find(mesh_name(part, LayerKind.OVERLAY)).mesh.geometry.get_size()
        assert np.all(overlay > base)


def test_materials_shared_per_layer(model):
    by_layer = {layer: set() for layer in LayerKind}
    for node in _mesh_nodes(model):
        by_layer[node.mesh.layer].add(id(node.mesh.material))
    assert len(by_layer[LayerKind.BASE]) == 1
    assert len(by_layer[LayerKind.OVERLAY]) == 1

    overlay = model.find("head-overlay").mesh.material
    base = model.find("head-base").mesh.material
    assert overlay.double_sided and not base.double_sided
    assert overlay.texture is TEXTURE and base.texture is TEXTURE
    assert overlay.alpha_test == pytest.approx(0.05)


def test_create_skin_materials_with_explicit_settings():
    materials = create_skin_materials("tex", {
        "base": {"alpha_test": 0.1},
        "overlay": {"alpha_test": 0.2, "double_sided": True},
    })
    assert materials[LayerKind.BASE].alpha_test == pytest.approx(0.1)
    assert materials[LayerKind.OVERLAY].double_sided is True


def test_create_skin_materials_missing_layer_falls_back():
    materials = create_skin_materials("tex", {"base": {}})
    assert materials[LayerKind.OVERLAY].double_sided is True
    assert materials[LayerKind.BASE].double_sided is False


def test_default_visibility_all_visible(model):
    assert all(_visibility_flags(model).values())
    vis = default_layer_visibility()
    assert set(vis) == set(BodyPartKey)
    assert all(all(layers.values()) for layers in vis.values())


def test_visibility_input_applied():
    vis = default_layer_visibility()
    vis[BodyPartKey.HEAD][LayerKind.OVERLAY] = False
    vis[BodyPartKey.RIGHT_LEG][LayerKind.BASE] = False
    root = build_skin_model(TEXTURE, ModelVariant.SLIM, 64, vis)

    hidden = {name for name, visible in _visibility_flags(root).items() if not visible}
    assert hidden == {"head-overlay", "rightLeg-base"}


def test_partial_visibility_defaults_to_visible():
    root = build_skin_model(TEXTURE, ModelVariant.CLASSIC, 64,
                            {BodyPartKey.BODY: {LayerKind.BASE: False}})
    hidden = {name for name, visible in _visibility_flags(root).items() if not visible}
    assert hidden == {"body-base"}


@pytest.mark.parametrize("part", list(BodyPartKey))
@pytest.mark.parametrize("layer", list(LayerKind))
def test_toggle_affects_exactly_one_mesh(model, part, layer):
    before = _visibility_flags(model)
    geometry_before = _signature(model)

    set_layer_visible(model, part, layer, False)

    after = _visibility_flags(model)
    changed = [name for name in before if before[name] != after[name]]
    assert changed == [mesh_name(part, layer)]
    # Geometry and topology untouched
    assert [s[:2] + s[3:] for s in _signature(model)] == [s[:2] + s[3:] for s in geometry_before]


def test_apply_and_read_visibility(model):
    vis = default_layer_visibility()
    vis[BodyPartKey.LEFT_ARM][LayerKind.BASE] = False
    apply_layer_visibility(model, vis)
    assert read_layer_visibility(model) == vis


def test_set_layer_visible_unknown_model():
    with pytest.raises(KeyError):
        set_layer_visible(SceneNode(name="empty"), BodyPartKey.HEAD, LayerKind.BASE, False)


def test_rebuild_is_deterministic():
    a = build_skin_model(TEXTURE, ModelVariant.SLIM, 128, default_layer_visibility())
    b = build_skin_model(TEXTURE, ModelVariant.SLIM, 128, default_layer_visibility())
    assert a is not b
    assert _signature(a) == _signature(b)


def test_variant_switch_changes_only_arms():
    classic = build_skin_model(TEXTURE, ModelVariant.CLASSIC, 64)
    slim = build_skin_model(TEXTURE, ModelVariant.SLIM, 64)
    arms = {BodyPartKey.LEFT_ARM.value, BodyPartKey.RIGHT_ARM.value}

    for group_c, group_s in zip(classic.children, slim.children):
        same = _signature(group_c) == _signature(group_s)
        assert same == (group_c.name not in arms), group_c.name


def test_slim_arm_geometry():
    slim = build_skin_model(TEXTURE, ModelVariant.SLIM, 64)
    arm = slim.find("rightArm-base")
    np.testing.assert_array_almost_equal(arm.mesh.geometry.get_size(), [3, 12, 4])
    np.testing.assert_array_almost_equal(arm.position, [5.5, 14, 0])


def test_texture_height_scales_v(model):
    tall = build_skin_model(TEXTURE, ModelVariant.CLASSIC, 128)
    uv64 = model.find("head-base").mesh.uvs.reshape(-1, 2)
    uv128 = tall.find("head-base").mesh.uvs.reshape(-1, 2)
    np.testing.assert_array_almost_equal(uv64[:, 0], uv128[:, 0])
    # v = 1 - y/H: the distance from the top edge halves on a 128px atlas
    np.testing.assert_array_almost_equal(1 - uv128[:, 1], (1 - uv64[:, 1]) / 2)


def test_world_extent(model):
    model.update_world_matrix(force=True)
    lows, highs = [], []
    for mesh, world in model.collect_meshes():
        lo, hi = mesh.geometry.get_bounding_box()
        lows.append(lo + world[:3, 3])
        highs.append(hi + world[:3, 3])
    lo = np.min(lows, axis=0)
    hi = np.max(highs, axis=0)
    # Head overlay top at 28.5, leg overlay bottom at -4.25, minus the root offset
    assert hi[1] == pytest.approx(28.5 - 12)
    assert lo[1] == pytest.approx(-4.25 - 12)
