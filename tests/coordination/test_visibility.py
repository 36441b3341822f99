"""Tests for the layer visibility manager."""

import pytest

from skinforge.coordination.visibility import VisibilityManager
from skinforge.core.scene_graph import SceneNode
from skinforge.skin.catalogue import ModelVariant
from skinforge.skin.humanoid import build_skin_model


@pytest.fixture
def model():
    return build_skin_model(None, ModelVariant.CLASSIC, 64)


def test_register_and_toggle():
    vm = VisibilityManager()
    a = SceneNode(name="a")
    b = SceneNode(name="b")
    vm.register("pair", a)
    vm.register("pair", b)

    vm.set_visible("pair", False)
    assert not a.visible and not b.visible
    assert vm.is_visible("pair") is False


def test_unknown_toggle_is_visible_but_cannot_be_set():
    vm = VisibilityManager()
    assert vm.is_visible("missing") is True
    with pytest.raises(KeyError):
        vm.set_visible("missing", False)


def test_register_model(model):
    vm = VisibilityManager()
    vm.register_model(model)
    assert len(vm.get_toggle_names()) == 12
    assert "head-overlay" in vm.get_toggle_names()


def test_toggle_model_layer(model):
    vm = VisibilityManager()
    vm.register_model(model)
    vm.set_visible("leftLeg-overlay", False)
    assert model.find("leftLeg-overlay").visible is False
    assert model.find("leftLeg-base").visible is True


def test_clear(model):
    vm = VisibilityManager()
    vm.register_model(model)
    vm.clear()
    assert vm.get_toggle_names() == []
