"""Skin model lifecycle: rebuild on input change, toggle layers in place."""

import logging
from typing import Optional

from skinforge.constants import DEFAULT_TEXTURE_HEIGHT
from skinforge.coordination.visibility import VisibilityManager
from skinforge.core.events import EventBus, SkinEventType
from skinforge.core.scene_graph import Scene, SceneNode
from skinforge.skin.catalogue import BodyPartKey, LayerKind, ModelVariant
from skinforge.skin.humanoid import (
    LayerVisibility, build_skin_model, default_layer_visibility, mesh_name,
)

logger = logging.getLogger(__name__)


class SkinModelController:
    """Owns the current skin model and keeps it attached to a scene.

    The model is rebuilt only when the texture, variant or texture height
    change.  Layer toggles go through the visibility manager and never
    rebuild; the visibility state survives rebuilds.
    """

    def __init__(self, scene: Optional[Scene] = None, event_bus: Optional[EventBus] = None):
        self.scene = scene if scene is not None else Scene()
        self.event_bus = event_bus
        self.visibility_manager = VisibilityManager()
        self.root: Optional[SceneNode] = None

        self._texture: object = None
        self._variant = ModelVariant.CLASSIC
        self._texture_height = DEFAULT_TEXTURE_HEIGHT
        self._visibility: LayerVisibility = default_layer_visibility()
        self.rebuild_count = 0

    @property
    def variant(self) -> ModelVariant:
        return self._variant

    @property
    def texture_height(self) -> int:
        return self._texture_height

    @property
    def visibility(self) -> LayerVisibility:
        return {part: dict(layers) for part, layers in self._visibility.items()}

    def load(self, texture: object, variant: ModelVariant, texture_height: int) -> SceneNode:
        """Ensure the model matches the given inputs, rebuilding if needed."""
        unchanged = (
            self.root is not None
            and texture is self._texture
            and variant is self._variant
            and texture_height == self._texture_height
        )
        if unchanged:
            return self.root

        self._texture = texture
        self._variant = variant
        self._texture_height = texture_height
        return self._rebuild()

    def set_variant(self, variant: ModelVariant) -> Optional[SceneNode]:
        """Switch arm layout; before the first load only the variant is stored."""
        if self.root is None:
            self._variant = variant
            return None
        return self.load(self._texture, variant, self._texture_height)

    def set_layer_visible(self, part: BodyPartKey, layer: LayerKind, visible: bool) -> None:
        """Toggle one part layer without touching geometry."""
        self._visibility[part][layer] = visible
        if self.root is not None:
            self.visibility_manager.set_visible(mesh_name(part, layer), visible)
        if self.event_bus is not None:
            self.event_bus.publish(
                SkinEventType.LAYER_TOGGLED, part=part, layer=layer, visible=visible,
            )

    def set_part_visible(self, part: BodyPartKey, visible: bool) -> None:
        for layer in LayerKind:
            self.set_layer_visible(part, layer, visible)

    def dispose(self) -> None:
        """Detach the current model from the scene."""
        if self.root is not None:
            self.scene.remove(self.root)
            self.root = None
        self.visibility_manager.clear()

    def _rebuild(self) -> SceneNode:
        self.dispose()
        self.root = build_skin_model(
            self._texture, self._variant, self._texture_height, self._visibility,
        )
        self.scene.add(self.root)
        self.visibility_manager.register_model(self.root)
        self.rebuild_count += 1
        logger.info("Skin model rebuilt: %s, 64x%d", self._variant.value, self._texture_height)
        if self.event_bus is not None:
            self.event_bus.publish(
                SkinEventType.MODEL_REBUILT,
                variant=self._variant, texture_height=self._texture_height,
            )
        return self.root
