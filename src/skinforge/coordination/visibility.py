"""Layer toggle → node visibility mapping."""

from skinforge.core.scene_graph import SceneNode
from skinforge.skin.catalogue import BodyPartKey, LayerKind
from skinforge.skin.humanoid import mesh_name


class VisibilityManager:
    """Maps layer toggle names to scene nodes for visibility control.

    Toggle names are the mesh names of a skin model ("head-overlay", ...).
    """

    def __init__(self):
        self._toggles: dict[str, list[SceneNode]] = {}

    def register(self, toggle_name: str, node: SceneNode) -> None:
        """Register a scene node to be controlled by a toggle."""
        if toggle_name not in self._toggles:
            self._toggles[toggle_name] = []
        self._toggles[toggle_name].append(node)

    def register_model(self, root: SceneNode) -> None:
        """Register every part/layer mesh node of a built skin model."""
        for part in BodyPartKey:
            for layer in LayerKind:
                name = mesh_name(part, layer)
                node = root.find(name)
                if node is not None:
                    self.register(name, node)

    def clear(self) -> None:
        self._toggles.clear()

    def set_visible(self, toggle_name: str, visible: bool) -> None:
        """Set visibility for all nodes registered to a toggle."""
        if toggle_name not in self._toggles:
            raise KeyError(f"Unknown layer toggle: {toggle_name}")
        for node in self._toggles[toggle_name]:
            node.visible = visible

    def is_visible(self, toggle_name: str) -> bool:
        """Check if the first node for a toggle is visible."""
        nodes = self._toggles.get(toggle_name, [])
        return nodes[0].visible if nodes else True

    def get_toggle_names(self) -> list[str]:
        return list(self._toggles.keys())
