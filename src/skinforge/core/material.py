"""Material definitions for rendering."""

from enum import Enum, auto
from dataclasses import dataclass


class AlphaMode(Enum):
    OPAQUE = auto()
    MASK = auto()
    BLEND = auto()


@dataclass
class Material:
    """Surface material shared by the meshes that reference it.

    ``texture`` is an opaque handle owned by the caller (a decoded image,
    a GPU texture id, ...); it is stored and handed to exporters/renderers
    unchanged.
    """
    name: str = ""
    texture: object = None
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    opacity: float = 1.0
    roughness: float = 0.95
    metalness: float = 0.02
    alpha_mode: AlphaMode = AlphaMode.OPAQUE
    alpha_test: float = 0.0
    double_sided: bool = False
    transparent: bool = False
    nearest_filter: bool = True

    @staticmethod
    def from_settings(name: str, texture: object, settings: dict) -> "Material":
        """Create a material from a config dict (see skin_materials.json)."""
        alpha_mode = AlphaMode[settings.get("alpha_mode", "MASK").upper()]
        return Material(
            name=name,
            texture=texture,
            roughness=float(settings.get("roughness", 0.95)),
            metalness=float(settings.get("metalness", 0.02)),
            alpha_mode=alpha_mode,
            alpha_test=float(settings.get("alpha_test", 0.0)),
            double_sided=bool(settings.get("double_sided", False)),
            transparent=bool(settings.get("transparent", False)),
            nearest_filter=bool(settings.get("nearest_filter", True)),
        )
