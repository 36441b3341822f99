"""Shared constants and paths for SkinForge."""

from pathlib import Path

# Package paths
PACKAGE_ROOT = Path(__file__).parent
ASSETS_DIR = PACKAGE_ROOT / "assets"
CONFIG_DIR = ASSETS_DIR / "config"

# Skin atlas format
ATLAS_WIDTH = 64
SUPPORTED_TEXTURE_HEIGHTS = (64, 128)
DEFAULT_TEXTURE_HEIGHT = 64

# Arm widths per model variant (pixels == model units)
CLASSIC_ARM_WIDTH = 4
SLIM_ARM_WIDTH = 3

# Half the body width; arms attach at this distance plus half the arm width
ARM_ATTACH_X = 4

# Root translation applied after assembly; the model then spans y = -16..16
MODEL_ROOT_OFFSET = (0.0, -12.0, 0.0)

MODEL_ROOT_NAME = "skin_model"

# Material config file under assets/config/
MATERIALS_CONFIG = "skin_materials.json"
