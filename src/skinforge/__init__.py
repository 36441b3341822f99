"""SkinForge: layered 3D humanoid models from skin textures."""

__version__ = "0.1.0"
