"""Export a skin model to GLB (binary glTF 2.0).

GLB format:
  12-byte header | JSON chunk | BIN chunk

The scene hierarchy is kept: every scene node becomes a glTF node with its
local translation/rotation/scale, so the root offset and the per-part
groups survive the export.  Each mesh primitive carries:
  - POSITION accessor (vec3 float32)
  - NORMAL accessor (vec3 float32)
  - TEXCOORD_0 accessor (vec2 float32, top-left origin as glTF expects)
  - indices accessor (scalar uint32)
  - PBR material, alpha-masked, sampling the embedded skin PNG if given
"""

import json
import struct
import logging
from pathlib import Path
from typing import Optional

import numpy as np

from skinforge.core.material import AlphaMode, Material
from skinforge.core.mesh import MeshInstance
from skinforge.core.scene_graph import SceneNode

logger = logging.getLogger(__name__)

# glTF constants
GLTF_FLOAT = 5126       # GL_FLOAT
GLTF_UNSIGNED_INT = 5125  # GL_UNSIGNED_INT
GLTF_ARRAY_BUFFER = 34962
GLTF_ELEMENT_ARRAY_BUFFER = 34963
GLTF_NEAREST = 9728
GLTF_CLAMP_TO_EDGE = 33071

GLB_MAGIC = 0x46546C67
GLB_CHUNK_JSON = 0x4E4F534A
GLB_CHUNK_BIN = 0x004E4942


def export_glb(
    root: SceneNode,
    path: str | Path,
    texture_png: Optional[bytes] = None,
    include_hidden: bool = False,
) -> int:
    """Export the meshes under ``root`` to a GLB file.

    Parameters
    ----------
    root : SceneNode
        Model root (or any subtree) to export.
    path : str or Path
        Output file path (should end with .glb).
    texture_png : bytes, optional
        Skin PNG to embed and bind to every material.
    include_hidden : bool
        Also export hidden nodes (they keep their subtree but are exported
        as ordinary nodes; glTF has no visibility flag).

    Returns
    -------
    int
        Number of meshes exported.
    """
    path = Path(path)
    data, count = _encode_glb(root, texture_png, include_hidden)
    with open(path, "wb") as f:
        f.write(data)

    logger.info("Exported %d meshes to %s (%.1f KB)", count, path, len(data) / 1024)
    return count


def build_glb(
    root: SceneNode,
    texture_png: Optional[bytes] = None,
    include_hidden: bool = False,
) -> bytes:
    """Serialize ``root`` to GLB bytes."""
    return _encode_glb(root, texture_png, include_hidden)[0]


def _encode_glb(
    root: SceneNode, texture_png: Optional[bytes], include_hidden: bool,
) -> tuple[bytes, int]:
    """GLB bytes plus the number of meshes written."""
    builder = _GLTFBuilder(texture_png)
    root_index = builder.add_node(root, include_hidden)
    gltf, bin_data = builder.finish([] if root_index is None else [root_index])
    if not gltf["meshes"]:
        logger.warning("No visible meshes to export")

    json_bytes = json.dumps(gltf, separators=(",", ":")).encode("utf-8")
    # Pad JSON with spaces, BIN with zeros, to 4-byte alignment
    json_bytes += b" " * ((4 - len(json_bytes) % 4) % 4)
    bin_data += b"\x00" * ((4 - len(bin_data) % 4) % 4)

    total_length = 12 + 8 + len(json_bytes) + 8 + len(bin_data)
    parts = [
        struct.pack("<III", GLB_MAGIC, 2, total_length),
        struct.pack("<II", len(json_bytes), GLB_CHUNK_JSON),
        json_bytes,
        struct.pack("<II", len(bin_data), GLB_CHUNK_BIN),
        bin_data,
    ]
    return b"".join(parts), len(builder.meshes)


def read_glb_json(data: bytes) -> dict:
    """Parse the JSON chunk of a GLB blob."""
    magic, version, _ = struct.unpack_from("<III", data, 0)
    if magic != GLB_MAGIC or version != 2:
        raise ValueError("Not a glTF 2.0 binary")
    json_length, chunk_type = struct.unpack_from("<II", data, 12)
    if chunk_type != GLB_CHUNK_JSON:
        raise ValueError("First GLB chunk is not JSON")
    return json.loads(data[20:20 + json_length])


class _GLTFBuilder:
    """Accumulates glTF JSON entries and the binary buffer."""

    def __init__(self, texture_png: Optional[bytes]):
        self.nodes: list[dict] = []
        self.meshes: list[dict] = []
        self.materials: list[dict] = []
        self.accessors: list[dict] = []
        self.buffer_views: list[dict] = []
        self._chunks: list[bytes] = []
        self._byte_offset = 0
        self._material_cache: dict[int, int] = {}
        self._texture_png = texture_png
        self._texture_index: Optional[int] = None
        self.images: list[dict] = []
        self.samplers: list[dict] = []
        self.textures: list[dict] = []

        if texture_png is not None:
            view = self._add_buffer_view(texture_png, target=None)
            self.images.append({"bufferView": view, "mimeType": "image/png"})
            self.samplers.append({
                "magFilter": GLTF_NEAREST,
                "minFilter": GLTF_NEAREST,
                "wrapS": GLTF_CLAMP_TO_EDGE,
                "wrapT": GLTF_CLAMP_TO_EDGE,
            })
            self.textures.append({"sampler": 0, "source": 0})
            self._texture_index = 0

    def add_node(self, node: SceneNode, include_hidden: bool) -> Optional[int]:
        """Add ``node`` and its subtree; returns its glTF node index."""
        if not node.visible and not include_hidden:
            return None

        entry: dict = {"name": node.name}
        if np.any(node.position != 0):
            entry["translation"] = [float(v) for v in node.position]
        if not np.allclose(node.quaternion, [0, 0, 0, 1]):
            entry["rotation"] = [float(v) for v in node.quaternion]
        if not np.allclose(node.scale, 1):
            entry["scale"] = [float(v) for v in node.scale]

        index = len(self.nodes)
        self.nodes.append(entry)

        if node.mesh is not None and node.mesh.geometry.vertex_count > 0:
            entry["mesh"] = self._add_mesh(node.mesh)
            extras = {}
            if node.mesh.part is not None:
                extras["part"] = getattr(node.mesh.part, "value", node.mesh.part)
            if node.mesh.layer is not None:
                extras["layer"] = getattr(node.mesh.layer, "value", node.mesh.layer)
            if extras:
                entry["extras"] = extras

        children = []
        for child in node.children:
            child_index = self.add_node(child, include_hidden)
            if child_index is not None:
                children.append(child_index)
        if children:
            entry["children"] = children
        return index

    def finish(self, scene_nodes: list[int]) -> tuple[dict, bytes]:
        bin_data = b"".join(self._chunks)
        gltf = {
            "asset": {
                "version": "2.0",
                "generator": "SkinForge",
            },
            "scene": 0,
            "scenes": [{"nodes": scene_nodes}],
            "nodes": self.nodes,
            "meshes": self.meshes,
            "materials": self.materials,
            "accessors": self.accessors,
            "bufferViews": self.buffer_views,
            "buffers": [{"byteLength": len(bin_data)}],
        }
        if self.images:
            gltf["images"] = self.images
            gltf["samplers"] = self.samplers
            gltf["textures"] = self.textures
        return gltf, bin_data

    def _add_buffer_view(self, data: bytes, target: Optional[int]) -> int:
        # Accessor data must be 4-byte aligned
        pad = (4 - self._byte_offset % 4) % 4
        if pad:
            self._chunks.append(b"\x00" * pad)
            self._byte_offset += pad
        view = {
            "buffer": 0,
            "byteOffset": self._byte_offset,
            "byteLength": len(data),
        }
        if target is not None:
            view["target"] = target
        self.buffer_views.append(view)
        self._chunks.append(data)
        self._byte_offset += len(data)
        return len(self.buffer_views) - 1

    def _add_accessor(self, array: np.ndarray, kind: str, target: int, bounds: bool = False) -> int:
        component = GLTF_UNSIGNED_INT if array.dtype == np.uint32 else GLTF_FLOAT
        view = self._add_buffer_view(array.tobytes(), target)
        accessor = {
            "bufferView": view,
            "componentType": component,
            "count": len(array),
            "type": kind,
        }
        if bounds:
            lo = array.min(axis=0)
            hi = array.max(axis=0)
            accessor["min"] = np.atleast_1d(lo).tolist()
            accessor["max"] = np.atleast_1d(hi).tolist()
        self.accessors.append(accessor)
        return len(self.accessors) - 1

    def _add_material(self, material: Material) -> int:
        key = id(material)
        if key in self._material_cache:
            return self._material_cache[key]

        r, g, b = material.color
        entry: dict = {
            "name": material.name or f"material_{len(self.materials)}",
            "pbrMetallicRoughness": {
                "baseColorFactor": [r, g, b, material.opacity],
                "metallicFactor": material.metalness,
                "roughnessFactor": material.roughness,
            },
        }
        if self._texture_index is not None:
            entry["pbrMetallicRoughness"]["baseColorTexture"] = {"index": self._texture_index}
        if material.alpha_mode is AlphaMode.MASK:
            entry["alphaMode"] = "MASK"
            entry["alphaCutoff"] = material.alpha_test
        elif material.alpha_mode is AlphaMode.BLEND:
            entry["alphaMode"] = "BLEND"
        if material.double_sided:
            entry["doubleSided"] = True

        self.materials.append(entry)
        self._material_cache[key] = len(self.materials) - 1
        return self._material_cache[key]

    def _add_mesh(self, mesh: MeshInstance) -> int:
        geom = mesh.geometry
        positions = geom.positions.reshape(-1, 3).astype(np.float32)
        normals = geom.normals.reshape(-1, 3).astype(np.float32)
        if geom.has_indices:
            indices = geom.indices.astype(np.uint32)
        else:
            indices = np.arange(geom.vertex_count, dtype=np.uint32)

        attributes = {
            "POSITION": self._add_accessor(positions, "VEC3", GLTF_ARRAY_BUFFER, bounds=True),
            "NORMAL": self._add_accessor(normals, "VEC3", GLTF_ARRAY_BUFFER),
        }
        if geom.has_uvs:
            uvs = geom.uvs.reshape(-1, 2).astype(np.float32).copy()
            uvs[:, 1] = 1.0 - uvs[:, 1]
            attributes["TEXCOORD_0"] = self._add_accessor(uvs, "VEC2", GLTF_ARRAY_BUFFER)

        primitive = {
            "attributes": attributes,
            "indices": self._add_accessor(indices, "SCALAR", GLTF_ELEMENT_ARRAY_BUFFER, bounds=True),
            "material": self._add_material(mesh.material),
        }
        self.meshes.append({"name": mesh.name, "primitives": [primitive]})
        return len(self.meshes) - 1
