"""Mesh data structures for geometry storage (no GL dependencies)."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from skinforge.core.material import Material


@dataclass
class BufferGeometry:
    """Stores vertex attribute arrays for a mesh.

    positions: Nx3 flat float32 array (x,y,z per vertex)
    normals: Nx3 flat float32 array
    uvs: Nx2 flat float32 array (u,v per vertex), bottom-left origin
    indices: triangle index array (uint32), optional for non-indexed geometry
    """
    positions: NDArray[np.float32]
    normals: NDArray[np.float32]
    uvs: Optional[NDArray[np.float32]] = None
    indices: Optional[NDArray[np.uint32]] = None
    vertex_count: int = 0

    def __post_init__(self):
        if self.vertex_count == 0:
            self.vertex_count = len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        if self.indices is not None:
            return len(self.indices) // 3
        return self.vertex_count // 3

    @property
    def has_indices(self) -> bool:
        return self.indices is not None and len(self.indices) > 0

    @property
    def has_uvs(self) -> bool:
        return self.uvs is not None and len(self.uvs) == self.vertex_count * 2

    def get_bounding_box(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return (min, max) corners of the vertex positions."""
        pos = self.positions.reshape(-1, 3).astype(np.float64)
        return pos.min(axis=0), pos.max(axis=0)

    def get_size(self) -> NDArray[np.float64]:
        lo, hi = self.get_bounding_box()
        return hi - lo


@dataclass
class MeshInstance:
    """A mesh with material, linking geometry to rendering properties.

    ``part`` and ``layer`` identify which body part / render layer the mesh
    belongs to; both stay ``None`` for meshes outside a skin model.
    """
    name: str
    geometry: BufferGeometry
    material: Material = field(default_factory=Material)
    part: object = None
    layer: object = None
    # GL handle (set by renderer)
    gl_handle: object = None

    @property
    def positions(self) -> NDArray[np.float32]:
        return self.geometry.positions

    @property
    def normals(self) -> NDArray[np.float32]:
        return self.geometry.normals

    @property
    def uvs(self) -> Optional[NDArray[np.float32]]:
        return self.geometry.uvs
