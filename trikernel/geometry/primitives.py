from __future__ import annotations

from typing import List, Sequence, Tuple

from trikernel.geometry.mesh import FaceIdx, Mesh
from trikernel.geometry.vector import Vector3


# Outward winding: (v2 - v1) x (v3 - v1) points away from the solid.
_BOX_FACES: Tuple[FaceIdx, ...] = (
    (0, 2, 1), (0, 3, 2),  # z = 0
    (4, 5, 6), (4, 6, 7),  # z = 1
    (0, 1, 5), (0, 5, 4),  # y = 0
    (3, 7, 6), (3, 6, 2),  # y = 1
    (0, 4, 7), (0, 7, 3),  # x = 0
    (1, 2, 6), (1, 6, 5),  # x = 1
)

_TETRA_FACES: Tuple[FaceIdx, ...] = ((0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3))


def box_mesh(
    size: Sequence[float] = (1.0, 1.0, 1.0),
    origin: Sequence[float] = (0.0, 0.0, 0.0),
) -> Mesh:
    """Closed axis-aligned box with 8 vertices and 12 outward-wound triangles."""
    sx, sy, sz = (float(s) for s in size)
    if sx <= 0.0 or sy <= 0.0 or sz <= 0.0:
        raise ValueError("Box size must be > 0 on every axis")
    ox, oy, oz = (float(o) for o in origin)
    vertices: List[Vector3] = []
    for z in (oz, oz + sz):
        vertices.extend([
            Vector3(ox, oy, z),
            Vector3(ox + sx, oy, z),
            Vector3(ox + sx, oy + sy, z),
            Vector3(ox, oy + sy, z),
        ])
    return Mesh(vertices=vertices, faces=list(_BOX_FACES))


def tetrahedron_mesh(edge: float = 1.0) -> Mesh:
    """Right tetrahedron on the coordinate axes; volume is edge**3 / 6."""
    e = float(edge)
    if e <= 0.0:
        raise ValueError("Tetrahedron edge must be > 0")
    vertices = [Vector3(0.0, 0.0, 0.0), Vector3(e, 0.0, 0.0), Vector3(0.0, e, 0.0), Vector3(0.0, 0.0, e)]
    return Mesh(vertices=vertices, faces=list(_TETRA_FACES))
