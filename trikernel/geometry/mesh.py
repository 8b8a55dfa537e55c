from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from trikernel.geometry.tolerance import EPS_AREA
from trikernel.geometry.transform import AffineTransform
from trikernel.geometry.triangle import InvalidArityError, Triangle
from trikernel.geometry.vector import Vector3, as_vector


FaceIdx = Tuple[int, int, int]


@dataclass
class Mesh:
    """
    Triangle mesh stored as a vertex list plus 0-based index triples.

    Faces reference vertices by index, so ``transform`` is visible through
    every face. ``Triangle`` values are built on demand from the current
    vertices.
    """
    vertices: List[Vector3]
    faces: List[FaceIdx]

    def __post_init__(self) -> None:
        self.vertices = [as_vector(v) for v in self.vertices]
        self.faces = [tuple(int(i) for i in f) for f in self.faces]

    @classmethod
    def from_triangles(
        cls,
        triangles: Iterable[Triangle],
        vertices: Optional[Sequence[Vector3]] = None,
    ) -> "Mesh":
        """
        Build a mesh from triangle values.

        Each triangle vertex is matched by value against ``vertices``; vertices
        not found there are appended. Equal vertices are shared.
        """
        verts: List[Vector3] = [as_vector(v) for v in ([] if vertices is None else vertices)]
        index_of: Dict[Vector3, int] = {}
        for i, v in enumerate(verts):
            index_of.setdefault(v, i)
        faces: List[FaceIdx] = []
        for tri in triangles:
            idx: List[int] = []
            for v in tri.vertices:
                i = index_of.get(v)
                if i is None:
                    i = len(verts)
                    verts.append(v)
                    index_of[v] = i
                idx.append(i)
            faces.append((idx[0], idx[1], idx[2]))
        return cls(vertices=verts, faces=faces)

    @classmethod
    def read_obj(cls, path: str | Path) -> "Mesh":
        from trikernel.io.obj_import import read_obj_file

        return read_obj_file(path)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    def validate(self) -> None:
        n = len(self.vertices)
        for f in self.faces:
            if len(f) != 3:
                raise InvalidArityError(f"Mesh faces must be triangles, got {len(f)} indices")
            for idx in f:
                if idx < 0 or idx >= n:
                    raise ValueError(f"Mesh face index out of range: {idx}")

    def triangle(self, i: int) -> Triangle:
        a, b, c = self.faces[i]
        return Triangle((self.vertices[a], self.vertices[b], self.vertices[c]))

    @property
    def triangles(self) -> List[Triangle]:
        return [self.triangle(i) for i in range(len(self.faces))]

    def degenerate_faces(self, area_eps: float = EPS_AREA) -> List[int]:
        """Indices of faces with repeated vertex indices or area at or below ``area_eps``."""
        out: List[int] = []
        for i, (a, b, c) in enumerate(self.faces):
            if a == b or b == c or a == c or self.triangle(i).area() <= area_eps:
                out.append(i)
        return out

    def area(self) -> float:
        """Surface area as the sum of face areas."""
        return float(sum(t.area() for t in self.triangles))

    def volume(self) -> float:
        """
        Signed enclosed volume by tetrahedron decomposition against the origin.

        Only meaningful for a closed, consistently wound mesh. Outward winding
        gives a positive value; open or mixed-winding meshes return a signed
        number without raising.
        """
        return float(sum(t.signed_volume() for t in self.triangles))

    def transform(self, t: AffineTransform) -> None:
        """Apply a homogeneous transform to every vertex in place."""
        if not self.vertices:
            return
        out = t.apply_points(np.array([v.to_tuple() for v in self.vertices], dtype=float))
        self.vertices[:] = [Vector3.from_array(row) for row in out]

    def bounds(self) -> Tuple[Vector3, Vector3]:
        if not self.vertices:
            raise ValueError("Mesh has no vertices")
        pts, _ = self.to_arrays()
        return Vector3.from_array(pts.min(axis=0)), Vector3.from_array(pts.max(axis=0))

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        verts = np.array([v.to_tuple() for v in self.vertices], dtype=np.float64).reshape(-1, 3)
        faces = np.array(self.faces, dtype=np.int64).reshape(-1, 3)
        return verts, faces

    def reversed_winding(self) -> "Mesh":
        return Mesh(vertices=list(self.vertices), faces=[(a, c, b) for a, b, c in self.faces])

    def copy(self) -> "Mesh":
        return Mesh(vertices=list(self.vertices), faces=list(self.faces))
