from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from trikernel.geometry.vector import Vector3, as_vector


class InvalidArityError(ValueError):
    pass


@dataclass(frozen=True)
class Triangle:
    """
    Triangular face defined by exactly three vertices.

    Vertices are stored by value; a triangle never aliases a mesh vertex list.
    """
    vertices: Tuple[Vector3, Vector3, Vector3]

    def __post_init__(self) -> None:
        verts = tuple(self.vertices)
        if len(verts) != 3:
            raise InvalidArityError(f"Triangle requires exactly 3 vertices, got {len(verts)}")
        object.__setattr__(self, "vertices", tuple(as_vector(v) for v in verts))

    @classmethod
    def of(cls, v1: Vector3 | Sequence[float], v2: Vector3 | Sequence[float], v3: Vector3 | Sequence[float]) -> "Triangle":
        return cls((as_vector(v1), as_vector(v2), as_vector(v3)))

    def area(self) -> float:
        """
        Triangle area by Heron's formula.

        The radicand is clamped at zero so near-collinear triangles return 0.0
        instead of NaN.
        """
        v1, v2, v3 = self.vertices
        a = (v2 - v3).length()
        b = (v1 - v3).length()
        c = (v2 - v1).length()
        s = (a + b + c) / 2.0
        return math.sqrt(max(s * (s - a) * (s - b) * (s - c), 0.0))

    def signed_volume(self) -> float:
        """Signed volume of the tetrahedron spanned by the face and the origin."""
        v1, v2, v3 = self.vertices
        return v1.dot(v2.cross(v3)) / 6.0

    def reversed(self) -> "Triangle":
        v1, v2, v3 = self.vertices
        return Triangle((v1, v3, v2))
