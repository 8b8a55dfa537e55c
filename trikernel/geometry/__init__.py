"""
Trikernel Geometry Module

Vectors, triangles, affine transforms and triangle meshes.
"""

from trikernel.geometry.mesh import Mesh
from trikernel.geometry.primitives import box_mesh, tetrahedron_mesh
from trikernel.geometry.transform import AffineTransform, SingularTransformError
from trikernel.geometry.triangle import InvalidArityError, Triangle
from trikernel.geometry.vector import Vector3

__all__ = [
    "Vector3",
    "Triangle",
    "InvalidArityError",
    "AffineTransform",
    "SingularTransformError",
    "Mesh",
    "box_mesh",
    "tetrahedron_mesh",
]
