"""
Trikernel - minimal triangle-mesh geometry kernel.
"""

from trikernel.geometry import (
    AffineTransform,
    InvalidArityError,
    Mesh,
    SingularTransformError,
    Triangle,
    Vector3,
)
from trikernel.io import MeshImportError, ObjReadOptions, read_obj_file, write_obj_file

__version__ = "0.1.0"

__all__ = [
    "Vector3",
    "Triangle",
    "InvalidArityError",
    "AffineTransform",
    "SingularTransformError",
    "Mesh",
    "MeshImportError",
    "ObjReadOptions",
    "read_obj_file",
    "write_obj_file",
]
