"""
Trikernel I/O Module

Restricted ASCII OBJ import and export.
"""

from trikernel.io.obj_export import format_obj, write_obj_file
from trikernel.io.obj_import import (
    MeshImportError,
    ObjImportResult,
    ObjReadOptions,
    import_obj_file,
    read_obj_file,
)

__all__ = [
    "MeshImportError",
    "ObjImportResult",
    "ObjReadOptions",
    "import_obj_file",
    "read_obj_file",
    "format_obj",
    "write_obj_file",
]
