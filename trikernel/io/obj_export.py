from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from trikernel.geometry.mesh import Mesh

logger = logging.getLogger(__name__)


def format_obj(mesh: Mesh, header: Optional[str] = None) -> str:
    """Serialize ``mesh`` as ``v``/``f`` records with exact float text and 1-based indices."""
    mesh.validate()
    lines: List[str] = []
    if header:
        lines.extend(f"# {h}" for h in header.splitlines())
    for v in mesh.vertices:
        lines.append(f"v {v.x!r} {v.y!r} {v.z!r}")
    for a, b, c in mesh.faces:
        lines.append(f"f {a + 1} {b + 1} {c + 1}")
    return "\n".join(lines) + "\n"


def write_obj_file(mesh: Mesh, path: str | Path, header: Optional[str] = None) -> Path:
    outpath = Path(path).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)
    outpath.write_text(format_obj(mesh, header=header), encoding="utf-8")
    logger.debug("Wrote %d vertices and %d faces to %s", mesh.n_vertices, mesh.n_faces, outpath)
    return outpath
