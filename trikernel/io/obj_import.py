"""
Restricted ASCII OBJ import.

Only ``v x y z`` and ``f i j k`` records are interpreted. Faces must be
triangles with 1-based indices into the vertex records. Other record types
are skipped (and reported) or rejected, depending on ``ObjReadOptions``.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from trikernel.geometry.mesh import FaceIdx, Mesh
from trikernel.geometry.vector import Vector3

logger = logging.getLogger(__name__)

_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_RE = re.compile(r"[+-]?[0-9]+")


class MeshImportError(ValueError):
    pass


@dataclass(frozen=True)
class ObjReadOptions:
    """Import behaviour for restricted OBJ files."""

    # Skip unsupported record types instead of failing on them.
    skip_unsupported: bool = True
    # Require one contiguous vertex block followed by one contiguous face block.
    require_block_order: bool = False


@dataclass(frozen=True)
class ObjImportResult:
    source_file: str
    mesh: Mesh
    skipped_records: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


@dataclass
class _ScanState:
    vertices: List[Vector3] = field(default_factory=list)
    faces: List[Tuple[int, Tuple[int, int, int]]] = field(default_factory=list)
    skipped: Dict[str, int] = field(default_factory=dict)
    prev_kind: Optional[str] = None
    vertex_block_closed: bool = False
    face_block_closed: bool = False


def _strip_comment(line: str) -> str:
    i = line.find("#")
    return line if i < 0 else line[:i]


def _parse_vertex(tokens: List[str], line_no: int) -> Vector3:
    if len(tokens) != 3:
        raise MeshImportError(f"Line {line_no}: vertex record expects 3 coordinates, got {len(tokens)}")
    coords: List[float] = []
    for tok in tokens:
        if not _FLOAT_RE.fullmatch(tok):
            raise MeshImportError(f"Line {line_no}: invalid vertex coordinate '{tok}'")
        value = float(tok)
        if not math.isfinite(value):
            raise MeshImportError(f"Line {line_no}: vertex coordinate must be finite, got '{tok}'")
        coords.append(value)
    return Vector3(coords[0], coords[1], coords[2])


def _parse_face(tokens: List[str], line_no: int) -> Tuple[int, int, int]:
    if len(tokens) != 3:
        raise MeshImportError(f"Line {line_no}: face record must have exactly 3 vertex indices, got {len(tokens)}")
    idxs: List[int] = []
    for tok in tokens:
        if not _INT_RE.fullmatch(tok):
            raise MeshImportError(f"Line {line_no}: invalid face index '{tok}'")
        idxs.append(int(tok))
    return idxs[0], idxs[1], idxs[2]


def _check_block_order(state: _ScanState, kind: str, line_no: int) -> None:
    if state.prev_kind == "v" and kind != "v":
        state.vertex_block_closed = True
    if state.prev_kind == "f" and kind != "f":
        state.face_block_closed = True
    if kind == "v" and (state.vertex_block_closed or state.faces):
        raise MeshImportError(f"Line {line_no}: vertex records must form one contiguous block before the faces")
    if kind == "f" and state.face_block_closed:
        raise MeshImportError(f"Line {line_no}: face records must form one contiguous block")


def _scan_records(lines: Iterable[str], options: ObjReadOptions) -> _ScanState:
    state = _ScanState()
    for line_no, raw in enumerate(lines, start=1):
        tokens = _strip_comment(raw).split()
        if not tokens:
            continue
        tag, args = tokens[0], tokens[1:]
        kind = tag if tag in ("v", "f") else "other"
        if options.require_block_order:
            _check_block_order(state, kind, line_no)
        state.prev_kind = kind
        if kind == "v":
            state.vertices.append(_parse_vertex(args, line_no))
        elif kind == "f":
            state.faces.append((line_no, _parse_face(args, line_no)))
        elif options.skip_unsupported:
            state.skipped[tag] = state.skipped.get(tag, 0) + 1
        else:
            raise MeshImportError(f"Line {line_no}: unsupported OBJ record type '{tag}'")
    return state


def _resolve_faces(state: _ScanState) -> List[FaceIdx]:
    n = len(state.vertices)
    out: List[FaceIdx] = []
    for line_no, face in state.faces:
        for idx in face:
            if idx < 1 or idx > n:
                raise MeshImportError(f"Line {line_no}: face index {idx} out of range 1..{n}")
        out.append((face[0] - 1, face[1] - 1, face[2] - 1))
    return out


def import_obj_file(path: str | Path, options: ObjReadOptions | None = None) -> ObjImportResult:
    opts = options or ObjReadOptions()
    p = Path(path).expanduser().resolve()
    if not p.exists() or not p.is_file():
        raise MeshImportError(f"OBJ file not found: {p}")

    try:
        with p.open("r", encoding="utf-8", errors="replace") as fh:
            state = _scan_records(fh, opts)
    except OSError as e:
        raise MeshImportError(f"Failed to read OBJ file {p}: {e}") from e

    if not state.vertices:
        raise MeshImportError(f"OBJ file has no vertex records: {p}")
    if not state.faces:
        raise MeshImportError(f"OBJ file has no face records: {p}")
    faces = _resolve_faces(state)

    warnings: List[str] = []
    for tag in sorted(state.skipped):
        msg = f"Skipped {state.skipped[tag]} unsupported '{tag}' record(s)."
        warnings.append(msg)
        logger.warning("%s: %s", p.name, msg)

    mesh = Mesh(vertices=state.vertices, faces=faces)
    degenerate = mesh.degenerate_faces()
    if degenerate:
        msg = f"Mesh has {len(degenerate)} degenerate face(s); first at face {degenerate[0] + 1}."
        warnings.append(msg)
        logger.warning("%s: %s", p.name, msg)
    logger.debug("Imported %d vertices and %d faces from %s", len(state.vertices), len(faces), p)

    return ObjImportResult(
        source_file=str(p),
        mesh=mesh,
        skipped_records=dict(state.skipped),
        warnings=warnings,
    )


def read_obj_file(path: str | Path, options: ObjReadOptions | None = None) -> Mesh:
    return import_obj_file(path, options=options).mesh
