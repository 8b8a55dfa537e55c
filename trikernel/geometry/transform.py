"""
Affine transforms in 4x4 homogeneous form.

Convention: points are column vectors multiplied on the right, so a point
``p`` maps to ``m @ [x, y, z, 1]``. Consequently ``compose(t1, t2)`` applies
``t2`` first and ``t1`` second, and ``remove(t1, t2)`` undoes a trailing
``t2`` from ``t1``.

Inversion policy: ``invert`` is exact and raises ``SingularTransformError``
when the linear block is singular. ``pseudo_invert`` keeps the
Moore-Penrose behaviour for callers that accept an approximate result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from trikernel.geometry.tolerance import EPS_MATRIX, EPS_SINGULAR
from trikernel.geometry.vector import Vector3, as_vector


class SingularTransformError(ValueError):
    pass


@dataclass(frozen=True, eq=False)
class AffineTransform:
    """Immutable 4x4 homogeneous transform. Use the module factories to build one."""
    m: np.ndarray

    def __post_init__(self) -> None:
        mat = np.array(self.m, dtype=float, copy=True)
        if mat.shape != (4, 4):
            raise ValueError("Transform matrix must be 4x4")
        if not np.all(np.isfinite(mat)):
            raise ValueError("Transform matrix must contain only finite values")
        mat.setflags(write=False)
        object.__setattr__(self, "m", mat)

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "AffineTransform":
        return cls(np.asarray(matrix, dtype=float))

    @property
    def matrix(self) -> np.ndarray:
        """Writable copy of the underlying matrix."""
        return self.m.copy()

    def apply_point(self, p: Vector3) -> Vector3:
        """Apply transformation to a point."""
        h = np.array([p.x, p.y, p.z, 1.0], dtype=float)
        return Vector3.from_array(self.m @ h)

    def apply_points(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 3:
            raise ValueError("points must be shape (N,3)")
        h = np.ones((pts.shape[0], 4), dtype=float)
        h[:, :3] = pts
        return (self.m @ h.T).T[:, :3]

    def is_close(self, other: "AffineTransform", atol: float = EPS_MATRIX) -> bool:
        return bool(np.allclose(self.m, other.m, rtol=0.0, atol=atol))


def _finite(value: float, name: str) -> float:
    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return v


def identity() -> AffineTransform:
    return AffineTransform(np.eye(4, dtype=float))


def translate(offset: Vector3) -> AffineTransform:
    o = as_vector(offset)
    m = np.eye(4, dtype=float)
    m[0, 3] = _finite(o.x, "offset.x")
    m[1, 3] = _finite(o.y, "offset.y")
    m[2, 3] = _finite(o.z, "offset.z")
    return AffineTransform(m)


def scale(fx: float, fy: float, fz: float) -> AffineTransform:
    return AffineTransform(np.diag([_finite(fx, "fx"), _finite(fy, "fy"), _finite(fz, "fz"), 1.0]))


def scale_uniform(factor: float) -> AffineTransform:
    return scale(factor, factor, factor)


def rotation_x(angle: float) -> AffineTransform:
    """Right-handed rotation about +X, angle in radians."""
    a = _finite(angle, "angle")
    c, s = math.cos(a), math.sin(a)
    return AffineTransform(np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]))


def rotation_y(angle: float) -> AffineTransform:
    """Right-handed rotation about +Y, angle in radians."""
    a = _finite(angle, "angle")
    c, s = math.cos(a), math.sin(a)
    return AffineTransform(np.array([
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]))


def rotation_z(angle: float) -> AffineTransform:
    """Right-handed rotation about +Z, angle in radians."""
    a = _finite(angle, "angle")
    c, s = math.cos(a), math.sin(a)
    return AffineTransform(np.array([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]))


def rotation_x_degrees(angle_deg: float) -> AffineTransform:
    return rotation_x(math.radians(_finite(angle_deg, "angle_deg")))


def rotation_y_degrees(angle_deg: float) -> AffineTransform:
    return rotation_y(math.radians(_finite(angle_deg, "angle_deg")))


def rotation_z_degrees(angle_deg: float) -> AffineTransform:
    return rotation_z(math.radians(_finite(angle_deg, "angle_deg")))


def compose(t1: AffineTransform, t2: AffineTransform) -> AffineTransform:
    """Matrix product ``t1.m @ t2.m``: the result applies ``t2`` then ``t1``."""
    return AffineTransform(t1.m @ t2.m)


def _linear_volume_ratio(m: np.ndarray) -> float:
    # |det| of the linear block over the product of its column norms, in [0, 1].
    lin = m[:3, :3]
    denom = float(np.prod(np.linalg.norm(lin, axis=0)))
    if denom == 0.0:
        return 0.0
    return abs(float(np.linalg.det(lin))) / denom


def invert(t: AffineTransform) -> AffineTransform:
    """
    Exact inverse.

    Raises SingularTransformError when the linear block is singular relative
    to its own scale (volume ratio below EPS_SINGULAR) or the full matrix
    cannot be inverted. Large translations and anisotropic scales are fine.
    """
    ratio = _linear_volume_ratio(t.m)
    if ratio < EPS_SINGULAR:
        raise SingularTransformError(f"Transform is not invertible (linear volume ratio {ratio:.6g})")
    try:
        inv = np.linalg.inv(t.m)
    except np.linalg.LinAlgError as exc:
        raise SingularTransformError("Transform is not invertible") from exc
    return AffineTransform(inv)


def pseudo_invert(t: AffineTransform) -> AffineTransform:
    """Moore-Penrose inverse; exact for well-conditioned transforms, approximate otherwise."""
    return AffineTransform(np.linalg.pinv(t.m))


def remove(t1: AffineTransform, t2: AffineTransform) -> AffineTransform:
    return compose(t1, invert(t2))


def copy(t: AffineTransform) -> AffineTransform:
    return AffineTransform(t.m)
