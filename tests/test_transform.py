from __future__ import annotations

import math

import numpy as np
import pytest

from trikernel.geometry import transform as tf
from trikernel.geometry.transform import AffineTransform, SingularTransformError
from trikernel.geometry.vector import Vector3


WELL_CONDITIONED = [
    tf.translate(Vector3(1, 2, 3)),
    tf.scale(2, 3, 4),
    tf.rotation_z(math.pi / 2),
    tf.compose(tf.rotation_x_degrees(30), tf.translate(Vector3(-4, 0, 9))),
]


def _assert_point(p: Vector3, x: float, y: float, z: float) -> None:
    assert p.x == pytest.approx(x, abs=1e-9)
    assert p.y == pytest.approx(y, abs=1e-9)
    assert p.z == pytest.approx(z, abs=1e-9)


def test_identity_is_eye4():
    assert np.array_equal(tf.identity().m, np.eye(4))


@pytest.mark.parametrize("t", WELL_CONDITIONED)
def test_identity_is_neutral_for_compose(t: AffineTransform):
    assert tf.compose(t, tf.identity()).is_close(t)
    assert tf.compose(tf.identity(), t).is_close(t)


@pytest.mark.parametrize("t", WELL_CONDITIONED)
def test_compose_with_inverse_is_identity(t: AffineTransform):
    assert tf.compose(t, tf.invert(t)).is_close(tf.identity())
    assert tf.compose(tf.invert(t), t).is_close(tf.identity())


def test_translate_sets_last_column():
    t = tf.translate(Vector3(1, 2, 3))
    assert t.m[:3, 3].tolist() == [1.0, 2.0, 3.0]
    assert t.m[3].tolist() == [0.0, 0.0, 0.0, 1.0]
    _assert_point(t.apply_point(Vector3(1, 1, 1)), 2, 3, 4)


def test_scale_is_diagonal():
    assert np.array_equal(tf.scale(2, 3, 4).m, np.diag([2.0, 3.0, 4.0, 1.0]))
    assert np.array_equal(tf.scale_uniform(5).m, np.diag([5.0, 5.0, 5.0, 1.0]))


def test_rotations_are_right_handed():
    _assert_point(tf.rotation_z(math.pi / 2).apply_point(Vector3(1, 0, 0)), 0, 1, 0)
    _assert_point(tf.rotation_x(math.pi / 2).apply_point(Vector3(0, 1, 0)), 0, 0, 1)
    _assert_point(tf.rotation_y(math.pi / 2).apply_point(Vector3(0, 0, 1)), 1, 0, 0)


def test_degree_rotations_match_radian_rotations():
    assert tf.rotation_x_degrees(90).is_close(tf.rotation_x(math.pi / 2))
    assert tf.rotation_y_degrees(-45).is_close(tf.rotation_y(-math.pi / 4))
    assert tf.rotation_z_degrees(180).is_close(tf.rotation_z(math.pi))


def test_compose_applies_right_operand_first():
    move = tf.translate(Vector3(1, 0, 0))
    turn = tf.rotation_z(math.pi / 2)
    # Translate, then rotate.
    _assert_point(tf.compose(turn, move).apply_point(Vector3.zero()), 0, 1, 0)
    # Rotate, then translate.
    _assert_point(tf.compose(move, turn).apply_point(Vector3.zero()), 1, 0, 0)


def test_remove_undoes_trailing_transform():
    a = tf.rotation_y_degrees(30)
    b = tf.translate(Vector3(0, 5, -2))
    assert tf.remove(tf.compose(a, b), b).is_close(a)


def test_copy_is_equal_and_independent():
    t = tf.scale(1, 2, 3)
    c = tf.copy(t)
    assert c is not t
    assert c.is_close(t)


def test_matrix_is_read_only():
    t = tf.identity()
    with pytest.raises(ValueError):
        t.m[0, 0] = 2.0
    m = t.matrix
    m[0, 0] = 2.0
    assert t.m[0, 0] == 1.0


def test_invert_rejects_singular_transform():
    with pytest.raises(SingularTransformError, match="not invertible"):
        tf.invert(tf.scale(0, 1, 1))
    with pytest.raises(SingularTransformError):
        tf.remove(tf.identity(), tf.scale(1, 0, 1))


def test_invert_rejects_degenerate_shear():
    m = np.eye(4)
    m[0, 1] = 1.0
    m[1, 1] = 1e-14
    with pytest.raises(SingularTransformError, match="not invertible"):
        tf.invert(AffineTransform.from_matrix(m))


@pytest.mark.parametrize(
    "t",
    [
        tf.translate(Vector3(1e7, 0, 0)),
        tf.scale(1e-7, 1e7, 1),
        tf.compose(tf.translate(Vector3(-3e8, 2e6, 5e7)), tf.scale(1e-4, 1e5, 2)),
    ],
)
def test_invert_accepts_large_translation_and_anisotropic_scale(t: AffineTransform):
    assert tf.compose(t, tf.invert(t)).is_close(tf.identity(), atol=1e-6)
    assert tf.remove(t, t).is_close(tf.identity(), atol=1e-6)


def test_invert_of_large_translation_is_negated_offset():
    inv = tf.invert(tf.translate(Vector3(1e7, 0, 0)))
    assert inv.is_close(tf.translate(Vector3(-1e7, 0, 0)))


def test_pseudo_invert_tolerates_singular_transform():
    p = tf.pseudo_invert(tf.scale(0, 2, 1))
    assert np.allclose(p.m, np.diag([0.0, 0.5, 1.0, 1.0]))
    assert tf.pseudo_invert(tf.scale(2, 4, 8)).is_close(tf.invert(tf.scale(2, 4, 8)))


@pytest.mark.parametrize(
    "factory",
    [
        lambda: tf.rotation_x(float("nan")),
        lambda: tf.rotation_z_degrees(float("inf")),
        lambda: tf.scale(1, float("nan"), 1),
        lambda: tf.scale_uniform(float("-inf")),
        lambda: tf.translate(Vector3(0, float("inf"), 0)),
    ],
)
def test_factories_reject_non_finite_inputs(factory):
    with pytest.raises(ValueError, match="finite"):
        factory()


def test_from_matrix_validates_shape():
    with pytest.raises(ValueError, match="4x4"):
        AffineTransform.from_matrix(np.eye(3))
    t = AffineTransform.from_matrix(np.eye(4) * 2.0)
    assert t.m[3, 3] == 2.0


def test_apply_points_validates_shape():
    t = tf.translate(Vector3(0, 0, 1))
    out = t.apply_points(np.zeros((2, 3)))
    assert out.tolist() == [[0.0, 0.0, 1.0], [0.0, 0.0, 1.0]]
    with pytest.raises(ValueError, match="shape"):
        t.apply_points(np.zeros((2, 4)))
