import math

from matrix import (
    IDENTITY,
    apply_matrix,
    multiply_matrices,
    perspective_divide,
    perspective_projection,
    rotation_about_y,
    rotation_about_z,
    translation,
    viewport_transform,
)


def _close(a, b, tol=1e-9):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a, b))


def test_identity_is_neutral():
    m = rotation_about_y(0.3)
    assert multiply_matrices(IDENTITY, m) == m
    assert multiply_matrices(m, IDENTITY) == m
    assert apply_matrix(IDENTITY, (1.0, 2.0, 3.0, 1.0)) == (1.0, 2.0, 3.0, 1.0)


def test_translation_moves_points_not_directions():
    t = translation(1.0, -2.0, 3.0)
    assert apply_matrix(t, (0.0, 0.0, 0.0, 1.0)) == (1.0, -2.0, 3.0, 1.0)
    assert apply_matrix(t, (1.0, 1.0, 1.0, 0.0)) == (1.0, 1.0, 1.0, 0.0)


def test_rotations_quarter_turn():
    v = apply_matrix(rotation_about_z(math.pi / 2), (1.0, 0.0, 0.0, 1.0))
    assert _close(v, (0.0, 1.0, 0.0, 1.0))

    v = apply_matrix(rotation_about_y(math.pi / 2), (1.0, 0.0, 0.0, 1.0))
    assert _close(v, (0.0, 0.0, -1.0, 1.0))

    v = apply_matrix(rotation_about_y(math.pi / 2), (0.0, 0.0, 1.0, 1.0))
    assert _close(v, (1.0, 0.0, 0.0, 1.0))


def test_composition_applies_right_to_left():
    rotate = rotation_about_z(math.pi / 2)
    move = translation(5.0, 0.0, 0.0)
    point = (1.0, 0.0, 0.0, 1.0)

    # rotate first, then move
    assert _close(apply_matrix(multiply_matrices(move, rotate), point), (5.0, 1.0, 0.0, 1.0))
    # move first, then rotate
    assert _close(apply_matrix(multiply_matrices(rotate, move), point), (0.0, 6.0, 0.0, 1.0))


def test_projection_maps_frustum_edges():
    p = perspective_projection(-1.0, 1.0, -0.5, 0.5, 1.0, 100.0)
    right_edge = perspective_divide(apply_matrix(p, (2.0, 0.0, 2.0, 1.0)))
    assert math.isclose(right_edge[0], 1.0)
    top_edge = perspective_divide(apply_matrix(p, (0.0, 1.5, 3.0, 1.0)))
    assert math.isclose(top_edge[1], 1.0)


def test_projection_depth_sign():
    near, far = 1.0, 1000.0
    p = perspective_projection(-1.0, 1.0, -1.0, 1.0, near, far)

    depth = lambda z: perspective_divide(apply_matrix(p, (0.0, 0.0, z, 1.0)))[2]

    assert depth(near) < 0
    assert depth(500.0) < 0
    assert depth(far) < 0
    # farther points divide to larger depth
    assert depth(10.0) < depth(100.0)
    # just behind the camera
    assert depth(-1.0) > 0


def test_viewport_maps_ndc_to_pixels():
    vp = viewport_transform(0.0, 0.0, 800.0, 600.0)
    assert apply_matrix(vp, (0.0, 0.0, 0.0, 1.0)) == (400.0, 300.0, 0.0, 1.0)
    assert apply_matrix(vp, (-1.0, 1.0, 0.0, 1.0)) == (0.0, 0.0, 0.0, 1.0)
    assert apply_matrix(vp, (1.0, -1.0, 0.0, 1.0)) == (800.0, 600.0, 0.0, 1.0)


def test_perspective_divide():
    assert perspective_divide((2.0, 4.0, -6.0, 2.0)) == (1.0, 2.0, -3.0, 1.0)


def test_perspective_divide_is_idempotent():
    once = perspective_divide((3.0, -1.5, 7.0, 0.5))
    assert perspective_divide(once) == once


def test_perspective_divide_by_zero_does_not_raise():
    x, y, z, w = perspective_divide((1.0, -2.0, 0.0, 0.0))
    assert x == math.inf
    assert y == -math.inf
    assert math.isnan(z)
    assert w == 1.0


def test_matrices_and_vectors_are_float_tuples():
    m = multiply_matrices(translation(1.0, 2.0, 3.0), rotation_about_z(0.5))
    assert isinstance(m, tuple) and len(m) == 16
    assert all(isinstance(value, float) for value in m + IDENTITY)
    v = apply_matrix(m, (1.0, 0.0, 0.0, 1.0))
    assert isinstance(v, tuple) and len(v) == 4
    assert isinstance(perspective_divide(v), tuple)
