"""
4x4 matrix helpers for the projection pipeline.

Matrices are row-major 16-tuples acting on column vectors, so
multiply_matrices(a, b) applies b first. Vectors are 4-tuples (x, y, z, w).
"""

import math

Matrix4 = tuple[float, ...]
Vector4 = tuple[float, float, float, float]

IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)


def multiply_matrices(a: Matrix4, b: Matrix4) -> Matrix4:
    """Return a . b"""
    return tuple(
        a[row * 4] * b[col]
        + a[row * 4 + 1] * b[4 + col]
        + a[row * 4 + 2] * b[8 + col]
        + a[row * 4 + 3] * b[12 + col]
        for row in range(4)
        for col in range(4)
    )


def apply_matrix(m: Matrix4, v: Vector4) -> Vector4:
    x, y, z, w = v
    return tuple(
        m[row * 4] * x + m[row * 4 + 1] * y + m[row * 4 + 2] * z + m[row * 4 + 3] * w
        for row in range(4)
    )


def translation(x: float, y: float, z: float) -> Matrix4:
    return (
        1.0, 0.0, 0.0, x,
        0.0, 1.0, 0.0, y,
        0.0, 0.0, 1.0, z,
        0.0, 0.0, 0.0, 1.0,
    )


def rotation_about_y(angle: float) -> Matrix4:
    c = math.cos(angle)
    s = math.sin(angle)
    return (
        c, 0.0, s, 0.0,
        0.0, 1.0, 0.0, 0.0,
        -s, 0.0, c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def rotation_about_z(angle: float) -> Matrix4:
    c = math.cos(angle)
    s = math.sin(angle)
    return (
        c, -s, 0.0, 0.0,
        s, c, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def perspective_projection(left, right, bottom, top, near, far) -> Matrix4:
    """Frustum projection for a camera looking down +z.

    w_clip is the view depth, and the depth row keeps both far/near terms
    negative: points in front of the camera divide to a negative depth, points
    just behind it to a positive one.
    """
    width = right - left
    height = top - bottom
    depth = far - near
    return (
        2.0 * near / width, 0.0, -(right + left) / width, 0.0,
        0.0, 2.0 * near / height, -(top + bottom) / height, 0.0,
        0.0, 0.0, -(far + near) / depth, -2.0 * far * near / depth,
        0.0, 0.0, 1.0, 0.0,
    )


def viewport_transform(x: float, y: float, width: float, height: float) -> Matrix4:
    """Map normalized [-1, 1] coordinates into a pixel box (screen y points down)."""
    half_w = width / 2.0
    half_h = height / 2.0
    return (
        half_w, 0.0, 0.0, x + half_w,
        0.0, -half_h, 0.0, y + half_h,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def _divide(a: float, b: float) -> float:
    # float division raises on zero, the pipeline wants inf/nan instead
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def perspective_divide(v: Vector4) -> Vector4:
    x, y, z, w = v
    return (_divide(x, w), _divide(y, w), _divide(z, w), 1.0)
