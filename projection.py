"""
Project trajectory samples to the screen and thin out the resulting polyline.
"""

from matrix import apply_matrix, perspective_divide, translation

# minimum manhattan distance (pixels) between consecutive drawn points
DECIMATION_THRESHOLD = 2.0


def project_point(transform, x: float, y: float, z: float):
    """Return the divided (x, y, z, 1) screen-space vector of a model point."""
    return perspective_divide(apply_matrix(transform, (x, y, z, 1.0)))


def decimate(points, threshold: float = DECIMATION_THRESHOLD) -> list:
    """Drop points closer than `threshold` to the last kept point.

    The first point is always kept. Distances are measured against the last
    kept point, not the previous input point, so a slow drift is still drawn
    once it adds up. Trailing points that never reach the threshold are
    dropped.
    """
    kept = []
    last = None
    for point in points:
        if last is None:
            kept.append(point)
            last = point
            continue
        if abs(point[0] - last[0]) + abs(point[1] - last[1]) >= threshold:
            kept.append(point)
            last = point
    return kept


def project(samples, transform) -> list[tuple[float, float]]:
    """Screen (x, y) of every sample, decimated."""
    screen = []
    for sample in samples:
        sx, sy, _, _ = project_point(transform, sample.x, sample.y, sample.z)
        screen.append((sx, sy))
    return decimate(screen)


def bounding_box_center(samples) -> tuple[float, float, float]:
    """Midpoint of the samples' bounding box, with the origin always inside it."""
    min_x = min_y = min_z = 0.0
    max_x = max_y = max_z = 0.0
    for sample in samples:
        min_x = min(min_x, sample.x)
        max_x = max(max_x, sample.x)
        min_y = min(min_y, sample.y)
        max_y = max(max_y, sample.y)
        min_z = min(min_z, sample.z)
        max_z = max(max_z, sample.z)
    return (
        (min_x + max_x) / 2.0,
        (min_y + max_y) / 2.0,
        (min_z + max_z) / 2.0,
    )


def centering_transform(samples):
    cx, cy, cz = bounding_box_center(samples)
    return translation(-cx, -cy, -cz)
