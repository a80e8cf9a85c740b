"""
One render pass: grid, trajectory, axis triad and stats line.
"""

import math
from dataclasses import dataclass

from matrix import multiply_matrices
from projection import centering_transform, project, project_point

# grid on the x-z plane
GRID_EXTENT = 50
GRID_SPACING = 10
GRID_COLOR = (200, 200, 200)

# curve stroke gradient, top-left to bottom-right of the surface
CURVE_START_COLOR = (255, 0, 0)
CURVE_END_COLOR = (0, 0, 0)
MARKER_COLOR = (255, 0, 0)
MARKER_RADIUS = 4

AXES = (
    ("x", (1.0, 0.0, 0.0), (220, 0, 0)),
    ("y", (0.0, 1.0, 0.0), (0, 160, 0)),
    ("z", (0.0, 0.0, 1.0), (0, 0, 220)),
)
AXIS_LINE_WIDTH = 2

STATS_MARGIN = 10
STATS_COLOR = (255, 255, 255)
STATS_OUTLINE = (0, 0, 0)


@dataclass
class DisplayToggles:
    show_grid: bool = True
    show_axes: bool = True
    show_stats: bool = True
    use_pointer_lock: bool = False


def grid_lines():
    """Yield the grid segments as pairs of model-space points."""
    for i in range(-GRID_EXTENT, GRID_EXTENT + 1, GRID_SPACING):
        yield (i, 0.0, -GRID_EXTENT), (i, 0.0, GRID_EXTENT)
        yield (-GRID_EXTENT, 0.0, i), (GRID_EXTENT, 0.0, i)


def is_behind_camera(point) -> bool:
    """Coarse near-plane test on the divided depth; not a real clip."""
    return point[2] >= 0


def format_stats(sample_count: int, point_count: int, camera) -> str:
    return (
        f"{sample_count} samples, {point_count} points drawn, "
        f"lat {math.degrees(camera.latitude):.2f}°, "
        f"lon {math.degrees(camera.longitude):.2f}°"
    )


class SceneRenderer:
    def __init__(self, canvas) -> None:
        self.canvas = canvas

    def render(self, samples, camera, toggles: DisplayToggles, size) -> int:
        """Draw everything; returns the number of curve points drawn."""
        width, height = size
        canvas = self.canvas

        transform = multiply_matrices(
            camera.compose_view_projection(size), centering_transform(samples)
        )
        axis_transform = camera.compose_axis_transform(size)

        canvas.clear_rect(0, 0, width, height)

        if toggles.show_grid:
            self._draw_grid(transform)

        points = project(samples, transform)
        self._draw_curve(points, size)

        if toggles.show_axes:
            self._draw_axes(axis_transform)

        if toggles.show_stats:
            canvas.draw_text(
                format_stats(len(samples), len(points), camera),
                width - STATS_MARGIN,
                height - STATS_MARGIN,
                fill=STATS_COLOR,
                outline=STATS_OUTLINE,
                anchor="bottomright",
            )

        return len(points)

    def _draw_grid(self, transform) -> None:
        canvas = self.canvas
        canvas.set_stroke_color(GRID_COLOR)
        canvas.set_line_width(1)
        canvas.begin_path()
        for start, end in grid_lines():
            a = project_point(transform, *start)
            b = project_point(transform, *end)
            if is_behind_camera(a) or is_behind_camera(b):
                continue
            canvas.move_to(a[0], a[1])
            canvas.line_to(b[0], b[1])
        canvas.stroke()

    def _draw_curve(self, points, size) -> None:
        if not points:
            return
        width, height = size
        canvas = self.canvas
        canvas.set_gradient_stroke(0, 0, width, height, CURVE_START_COLOR, CURVE_END_COLOR)
        canvas.set_line_width(1)
        canvas.begin_path()
        canvas.move_to(*points[0])
        for x, y in points[1:]:
            canvas.line_to(x, y)
        canvas.stroke()

        canvas.fill_arc(points[0][0], points[0][1], MARKER_RADIUS, MARKER_COLOR)

    def _draw_axes(self, axis_transform) -> None:
        canvas = self.canvas
        origin = project_point(axis_transform, 0.0, 0.0, 0.0)

        tips = [(label, project_point(axis_transform, *unit), color) for label, unit, color in AXES]
        # back to front: larger divided depth is farther away
        tips.sort(key=lambda tip: tip[1][2], reverse=True)

        canvas.set_line_width(AXIS_LINE_WIDTH)
        for label, tip, color in tips:
            canvas.set_stroke_color(color)
            canvas.begin_path()
            canvas.move_to(origin[0], origin[1])
            canvas.line_to(tip[0], tip[1])
            canvas.stroke()
            canvas.draw_text(label, tip[0], tip[1], fill=color, outline=None, anchor="center")
