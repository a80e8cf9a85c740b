"""
Orbit camera around the (centered) trajectory.

Dragging changes latitude/longitude, the wheel steps the zoom level, and the
camera composes the view, projection and viewport matrices for the renderer.
"""

import math
import sys

from matrix import (
    multiply_matrices,
    perspective_projection,
    rotation_about_y,
    rotation_about_z,
    translation,
    viewport_transform,
)

TAU = 2.0 * math.pi

# drag sensitivity in radians per pixel of mouse movement
DRAG_SENSITIVITY = 0.005

# zoom
BASE_DISTANCE = 80.0
ZOOM_FACTOR = 1.1
MAX_ZOOM_LEVEL = 10
# below this the distance no longer fits in a float
MIN_FINITE_ZOOM_LEVEL = -int(math.log(sys.float_info.max / BASE_DISTANCE) / math.log(ZOOM_FACTOR))

# frustum: half height at the near plane, widened by the viewport aspect
NEAR = 1.0
FAR = 1000.0
FRUSTUM_HALF_HEIGHT = 0.5

# axis indicator, drawn in the lower-left corner
AXIS_DISTANCE = 4.0
AXIS_BOX_SIZE = 100
AXIS_BOX_MARGIN = 10


def wrap_angle(angle: float) -> float:
    """Wrap into [0, 2*pi)."""
    wrapped = angle % TAU
    # tiny negative angles round up to exactly TAU
    if wrapped >= TAU:
        return 0.0
    return wrapped


class Camera:
    __slots__ = ("latitude", "longitude", "distance", "zoom_level", "dragging")

    def __init__(self, latitude: float = 0.0, longitude: float = 0.0, zoom_level: int = 0) -> None:
        self.latitude = wrap_angle(latitude)
        self.longitude = wrap_angle(longitude)
        self.zoom_level = min(zoom_level, MAX_ZOOM_LEVEL)
        self.distance = self._distance_for(self.zoom_level)
        self.dragging = False

    @staticmethod
    def _distance_for(zoom_level: int) -> float:
        if zoom_level < MIN_FINITE_ZOOM_LEVEL:
            return math.inf
        return BASE_DISTANCE / ZOOM_FACTOR ** zoom_level

    def reset(self) -> None:
        self.latitude = 0.0
        self.longitude = 0.0
        self.zoom_level = 0
        self.distance = BASE_DISTANCE
        self.dragging = False

    def begin_drag(self) -> None:
        self.dragging = True

    def end_drag(self) -> None:
        self.dragging = False

    def apply_drag_delta(self, movement_x: float, movement_y: float) -> bool:
        """Orbit by a mouse movement. Returns False when not dragging."""
        if not self.dragging:
            return False
        self.longitude = wrap_angle(self.longitude - DRAG_SENSITIVITY * movement_x)
        self.latitude = wrap_angle(self.latitude + DRAG_SENSITIVITY * movement_y)
        return True

    def apply_zoom_delta(self, direction: int) -> None:
        """Zoom in one step for a positive direction, otherwise out one step."""
        if direction > 0:
            self.zoom_level = min(self.zoom_level + 1, MAX_ZOOM_LEVEL)
        else:
            self.zoom_level -= 1
        self.distance = self._distance_for(self.zoom_level)

    def _rotation(self):
        return multiply_matrices(rotation_about_z(-self.latitude), rotation_about_y(self.longitude))

    def view_matrix(self):
        return multiply_matrices(translation(0.0, 0.0, self.distance), self._rotation())

    def compose_view_projection(self, viewport_size):
        """Model space to screen space, before the model-centering translation."""
        width, height = viewport_size
        aspect = width / height
        half_w = FRUSTUM_HALF_HEIGHT * aspect
        projection = perspective_projection(
            -half_w, half_w, -FRUSTUM_HALF_HEIGHT, FRUSTUM_HALF_HEIGHT, NEAR, FAR
        )
        viewport = viewport_transform(0.0, 0.0, width, height)
        return multiply_matrices(viewport, multiply_matrices(projection, self.view_matrix()))

    def compose_axis_transform(self, viewport_size):
        """Transform for the axis triad.

        Follows the camera rotation but sits at a fixed distance inside a
        fixed box in the lower-left corner, whatever the zoom level.
        """
        _, height = viewport_size
        view = multiply_matrices(translation(0.0, 0.0, AXIS_DISTANCE), self._rotation())
        projection = perspective_projection(
            -FRUSTUM_HALF_HEIGHT, FRUSTUM_HALF_HEIGHT,
            -FRUSTUM_HALF_HEIGHT, FRUSTUM_HALF_HEIGHT,
            NEAR, FAR,
        )
        viewport = viewport_transform(
            AXIS_BOX_MARGIN,
            height - AXIS_BOX_MARGIN - AXIS_BOX_SIZE,
            AXIS_BOX_SIZE,
            AXIS_BOX_SIZE,
        )
        return multiply_matrices(viewport, multiply_matrices(projection, view))
