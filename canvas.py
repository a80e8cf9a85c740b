"""
Path-style drawing surface on top of pygame.

The scene only talks to this small set of primitives (clear, paths, filled
arcs, gradient strokes, outlined text), so any object with the same methods
can stand in for it.
"""

import math

import pygame

BACKGROUND = (255, 255, 255)

# pygame can't rasterize coordinates much beyond this
COORD_LIMIT = 1e6

OUTLINE_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


def is_drawable(x: float, y: float) -> bool:
    return (
        math.isfinite(x)
        and math.isfinite(y)
        and abs(x) < COORD_LIMIT
        and abs(y) < COORD_LIMIT
    )


class PygameCanvas:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font, background=BACKGROUND) -> None:
        self.surface = surface
        self.font = font
        self.background = background
        self.stroke_color = pygame.Color(0, 0, 0)
        self.line_width = 1
        self._gradient = None
        self._subpaths: list[list[tuple[float, float]]] = []

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.surface.fill(self.background, pygame.Rect(int(x), int(y), int(width), int(height)))

    def set_stroke_color(self, color) -> None:
        self.stroke_color = pygame.Color(color)
        self._gradient = None

    def set_gradient_stroke(self, x0, y0, x1, y1, start_color, end_color) -> None:
        """Linear gradient along (x0, y0) -> (x1, y1) for the next strokes."""
        self._gradient = (x0, y0, x1, y1, pygame.Color(start_color), pygame.Color(end_color))

    def set_line_width(self, width: int) -> None:
        self.line_width = max(1, int(width))

    def _gradient_color(self, x: float, y: float) -> pygame.Color:
        x0, y0, x1, y1, start, end = self._gradient
        gx = x1 - x0
        gy = y1 - y0
        length_sq = gx * gx + gy * gy
        if length_sq == 0:
            return start
        t = ((x - x0) * gx + (y - y0) * gy) / length_sq
        return start.lerp(end, min(1.0, max(0.0, t)))

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self._subpaths.append([])
        self._subpaths[-1].append((x, y))

    def stroke(self) -> int:
        """Draw the current path; returns the number of segments drawn."""
        drawn = 0
        for subpath in self._subpaths:
            for start, end in zip(subpath, subpath[1:]):
                # skip segments broken by a degenerate projection
                if not (is_drawable(*start) and is_drawable(*end)):
                    continue
                if self._gradient is not None:
                    color = self._gradient_color(*start)
                else:
                    color = self.stroke_color
                pygame.draw.line(self.surface, color, start, end, self.line_width)
                drawn += 1
        return drawn

    def fill_arc(self, x: float, y: float, radius: float, color) -> None:
        if is_drawable(x, y):
            pygame.draw.circle(self.surface, color, (x, y), radius)

    def draw_text(self, text: str, x: float, y: float, fill=(255, 255, 255),
                  outline=(0, 0, 0), anchor: str = "topleft") -> pygame.Rect:
        """Outlined text; returns the rect it covers, positioned by `anchor`."""
        face = self.font.render(text, True, fill)
        rect = face.get_rect(**{anchor: (int(x), int(y))})
        if outline is not None:
            edge = self.font.render(text, True, outline)
            for dx, dy in OUTLINE_OFFSETS:
                self.surface.blit(edge, rect.move(dx, dy))
        self.surface.blit(face, rect)
        return rect
