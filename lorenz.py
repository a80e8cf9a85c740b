#!/usr/bin/env python3
"""
Lorenz Attractor - interactive 3D viewer using Pygame
Drag to orbit, scroll to zoom, click a parameter to edit it, Enter to recalculate
"""

import argparse

import pygame

from camera import Camera
from canvas import PygameCanvas
from integrator import integrate
from params import DEFAULT_FIELDS, FIELDS, ParameterError, parse_parameters
from scene import DisplayToggles, SceneRenderer

WIDTH = 800
HEIGHT = 600

FONT_SIZE = 18
PADDING = 10
LINE_SPACING = 4

PANEL_COLOR = (0, 0, 0)
PANEL_ACTIVE_COLOR = (0, 90, 200)
ERROR_COLOR = (200, 0, 0)
HELP_BACKGROUND = (0, 0, 0, 200)

HELP_LINES = [
    "Keybindings:",
    "",
    "  Drag           Orbit camera",
    "  Scroll         Zoom in/out",
    "  Click value    Edit parameter (Tab=next)",
    "  Enter          Recalculate",
    "  G              Toggle grid",
    "  A              Toggle axes",
    "  S              Toggle stats",
    "  L              Toggle pointer lock",
    "  0              Reset camera",
    "  H / ?          This help",
    "  Q / ESC        Quit",
]


class EditState:
    """Text input state for the parameter fields."""

    ORDER = list(FIELDS)

    def __init__(self) -> None:
        self.active_field = None
        self.text = ""
        self.field_rects: dict[str, pygame.Rect] = {}

    def start_editing(self, field_name: str, initial_text: str) -> None:
        self.active_field = field_name
        self.text = initial_text
        pygame.key.start_text_input()

    def stop_editing(self) -> None:
        self.active_field = None
        self.text = ""
        pygame.key.stop_text_input()

    def next_field(self, reverse: bool = False):
        if self.active_field is None:
            return None
        idx = self.ORDER.index(self.active_field)
        idx = (idx - 1 if reverse else idx + 1) % len(self.ORDER)
        return self.ORDER[idx]


class LorenzViewer:
    def __init__(self, width: int = WIDTH, height: int = HEIGHT, fields=None,
                 toggles: DisplayToggles = None, fullscreen: bool = False) -> None:
        self.width = width
        self.height = height
        self.fullscreen = fullscreen

        self.fields = dict(DEFAULT_FIELDS)
        if fields:
            self.fields.update(fields)
        self.toggles = toggles if toggles is not None else DisplayToggles()
        self.camera = Camera()
        self.samples = []
        self.point_count = 0
        self.error = None

        self.edit = EditState()
        self.show_help = False
        self.running = True

        # initialized in open()
        self.screen = None
        self.canvas = None
        self.renderer = None

    # Integration

    def calculate(self) -> bool:
        """Re-run the integration from the text fields.

        On invalid input the previous trajectory is kept and the error is
        shown instead.
        """
        try:
            params = parse_parameters(self.fields)
        except ParameterError as exc:
            self.error = str(exc)
            print(self.error)
            return False

        self.samples = integrate(*params)
        self.error = None
        print(f"Integrated {len(self.samples)} samples "
              f"(rho={params.rho:g}, sigma={params.sigma:g}, beta={params.beta:g}, "
              f"max t={params.max_time:g}, dt={params.step_size:g})")
        return True

    # Window

    def open(self) -> None:
        pygame.init()
        flags = pygame.FULLSCREEN if self.fullscreen else pygame.RESIZABLE
        self.screen = pygame.display.set_mode((self.width, self.height), flags)
        pygame.display.set_caption("Lorenz Attractor")
        font = pygame.font.SysFont("monospace", FONT_SIZE)
        self.canvas = PygameCanvas(self.screen, font)
        self.renderer = SceneRenderer(self.canvas)

    def run(self) -> None:
        self.open()
        self.calculate()
        self.redraw()

        print("Lorenz Attractor running. Press H for help, ESC or Q to quit.")

        while self.running:
            self.handle_event(pygame.event.wait())

        pygame.quit()

    def redraw(self) -> None:
        size = viewport_size(self.screen.get_size())
        self.point_count = self.renderer.render(self.samples, self.camera, self.toggles, size)
        self._draw_panel()
        if self.show_help:
            self._draw_help(size)
        pygame.display.flip()

    def _field_text(self, name: str) -> str:
        if self.edit.active_field == name:
            return self.edit.text + "_"
        return self.fields[name]

    def _draw_panel(self) -> None:
        y = PADDING
        self.edit.field_rects = {}
        for name, label in FIELDS.items():
            color = PANEL_ACTIVE_COLOR if self.edit.active_field == name else PANEL_COLOR
            rect = self.canvas.draw_text(f"{label:>6} = {self._field_text(name)}", PADDING, y,
                                         fill=color, outline=None)
            self.edit.field_rects[name] = rect
            y = rect.bottom + LINE_SPACING

        if self.error:
            self.canvas.draw_text(self.error, PADDING, y + LINE_SPACING,
                                  fill=ERROR_COLOR, outline=None)

    def _draw_help(self, size) -> None:
        overlay = pygame.Surface(size, pygame.SRCALPHA)
        overlay.fill(HELP_BACKGROUND)
        self.screen.blit(overlay, (0, 0))
        y = PADDING * 4
        for line in HELP_LINES:
            rect = self.canvas.draw_text(line, size[0] // 4, y, fill=(255, 255, 255), outline=None)
            y = rect.bottom + LINE_SPACING

    # Event handling

    def handle_event(self, event) -> None:
        handler = self._event_handlers.get(event.type)
        if handler:
            handler(self, event)

    @property
    def _event_handlers(self) -> dict:
        return {
            pygame.QUIT: lambda self, e: setattr(self, "running", False),
            pygame.TEXTINPUT: LorenzViewer._on_text_input,
            pygame.KEYDOWN: LorenzViewer._on_keydown,
            pygame.VIDEORESIZE: LorenzViewer._on_resize,
            pygame.MOUSEBUTTONDOWN: LorenzViewer._on_mouse_down,
            pygame.MOUSEBUTTONUP: LorenzViewer._on_mouse_up,
            pygame.MOUSEMOTION: LorenzViewer._on_mouse_motion,
            pygame.MOUSEWHEEL: LorenzViewer._on_mouse_wheel,
        }

    @property
    def _key_handlers(self) -> dict:
        return {
            pygame.K_ESCAPE: lambda s, e: setattr(s, "running", False),
            pygame.K_q: lambda s, e: setattr(s, "running", False),
            pygame.K_RETURN: LorenzViewer._recalculate,
            pygame.K_KP_ENTER: LorenzViewer._recalculate,
            pygame.K_g: lambda s, e: s._toggle("show_grid"),
            pygame.K_a: lambda s, e: s._toggle("show_axes"),
            pygame.K_s: lambda s, e: s._toggle("show_stats"),
            pygame.K_l: LorenzViewer._toggle_pointer_lock,
            pygame.K_0: LorenzViewer._reset_camera,
            pygame.K_h: LorenzViewer._toggle_help,
            pygame.K_QUESTION: LorenzViewer._toggle_help,
            pygame.K_SLASH: LorenzViewer._toggle_help,
        }

    def _on_text_input(self, event) -> None:
        if self.edit.active_field is not None:
            self.edit.text += event.text
            self.redraw()

    def _on_keydown(self, event) -> None:
        if self.edit.active_field is not None:
            self._handle_edit_key(event)
            return

        handler = self._key_handlers.get(event.key)
        if handler:
            handler(self, event)

    def _handle_edit_key(self, event) -> None:
        """Keys while a field is being edited; everything else is text input."""
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._apply_edit()
            self.edit.stop_editing()
            self.calculate()
        elif event.key == pygame.K_ESCAPE:
            self.edit.stop_editing()
        elif event.key == pygame.K_BACKSPACE:
            self.edit.text = self.edit.text[:-1]
        elif event.key == pygame.K_TAB:
            self._apply_edit()
            reverse = bool(getattr(event, "mod", 0) & pygame.KMOD_SHIFT)
            next_field = self.edit.next_field(reverse=reverse)
            self.edit.active_field = next_field
            self.edit.text = self.fields[next_field]
        else:
            return
        self.redraw()

    def _apply_edit(self) -> None:
        self.fields[self.edit.active_field] = self.edit.text.strip()

    def _recalculate(self, event) -> None:
        self.calculate()
        self.redraw()

    def _toggle(self, name: str) -> None:
        value = not getattr(self.toggles, name)
        setattr(self.toggles, name, value)
        print(f"{name}: {'on' if value else 'off'}")
        self.redraw()

    def _toggle_pointer_lock(self, event) -> None:
        if self.toggles.use_pointer_lock and self.camera.dragging:
            self._release_pointer()
        self._toggle("use_pointer_lock")

    def _toggle_help(self, event) -> None:
        self.show_help = not self.show_help
        self.redraw()

    def _reset_camera(self, event) -> None:
        self.camera.reset()
        self.redraw()

    def _on_resize(self, event) -> None:
        self.screen = pygame.display.get_surface()
        self.canvas.surface = self.screen
        self.redraw()

    # Mouse handling

    def _grab_pointer(self) -> None:
        # hidden + grabbed puts SDL in relative mode, so rel never stops at the border
        pygame.event.set_grab(True)
        pygame.mouse.set_visible(False)

    def _release_pointer(self) -> None:
        pygame.event.set_grab(False)
        pygame.mouse.set_visible(True)

    def _on_mouse_down(self, event) -> None:
        if event.button != 1:
            return

        for name, rect in self.edit.field_rects.items():
            if rect.collidepoint(event.pos):
                if self.edit.active_field is not None:
                    self._apply_edit()
                self.edit.start_editing(name, self.fields[name])
                self.redraw()
                return

        if self.edit.active_field is not None:
            self.edit.stop_editing()
            self.redraw()

        self.camera.begin_drag()
        if self.toggles.use_pointer_lock:
            self._grab_pointer()

    def _on_mouse_up(self, event) -> None:
        if event.button != 1 or not self.camera.dragging:
            return
        self.camera.end_drag()
        if self.toggles.use_pointer_lock:
            self._release_pointer()

    def _on_mouse_motion(self, event) -> None:
        dx, dy = event.rel
        if self.camera.apply_drag_delta(dx, dy):
            self.redraw()

    def _on_mouse_wheel(self, event) -> None:
        if event.y == 0:
            return
        self.camera.apply_zoom_delta(1 if event.y > 0 else -1)
        self.redraw()


def viewport_size(size):
    """Surface size with both sides at least one pixel (minimized windows report 0)."""
    width, height = size
    return max(1, width), max(1, height)


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _parse_cli(argv=None):
    parser = argparse.ArgumentParser(description="Integrate the Lorenz system and view it in 3D.")
    parser.add_argument("--rho", default=DEFAULT_FIELDS["rho"], help="rho, a number or fraction like 8/3")
    parser.add_argument("--sigma", default=DEFAULT_FIELDS["sigma"], help="sigma")
    parser.add_argument("--beta", default=DEFAULT_FIELDS["beta"], help="beta")
    parser.add_argument("--max-time", default=DEFAULT_FIELDS["max_time"], help="integrate over [0, max-time)")
    parser.add_argument("--step-size", default=DEFAULT_FIELDS["step_size"], help="Euler step dt")
    parser.add_argument("--width", type=_positive_int, default=WIDTH, help="window width")
    parser.add_argument("--height", type=_positive_int, default=HEIGHT, help="window height")
    parser.add_argument("--fullscreen", action="store_true", help="open full screen")
    parser.add_argument("--no-grid", action="store_true", help="hide the grid")
    parser.add_argument("--no-axes", action="store_true", help="hide the axis indicator")
    parser.add_argument("--no-stats", action="store_true", help="hide the stats line")
    parser.add_argument("--pointer-lock", action="store_true", help="grab and hide the pointer while dragging")
    return parser.parse_args(argv)


def build_viewer(args) -> LorenzViewer:
    fields = {
        "rho": args.rho,
        "sigma": args.sigma,
        "beta": args.beta,
        "max_time": args.max_time,
        "step_size": args.step_size,
    }
    toggles = DisplayToggles(
        show_grid=not args.no_grid,
        show_axes=not args.no_axes,
        show_stats=not args.no_stats,
        use_pointer_lock=args.pointer_lock,
    )
    return LorenzViewer(args.width, args.height, fields, toggles, args.fullscreen)


def main(argv=None):
    build_viewer(_parse_cli(argv)).run()


if __name__ == "__main__":
    main()
