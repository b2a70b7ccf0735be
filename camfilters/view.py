"""Window that lets the user pick filters and shows the filtered frames."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

import pygame

from camfilters.capture import DEFAULT_HEIGHT, DEFAULT_WIDTH, CameraCapture, CaptureError
from camfilters.controller import WebcamController
from camfilters.event_queue import ViewEventQueue
from camfilters.events import (
    ActivateCombinedFilter,
    ChangeActiveFilters,
    ChangeActiveFiltersOnCombinedFilter,
    ViewEvent,
)
from camfilters.filters import FilterType
from camfilters.mats import WebcamMats
from camfilters.texture import ImageTexture

__all__ = ["WebcamView", "main"]

_WINDOW_TITLE = "Webcam Filters"
_WINDOW_SIZE = (1280, 720)
_CHILD_SIZE = (1280, 720)
_MAIN_FRACTION = 0.15
_PAD = 8
_ROW = 26
_BOX = 16
_SCROLL_STEP = 40
_GAIN_MAX = 2.0

_CLEAR_COLOR = (115, 140, 153)
_PANEL_COLOR = (36, 36, 40)
_FRAME_COLOR = (110, 110, 128)
_TEXT_COLOR = (235, 235, 235)
_ACCENT_COLOR = (66, 150, 250)


@dataclass(frozen=True)
class _Layout:
    slider: pygame.Rect
    fps_y: int
    header_y: int
    add_column_x: int
    rows: dict
    combine: pygame.Rect


def _main_layout(panel_width: int) -> _Layout:
    inner = max(panel_width - 2 * _PAD, 1)
    y = _PAD
    slider = pygame.Rect(_PAD, y, inner, _BOX)
    y += _ROW
    fps_y = y
    y += _ROW
    header_y = y
    y += _ROW
    column = inner // 2
    rows = {}
    for filter_type in FilterType:
        rows[filter_type] = (
            pygame.Rect(_PAD, y, _BOX, _BOX),
            pygame.Rect(_PAD + column, y, _BOX, _BOX),
        )
        y += _ROW
    combine = pygame.Rect(_PAD, y + _PAD, _BOX, _BOX)
    return _Layout(slider, fps_y, header_y, _PAD + column, rows, combine)


class WebcamView:
    """Owns the event queue and the controller, and draws the window."""

    def __init__(self, capture) -> None:
        self._queue = ViewEventQueue()
        self.controller = WebcamController(self.pop_event, capture)
        self.mats = WebcamMats()

        self.gain = 1.0
        self.clear_color = _CLEAR_COLOR

        self.combined_active = self.controller.combined_active
        self.active_filters = dict(self.controller.active_filters)
        self.combined_filters = dict(self.controller.combined_filters)

        self._filtered_textures: list[tuple[FilterType, ImageTexture]] = []
        self._combined_texture = ImageTexture()

        self._screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._clock: pygame.time.Clock | None = None
        self._panel_width = int(_WINDOW_SIZE[0] * _MAIN_FRACTION)
        self._scroll_x = 0
        self._dragging_gain = False

    # Event queue

    def push_event(self, event: ViewEvent) -> None:
        """Queue an event for the controller."""
        self._queue.push(event)

    def pop_event(self) -> ViewEvent | None:
        """Take the oldest queued event, or None when there is none."""
        return self._queue.pop()

    def on_activate_combined_clicked(self, active: bool) -> None:
        """The user toggled the combined view."""
        self.combined_active = active
        self.push_event(ActivateCombinedFilter(active=active))

    def on_active_filter_clicked(self, filter_type: FilterType, is_active: bool) -> None:
        """The user enabled or disabled a filter."""
        self.active_filters[filter_type] = is_active
        self.push_event(ChangeActiveFilters(filter_type=filter_type, is_active=is_active))

    def on_combined_filter_clicked(self, filter_type: FilterType, is_added: bool) -> None:
        """The user added a filter to, or removed it from, the combined view."""
        self.combined_filters[filter_type] = is_added
        self.push_event(
            ChangeActiveFiltersOnCombinedFilter(filter_type=filter_type, is_active=is_added)
        )

    # Main loop

    def run(self) -> None:
        """Open the window, start capturing and loop until the window is closed."""
        pygame.display.init()
        pygame.font.init()
        try:
            self._screen = pygame.display.set_mode(_WINDOW_SIZE, pygame.RESIZABLE)
            pygame.display.set_caption(_WINDOW_TITLE)
            self._font = pygame.font.Font(None, 20)
            self._clock = pygame.time.Clock()
            self.controller.start()
            try:
                while not self._handle_events():
                    self._show()
                    self._clock.tick(60)
            finally:
                self.controller.stop()
        finally:
            self._exit()

    def _exit(self) -> None:
        self._clear_textures()
        self._screen = None
        self._font = None
        pygame.font.quit()
        pygame.display.quit()

    def _handle_events(self) -> bool:
        done = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                done = True
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._on_click(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._dragging_gain = False
            elif event.type == pygame.MOUSEMOTION and self._dragging_gain:
                self._set_gain_from_x(event.pos[0])
            elif event.type == pygame.MOUSEWHEEL:
                self._scroll_x = max(0, self._scroll_x + (event.x - event.y) * _SCROLL_STEP)
        return done

    def _on_click(self, pos: tuple[int, int]) -> None:
        layout = _main_layout(self._panel_width)
        if layout.slider.collidepoint(pos):
            self._dragging_gain = True
            self._set_gain_from_x(pos[0])
            return
        for filter_type, (box, add_box) in layout.rows.items():
            if box.collidepoint(pos):
                self.on_active_filter_clicked(filter_type, not self.active_filters[filter_type])
                return
            if self.active_filters[filter_type] and add_box.collidepoint(pos):
                self.on_combined_filter_clicked(
                    filter_type, not self.combined_filters[filter_type]
                )
                return
        if layout.combine.collidepoint(pos):
            self.on_activate_combined_clicked(not self.combined_active)

    def _set_gain_from_x(self, x: int) -> None:
        slider = _main_layout(self._panel_width).slider
        fraction = (x - slider.left) / slider.width
        self.gain = min(max(fraction * _GAIN_MAX, 0.0), _GAIN_MAX)

    # Drawing

    def _show(self) -> None:
        width, height = self._screen.get_size()
        self._panel_width = int(width * _MAIN_FRACTION)
        self._screen.fill(self.clear_color)
        self._show_filters(width, height)
        self._show_main_contents(height)
        pygame.display.flip()
        self._clear_textures()

    def _text(self, text: str, pos: tuple[int, int], color=_TEXT_COLOR) -> None:
        self._screen.blit(self._font.render(text, True, color), pos)

    def _checkbox(self, rect: pygame.Rect, checked: bool, label: str) -> None:
        pygame.draw.rect(self._screen, _FRAME_COLOR, rect, 1)
        if checked:
            pygame.draw.rect(self._screen, _ACCENT_COLOR, rect.inflate(-6, -6))
        self._text(label, (rect.right + 6, rect.top))

    def _show_main_contents(self, height: int) -> None:
        screen = self._screen
        pygame.draw.rect(screen, _PANEL_COLOR, pygame.Rect(0, 0, self._panel_width, height))
        layout = _main_layout(self._panel_width)

        slider = layout.slider
        pygame.draw.rect(screen, _FRAME_COLOR, slider, 1)
        handle_x = slider.left + int(self.gain / _GAIN_MAX * (slider.width - 1))
        pygame.draw.line(screen, _ACCENT_COLOR, (handle_x, slider.top), (handle_x, slider.bottom - 1), 3)
        self._text(f"gain {self.gain:.3f}", (slider.left + 4, slider.top + 1))

        fps = self._clock.get_fps() if self._clock is not None else 0.0
        if fps > 0:
            fps_text = f"{1000.0 / fps:.3f} ms/frame ({fps:.1f} FPS)"
        else:
            fps_text = "- ms/frame (- FPS)"
        self._text(fps_text, (_PAD, layout.fps_y))

        self._text("Filters", (_PAD, layout.header_y))
        self._text("Add to Combined", (layout.add_column_x, layout.header_y))
        for filter_type, (box, add_box) in layout.rows.items():
            self._checkbox(box, self.active_filters[filter_type], filter_type.label)
            if self.active_filters[filter_type]:
                self._checkbox(add_box, self.combined_filters[filter_type], "Add")

        self._checkbox(layout.combine, self.combined_active, "Combine Filters")

    def _show_filters(self, width: int, height: int) -> None:
        self.controller.get_mats(self.mats)
        if self.mats.active_count == 0:
            return

        screen = self._screen
        left = self._panel_width
        has_combined = self.mats.combined is not None
        filters_height = height // 2 if has_combined else height
        area = pygame.Rect(left, 0, width - left, filters_height)
        pygame.draw.rect(screen, _PANEL_COLOR, area)

        for filter_type, frame in self.mats.filtered.items():
            if frame is None:
                continue
            texture = ImageTexture()
            texture.set_image(frame)
            self._filtered_textures.append((filter_type, texture))

        child_width, child_height = _CHILD_SIZE
        content_width = len(self._filtered_textures) * (child_width + _PAD) + _PAD
        if has_combined:
            self._combined_texture.set_image(self.mats.combined)
            content_width = max(content_width, self._combined_texture.size()[0] + 2 * _PAD)
        self._scroll_x = min(self._scroll_x, max(0, content_width - area.width))

        screen.set_clip(area)
        x = left + _PAD - self._scroll_x
        for filter_type, texture in self._filtered_textures:
            child = pygame.Rect(x, _PAD, child_width, child_height)
            screen.blit(texture.surface, (child.left + 1, child.top + 1))
            pygame.draw.rect(screen, _FRAME_COLOR, child, 1)
            self._text(filter_type.label, (child.left + 4, child.top + 4))
            x += child_width + _PAD
        screen.set_clip(None)

        if has_combined:
            combined_area = pygame.Rect(left, filters_height, width - left, filters_height)
            pygame.draw.rect(screen, _PANEL_COLOR, combined_area)
            screen.set_clip(combined_area)
            screen.blit(
                self._combined_texture.surface,
                (left + _PAD - self._scroll_x, filters_height + _PAD),
            )
            screen.set_clip(None)

    def _clear_textures(self) -> None:
        for _, texture in self._filtered_textures:
            texture.release()
        self._filtered_textures.clear()
        self._combined_texture.release()


def main(argv=None) -> int:
    """Open the camera and show the filter window."""
    parser = argparse.ArgumentParser(
        prog="camfilters", description="Show live camera frames through image filters."
    )
    parser.add_argument("--device", default="0", help="camera index or device name")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="capture width")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="capture height")
    args = parser.parse_args(argv)

    device = int(args.device) if args.device.isdigit() else args.device
    try:
        capture = CameraCapture(device, args.width, args.height)
    except CaptureError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    with capture:
        WebcamView(capture).run()
    return 0