"""Applies the selected filters to camera frames and publishes the results."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

import numpy as np

from camfilters.capture import CaptureError
from camfilters.events import (
    ActivateCombinedFilter,
    ChangeFilterEvent,
    ViewEvent,
    ViewEventType,
)
from camfilters.filters import (
    FilterType,
    combine_frames,
    flip_horizontal,
    sobel,
    to_grayscale_rgb,
)
from camfilters.mats import WebcamMats

__all__ = ["WebcamController"]

logger = logging.getLogger(__name__)


class _FrameSource(Protocol):
    def read(self) -> np.ndarray: ...


_FILTERS: dict[FilterType, Callable[[np.ndarray], np.ndarray]] = {
    FilterType.NONE: lambda frame: frame,
    FilterType.GRAYSCALE: to_grayscale_rgb,
    FilterType.SOBEL: sobel,
}


class WebcamController:
    """Reads frames, reacts to view events and produces filtered frames.

    ``event_source`` is a callable returning the next pending event or None.
    ``capture`` has a ``read()`` method returning a frame and raising
    :class:`CaptureError` when no frame can be had.
    """

    def __init__(self, event_source: Callable[[], ViewEvent | None],
                 capture: _FrameSource) -> None:
        self._event_source = event_source
        self._capture = capture

        self.active_filters: dict[FilterType, bool] = {ft: False for ft in FilterType}
        self.combined_active = False
        self.combined_filters: dict[FilterType, bool] = {ft: False for ft in FilterType}

        self._active_count = 0
        self._combined_count = 0
        self._mats = WebcamMats()
        self._lock = threading.Lock()
        self._frame_shape: tuple[int, ...] | None = None

        self._thread: threading.Thread | None = None
        self._stop_requested = threading.Event()

        try:
            first = capture.read()
        except CaptureError as exc:
            logger.error("Could not capture frame: %s", exc)
            self.can_start = False
        else:
            self._frame_shape = first.shape
            self.can_start = first.size != 0
            if not self.can_start:
                logger.error("Could not capture frame")

    @property
    def active_count(self) -> int:
        """Number of enabled filters."""
        return self._active_count

    @property
    def combined_count(self) -> int:
        """Number of filters placed in the combined frame."""
        return self._combined_count

    @property
    def running(self) -> bool:
        """Whether the capture thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the capture thread if the camera delivered a first frame."""
        if not self.can_start or self.running:
            return
        self._stop_requested.clear()
        self._thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the capture thread to finish and wait for it."""
        self._stop_requested.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _capture_loop(self) -> None:
        while not self._stop_requested.is_set():
            try:
                frame = self._capture.read()
            except CaptureError as exc:
                logger.error("Could not capture frame: %s", exc)
                return
            if frame.size == 0:
                logger.error("Could not capture frame")
                return
            self.process_frame(frame)

    def process_events(self) -> None:
        """Apply every pending view event, oldest first."""
        while (event := self._event_source()) is not None:
            match event.event_type:
                case ViewEventType.ACTIVATE_COMBINED_FILTER:
                    assert isinstance(event, ActivateCombinedFilter)
                    self.combined_active = event.active
                    self._update_combined_frame()
                case ViewEventType.CHANGE_ACTIVE_FILTERS:
                    assert isinstance(event, ChangeFilterEvent)
                    self._change_active(event.filter_type, event.is_active)
                case ViewEventType.CHANGE_ACTIVE_FILTERS_ON_COMBINED_FILTER:
                    assert isinstance(event, ChangeFilterEvent)
                    self._change_combined(event.filter_type, event.is_active)
                case _:
                    pass

    def _change_active(self, filter_type: FilterType, is_active: bool) -> None:
        if self.active_filters[filter_type] == is_active:
            return
        self.active_filters[filter_type] = is_active
        if is_active:
            self._active_count += 1
            return
        with self._lock:
            if self._mats.filtered[filter_type] is not None:
                self._mats.filtered[filter_type] = None
                self._mats.active_count -= 1
        self._active_count -= 1
        self._change_combined(filter_type, False)

    def _change_combined(self, filter_type: FilterType, is_active: bool) -> None:
        if self.combined_filters[filter_type] == is_active:
            return
        self.combined_filters[filter_type] = is_active
        self._combined_count += 1 if is_active else -1
        self._update_combined_frame()

    def _update_combined_frame(self) -> None:
        if self.combined_active and self._combined_count and self._frame_shape is not None:
            height, width, channels = self._frame_shape
            blank = np.zeros((height, width * self._combined_count, channels), dtype=np.uint8)
            with self._lock:
                self._mats.combined = blank
        else:
            with self._lock:
                self._mats.combined = None

    def process_frame(self, frame: np.ndarray) -> None:
        """Handle pending events, then filter ``frame`` and publish the results."""
        self._frame_shape = frame.shape
        self.process_events()
        if self._active_count == 0:
            return

        flipped = flip_horizontal(frame)
        outputs = {
            filter_type: _FILTERS[filter_type](flipped)
            for filter_type, active in self.active_filters.items()
            if active
        }
        with self._lock:
            for filter_type, output in outputs.items():
                if self._mats.filtered[filter_type] is None:
                    self._mats.active_count += 1
                self._mats.filtered[filter_type] = output

        if self.combined_active and self._combined_count:
            parts = [
                outputs.get(filter_type, np.zeros_like(flipped))
                for filter_type, added in self.combined_filters.items()
                if added
            ]
            combined = combine_frames(parts)
            with self._lock:
                self._mats.combined = combined

    def get_mats(self, target: WebcamMats) -> None:
        """Copy the latest published frames into ``target``."""
        with self._lock:
            self._mats.copy_to(target)