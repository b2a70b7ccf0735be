import numpy as np
import pytest

from camfilters.capture import CaptureError
from camfilters.controller import WebcamController
from camfilters.event_queue import ViewEventQueue
from camfilters.events import (
    ActivateCombinedFilter,
    ChangeActiveFilters,
    ChangeActiveFiltersOnCombinedFilter,
)
from camfilters.filters import FilterType, combine_frames, flip_horizontal, sobel, to_grayscale_rgb
from camfilters.mats import WebcamMats


class FakeCapture:
    def __init__(self, frames):
        self._frames = list(frames)

    def read(self):
        if not self._frames:
            raise CaptureError("no more frames")
        return self._frames.pop(0)


def make_frame(seed=0):
    return (np.arange(3 * 4 * 3, dtype=np.uint16).reshape(3, 4, 3) * 7 + seed).astype(np.uint8)


@pytest.fixture
def setup():
    queue = ViewEventQueue()
    controller = WebcamController(queue.pop, FakeCapture([make_frame()]))
    return queue, controller


def published(controller):
    mats = WebcamMats()
    controller.get_mats(mats)
    return mats


def test_initial_state(setup):
    _, controller = setup
    assert controller.can_start is True
    assert controller.active_filters == {ft: False for ft in FilterType}
    assert controller.combined_filters == {ft: False for ft in FilterType}
    assert controller.combined_active is False
    assert published(controller).active_count == 0


def test_no_active_filters_publishes_nothing(setup):
    _, controller = setup
    controller.process_frame(make_frame())
    mats = published(controller)
    assert mats.active_count == 0
    assert all(frame is None for frame in mats.filtered.values())


def test_none_filter_publishes_flipped_frame(setup):
    queue, controller = setup
    frame = make_frame()
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    controller.process_frame(frame)
    mats = published(controller)
    assert controller.active_count == 1
    assert mats.active_count == 1
    np.testing.assert_array_equal(mats.filtered[FilterType.NONE], flip_horizontal(frame))


def test_grayscale_and_sobel(setup):
    queue, controller = setup
    frame = make_frame(3)
    queue.push(ChangeActiveFilters(FilterType.GRAYSCALE, True))
    queue.push(ChangeActiveFilters(FilterType.SOBEL, True))
    controller.process_frame(frame)
    mats = published(controller)
    flipped = flip_horizontal(frame)
    assert mats.active_count == 2
    np.testing.assert_array_equal(mats.filtered[FilterType.GRAYSCALE], to_grayscale_rgb(flipped))
    np.testing.assert_array_equal(mats.filtered[FilterType.SOBEL], sobel(flipped))
    assert mats.filtered[FilterType.NONE] is None


def test_disabling_filter_clears_its_frame(setup):
    queue, controller = setup
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    controller.process_frame(make_frame())
    queue.push(ChangeActiveFilters(FilterType.NONE, False))
    controller.process_events()
    mats = published(controller)
    assert controller.active_count == 0
    assert mats.active_count == 0
    assert mats.filtered[FilterType.NONE] is None


def test_enable_then_disable_before_frame_keeps_count(setup):
    queue, controller = setup
    queue.push(ChangeActiveFilters(FilterType.SOBEL, True))
    queue.push(ChangeActiveFilters(FilterType.SOBEL, False))
    controller.process_frame(make_frame())
    assert controller.active_count == 0
    assert published(controller).active_count == 0


def test_repeated_event_changes_nothing(setup):
    queue, controller = setup
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    controller.process_events()
    assert controller.active_count == 1


def test_combined_frame(setup):
    queue, controller = setup
    frame = make_frame(5)
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    queue.push(ChangeActiveFilters(FilterType.SOBEL, True))
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.NONE, True))
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.SOBEL, True))
    queue.push(ActivateCombinedFilter(True))
    controller.process_frame(frame)
    mats = published(controller)
    flipped = flip_horizontal(frame)
    assert controller.combined_count == 2
    np.testing.assert_array_equal(mats.combined, combine_frames([flipped, sobel(flipped)]))
    assert mats.combined.shape == (frame.shape[0], frame.shape[1] * 2, 3)


def test_combined_inactive_has_no_frame(setup):
    queue, controller = setup
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.NONE, True))
    controller.process_frame(make_frame())
    assert published(controller).combined is None


def test_activating_combined_allocates_frame(setup):
    queue, controller = setup
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.GRAYSCALE, True))
    queue.push(ActivateCombinedFilter(True))
    controller.process_events()
    combined = published(controller).combined
    frame = make_frame()
    assert combined.shape == (frame.shape[0], frame.shape[1], 3)


def test_deactivating_combined_drops_frame(setup):
    queue, controller = setup
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.NONE, True))
    queue.push(ActivateCombinedFilter(True))
    controller.process_events()
    queue.push(ActivateCombinedFilter(False))
    controller.process_events()
    assert published(controller).combined is None


def test_disabling_filter_removes_it_from_combined(setup):
    queue, controller = setup
    queue.push(ChangeActiveFilters(FilterType.GRAYSCALE, True))
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.GRAYSCALE, True))
    queue.push(ActivateCombinedFilter(True))
    controller.process_events()
    queue.push(ChangeActiveFilters(FilterType.GRAYSCALE, False))
    controller.process_events()
    assert controller.combined_filters[FilterType.GRAYSCALE] is False
    assert controller.combined_count == 0
    assert published(controller).combined is None


def test_combined_slot_of_inactive_filter_is_blank(setup):
    queue, controller = setup
    frame = make_frame(9)
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.NONE, True))
    queue.push(ChangeActiveFiltersOnCombinedFilter(FilterType.SOBEL, True))
    queue.push(ActivateCombinedFilter(True))
    controller.process_frame(frame)
    combined = published(controller).combined
    width = frame.shape[1]
    np.testing.assert_array_equal(combined[:, :width], flip_horizontal(frame))
    assert not combined[:, width:].any()


def test_failed_first_read_prevents_start():
    queue = ViewEventQueue()
    controller = WebcamController(queue.pop, FakeCapture([]))
    assert controller.can_start is False
    controller.start()
    assert controller.running is False


def test_thread_processes_frames_until_capture_fails():
    queue = ViewEventQueue()
    frames = [make_frame(0), make_frame(1), make_frame(2)]
    last = frames[-1].copy()
    controller = WebcamController(queue.pop, FakeCapture(frames))
    queue.push(ChangeActiveFilters(FilterType.NONE, True))
    controller.start()
    controller._thread.join(timeout=5)
    controller.stop()
    mats = published(controller)
    assert controller.running is False
    np.testing.assert_array_equal(mats.filtered[FilterType.NONE], flip_horizontal(last))