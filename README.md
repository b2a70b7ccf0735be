# camfilters

camfilters opens a window that shows a live camera feed through a choice of filters.
Each frame is mirrored horizontally before it is filtered. The filters are:

- **None**: the mirrored camera frame as it is
- **Grayscale**: the frame turned to luma, spread back over three equal channels
- **Sobel**: the saturated horizontal and vertical Sobel responses added together, per channel

A side panel on the left has one checkbox per filter. Each filter you switch on gets its
own view to the right of the panel. When there is more than one view, scroll sideways with the
mouse wheel. Once a filter is on, an "Add" checkbox next to it puts it into the
**combined** view. That view places the chosen filtered frames next to each other in one
wide image, shown in the lower half of the window. It appears only while the "Combine
Filters" checkbox is ticked. The panel also shows the frame time and frame rate, and a
"gain" slider that runs from 0 to 2.

## Installation

```
pip install .
```

This needs numpy and pygame. Use `pip install .[test]` to get pytest as well.

## Running

```
camfilters [--device DEVICE] [--width WIDTH] [--height HEIGHT]
```

- `--device`: camera index or device name as pygame lists it (default `0`, the first camera)
- `--width`, `--height`: the capture size asked of the camera (default 1280x720)

If the camera cannot be opened, the command prints `Error: ...` to standard error and
exits with status 1. Close the window to quit.

## Using the pieces from Python

The filters in `camfilters.filters` work on `numpy` arrays of shape
`(height, width, 3)` with dtype `uint8`. Anything else raises `TypeError` or
`ValueError`:

```python
import numpy as np
from camfilters.filters import FilterType, flip_horizontal, to_grayscale_rgb, sobel, combine_frames

frame = np.zeros((720, 1280, 3), dtype=np.uint8)
mirrored = flip_horizontal(frame)
wide = combine_frames([mirrored, to_grayscale_rgb(mirrored), sobel(mirrored)])
assert wide.shape == (720, 3 * 1280, 3)
print(FilterType.SOBEL.label)  # "Sobel"
```

`combine_frames` needs at least one frame, and all frames must have the same shape.

The other modules are:

- `camfilters.events`: the frozen event dataclasses `ActivateCombinedFilter(active=...)`,
  `ChangeActiveFilters(filter_type=..., is_active=...)` and
  `ChangeActiveFiltersOnCombinedFilter(filter_type=..., is_active=...)`, each tagged
  with a `ViewEventType`. The bases `ViewEvent` and `ChangeFilterEvent` cannot be created
  themselves.
- `camfilters.event_queue`: `ViewEventQueue`, a thread-safe FIFO with `push`, `pop`
  (which returns `None` when empty) and `len()`.
- `camfilters.mats`: `WebcamMats`, which holds the latest frame per filter, the combined
  frame and a count of the frames set. `copy_to` copies these into another instance.
- `camfilters.capture`: `CameraCapture(device, width, height)`, a `pygame.camera` source.
  Its `read()` returns RGB frames. It has `close()` and works as a context manager.
  Failures raise `CaptureError`.
- `camfilters.controller`: `WebcamController(event_source, capture)`. It reads frames on
  a background thread (`start()`, `stop()`) and applies pending events. It filters each
  frame with `process_frame(frame)` and publishes the results, which `get_mats(target)`
  copies into a `WebcamMats`. It can be driven by hand with any object that has a
  `read()` method.
- `camfilters.texture`: `ImageTexture`, which turns a frame into a pygame surface.
- `camfilters.view`: `WebcamView(capture)` with `run()`, and `main(argv=None)`, the
  entry point of the `camfilters` command.

## What it does not do

- The gain slider only sets `WebcamView.gain` and shows it. No filter uses it.
- Frames are only shown. Nothing is recorded or saved to disk.

## Tests

```
pytest
```