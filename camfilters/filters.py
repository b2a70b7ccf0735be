"""Filter kinds and the image operations that produce filtered frames.

Frames are ``numpy`` arrays of shape ``(height, width, 3)`` and dtype
``uint8``.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np

__all__ = [
    "FilterType",
    "flip_horizontal",
    "to_grayscale_rgb",
    "sobel",
    "combine_frames",
]


class FilterType(Enum):
    """The filters a frame can be shown with."""

    NONE = "None"
    GRAYSCALE = "Grayscale"
    SOBEL = "Sobel"

    @property
    def label(self) -> str:
        """Name shown to the user."""
        return self.value


_GRAY_WEIGHTS = np.array([0.299, 0.587, 0.114])

# Correlation masks: horizontal edges and vertical edges.
_SOBEL_HORIZ = ((1, 2, 1), (0, 0, 0), (-1, -2, -1))
_SOBEL_VERT = ((-1, 0, 1), (-2, 0, 2), (-1, 0, 1))


def _check_frame(frame: np.ndarray) -> None:
    if not isinstance(frame, np.ndarray):
        raise TypeError("frame must be a numpy array")
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"frame must have shape (height, width, 3), got {frame.shape}")
    if frame.dtype != np.uint8:
        raise ValueError(f"frame must have dtype uint8, got {frame.dtype}")


def flip_horizontal(frame: np.ndarray) -> np.ndarray:
    """Return the frame mirrored around its vertical axis."""
    _check_frame(frame)
    return np.ascontiguousarray(frame[:, ::-1])


def to_grayscale_rgb(frame: np.ndarray) -> np.ndarray:
    """Convert to luma and spread it back over three equal channels."""
    _check_frame(frame)
    gray = frame.astype(np.float64) @ _GRAY_WEIGHTS
    gray = np.clip(np.rint(gray), 0, 255).astype(np.uint8)
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)


def _correlate_saturated(padded: np.ndarray, mask, height: int, width: int) -> np.ndarray:
    out = np.zeros((height, width, padded.shape[2]), dtype=np.int32)
    for dy, row in enumerate(mask):
        for dx, weight in enumerate(row):
            if weight:
                out += weight * padded[dy:dy + height, dx:dx + width]
    return np.clip(out, 0, 255)


def sobel(frame: np.ndarray) -> np.ndarray:
    """Sum of the saturated horizontal and vertical Sobel responses, per channel."""
    _check_frame(frame)
    height, width = frame.shape[:2]
    padded = np.pad(frame.astype(np.int32), ((1, 1), (1, 1), (0, 0)), mode="edge")
    grad_x = _correlate_saturated(padded, _SOBEL_HORIZ, height, width)
    grad_y = _correlate_saturated(padded, _SOBEL_VERT, height, width)
    return np.clip(grad_x + grad_y, 0, 255).astype(np.uint8)


def combine_frames(frames: Sequence[np.ndarray]) -> np.ndarray:
    """Place frames of equal size side by side, left to right."""
    frames = list(frames)
    if not frames:
        raise ValueError("at least one frame is required")
    for frame in frames:
        _check_frame(frame)
    shape = frames[0].shape
    if any(frame.shape != shape for frame in frames):
        raise ValueError("all frames must have the same shape")
    return np.hstack(frames)