"""Displayable image built from a frame."""

from __future__ import annotations

import numpy as np
import pygame

__all__ = ["ImageTexture"]


class ImageTexture:
    """Holds a frame as a drawable surface until it is released."""

    def __init__(self) -> None:
        self._surface: pygame.Surface | None = None
        self._width = 0
        self._height = 0

    @property
    def bound(self) -> bool:
        """Whether an image is currently held."""
        return self._surface is not None

    @property
    def surface(self) -> pygame.Surface | None:
        """The drawable surface, or None once released."""
        return self._surface

    def set_image(self, frame: np.ndarray) -> None:
        """Take an RGB ``uint8`` frame of shape ``(height, width, 3)``."""
        if not isinstance(frame, np.ndarray):
            raise TypeError("frame must be a numpy array")
        if frame.ndim != 3 or frame.shape[2] != 3:
            raise ValueError(f"frame must have shape (height, width, 3), got {frame.shape}")
        if frame.dtype != np.uint8:
            raise ValueError(f"frame must have dtype uint8, got {frame.dtype}")
        self.release()
        self._height, self._width = frame.shape[:2]
        self._surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))

    def release(self) -> None:
        """Drop the held image; calling it again does nothing."""
        self._surface = None

    def size(self) -> tuple[int, int]:
        """Width and height of the last image set."""
        return (self._width, self._height)

    def __enter__(self) -> ImageTexture:
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()