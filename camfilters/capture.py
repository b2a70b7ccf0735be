"""Camera frame source built on ``pygame.camera``."""

from __future__ import annotations

import numpy as np
import pygame
import pygame.camera

__all__ = ["CaptureError", "CameraCapture"]

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720


class CaptureError(RuntimeError):
    """Raised when the camera cannot be opened or a frame cannot be read."""


class CameraCapture:
    """An open camera that yields RGB frames of shape ``(height, width, 3)``."""

    def __init__(self, device: int | str = 0, width: int = DEFAULT_WIDTH,
                 height: int = DEFAULT_HEIGHT) -> None:
        self._camera = None
        try:
            pygame.camera.init()
        except (pygame.error, ImportError, OSError) as exc:
            raise CaptureError(f"Could not open camera: {exc}") from exc

        if isinstance(device, int):
            cameras = pygame.camera.list_cameras()
            if not 0 <= device < len(cameras):
                raise CaptureError(f"Could not open camera: no camera with index {device}")
            name = cameras[device]
        else:
            name = device

        try:
            camera = pygame.camera.Camera(name, (width, height), "RGB")
            camera.start()
        except (pygame.error, SystemError, ValueError, OSError) as exc:
            raise CaptureError(f"Could not open camera: {exc}") from exc

        self._camera = camera
        self.device = name
        self.width, self.height = camera.get_size()

    @property
    def is_open(self) -> bool:
        """Whether the camera is still running."""
        return self._camera is not None

    def read(self) -> np.ndarray:
        """Grab the next frame as a ``uint8`` array."""
        if self._camera is None:
            raise CaptureError("Could not capture frame: camera is closed")
        try:
            surface = self._camera.get_image()
        except (pygame.error, SystemError, OSError) as exc:
            raise CaptureError(f"Could not capture frame: {exc}") from exc
        if surface is None:
            raise CaptureError("Could not capture frame")
        frame = pygame.surfarray.array3d(surface).swapaxes(0, 1)
        if frame.size == 0:
            raise CaptureError("Could not capture frame")
        return np.ascontiguousarray(frame, dtype=np.uint8)

    def close(self) -> None:
        """Stop the camera; calling it again does nothing."""
        camera, self._camera = self._camera, None
        if camera is not None:
            camera.stop()

    def __enter__(self) -> CameraCapture:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()