"""Live camera viewer with mirrored, grayscale, Sobel and combined filter views."""

__version__ = "0.1.0"
__all__ = ["__version__"]