"""The set of frames the controller publishes to the view."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from camfilters.filters import FilterType

__all__ = ["WebcamMats"]


def _empty_filtered() -> dict[FilterType, np.ndarray | None]:
    return {filter_type: None for filter_type in FilterType}


@dataclass
class WebcamMats:
    """Latest frame per filter, the combined frame, and how many frames are set."""

    active_count: int = 0
    filtered: dict[FilterType, np.ndarray | None] = field(default_factory=_empty_filtered)
    combined: np.ndarray | None = None

    def copy_to(self, other: WebcamMats) -> None:
        """Make ``other`` refer to the same frames as this set."""
        other.active_count = self.active_count
        for filter_type, frame in self.filtered.items():
            if filter_type not in other.filtered:
                raise KeyError(filter_type)
            other.filtered[filter_type] = frame
        other.combined = self.combined