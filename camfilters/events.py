"""Events the view sends to the controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

from camfilters.filters import FilterType

__all__ = [
    "ViewEventType",
    "ViewEvent",
    "ActivateCombinedFilter",
    "ChangeFilterEvent",
    "ChangeActiveFilters",
    "ChangeActiveFiltersOnCombinedFilter",
]


class ViewEventType(Enum):
    """Kinds of view events."""

    ACTIVATE_COMBINED_FILTER = auto()
    CHANGE_ACTIVE_FILTERS = auto()
    CHANGE_ACTIVE_FILTERS_ON_COMBINED_FILTER = auto()
    NONE = auto()


@dataclass(frozen=True)
class ViewEvent:
    """Base of all view events; only its subclasses can be created."""

    event_type: ClassVar[ViewEventType] = ViewEventType.NONE

    def __new__(cls, *args, **kwargs):
        if cls in _ABSTRACT_EVENTS:
            raise TypeError(f"{cls.__name__} cannot be instantiated directly")
        return super().__new__(cls)


@dataclass(frozen=True)
class ActivateCombinedFilter(ViewEvent):
    """Turns the combined view on or off."""

    event_type: ClassVar[ViewEventType] = ViewEventType.ACTIVATE_COMBINED_FILTER

    active: bool = False


@dataclass(frozen=True)
class ChangeFilterEvent(ViewEvent):
    """Base of events that switch a single filter on or off."""

    filter_type: FilterType = FilterType.NONE
    is_active: bool = False


@dataclass(frozen=True)
class ChangeActiveFilters(ChangeFilterEvent):
    """Enables or disables a filter."""

    event_type: ClassVar[ViewEventType] = ViewEventType.CHANGE_ACTIVE_FILTERS


@dataclass(frozen=True)
class ChangeActiveFiltersOnCombinedFilter(ChangeFilterEvent):
    """Adds a filter to, or removes it from, the combined view."""

    event_type: ClassVar[ViewEventType] = (
        ViewEventType.CHANGE_ACTIVE_FILTERS_ON_COMBINED_FILTER
    )


_ABSTRACT_EVENTS = (ViewEvent, ChangeFilterEvent)