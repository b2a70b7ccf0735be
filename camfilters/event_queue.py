"""Thread-safe FIFO of view events."""

from __future__ import annotations

import threading
from collections import deque

from camfilters.events import ViewEvent

__all__ = ["ViewEventQueue"]


class ViewEventQueue:
    """First-in first-out queue shared by the view and the capture thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: deque[ViewEvent] = deque()

    def push(self, event: ViewEvent) -> None:
        """Append an event at the back."""
        with self._lock:
            self._events.append(event)

    def pop(self) -> ViewEvent | None:
        """Remove and return the oldest event, or None when empty."""
        with self._lock:
            return self._events.popleft() if self._events else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)