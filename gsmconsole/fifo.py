"""A simple first-in, first-out queue."""

from __future__ import annotations

from collections import deque
from typing import Any


class Queue:
    """FIFO queue whose read operations return ``None`` when empty."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def enqueue(self, value: Any) -> None:
        """Append ``value`` at the back."""
        self._items.append(value)

    def peek(self) -> Any:
        """Return the front value without removing it, or ``None``."""
        return self._items[0] if self._items else None

    def front(self) -> Any:
        """Return the front value without removing it, or ``None``."""
        return self.peek()

    def dequeue(self) -> Any:
        """Remove and return the front value, or ``None`` when empty."""
        return self._items.popleft() if self._items else None

    def size(self) -> int:
        """Return the number of queued values."""
        return len(self._items)

    def empty(self) -> bool:
        """Return whether the queue holds no values."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)