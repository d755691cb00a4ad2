"""Sequential ID generator for order and trade tables.

Each table (buy orders, sell orders, trades) has its own counter; the first
committed record gets id 1. ``peek()`` lets a caller stage a record under the
id it will receive, and ``commit()`` consumes it only once the operation has
succeeded, so failed operations never leave gaps.
"""

import threading


class SequentialIdGenerator:
    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"start must be >= 1, got {start}")
        self._next = start
        self._lock = threading.Lock()

    def peek(self) -> int:
        with self._lock:
            return self._next

    def commit(self, issued: int) -> None:
        """Consume ``issued``; it must be the id ``peek()`` returned."""
        with self._lock:
            if issued != self._next:
                raise ValueError(f"id {issued} is not the next id ({self._next})")
            self._next += 1

    @property
    def last_issued(self) -> int:
        return self._next - 1
