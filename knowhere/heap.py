"""Bounded max-heap keeping the k smallest (distance, id) pairs."""

from __future__ import annotations

import heapq
from typing import Any


class _Entry:
    __slots__ = ("pair",)

    def __init__(self, dis: Any, id_: Any) -> None:
        self.pair = (dis, id_)

    def __lt__(self, other: "_Entry") -> bool:
        return self.pair > other.pair


class ResultMaxHeap:
    """Holds at most ``k`` results; pops the largest pair first."""

    def __init__(self, k: int) -> None:
        self.k = k
        self._heap: list[_Entry] = []

    def push(self, dis: Any, id_: Any) -> None:
        """Offer a result; it is kept if the heap has room or it beats the worst."""
        if len(self._heap) < self.k:
            heapq.heappush(self._heap, _Entry(dis, id_))
            return
        if self._heap and dis < self._heap[0].pair[0]:
            heapq.heapreplace(self._heap, _Entry(dis, id_))

    def pop(self) -> tuple[Any, Any] | None:
        """Remove and return the largest pair, or ``None`` when empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap).pair

    def __len__(self) -> int:
        return len(self._heap)