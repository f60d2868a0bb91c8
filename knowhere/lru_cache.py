"""Thread-safe least-recently-used cache and a vector hash to key it with."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Generic, Hashable, Sequence, TypeVar

import numpy as np

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MASK64 = (1 << 64) - 1
_HASH_BASE = 13331


class LruCache(Generic[K, V]):
    """Keeps at most ``capacity`` entries, dropping the least recently used."""

    DEFAULT_SIZE = 10000

    def __init__(self, capacity: int = DEFAULT_SIZE) -> None:
        self.capacity = capacity
        self._items: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    def put(self, key: K, value: V) -> None:
        """Insert or replace ``key``, making it the most recent entry."""
        with self._lock:
            self._items[key] = value
            self._items.move_to_end(key)
            if len(self._items) > self.capacity:
                self._items.popitem(last=False)

    def get(self, key: K, default: Any = None) -> V | Any:
        """Return the value for ``key`` and mark it recent, or ``default``."""
        with self._lock:
            if key not in self._items:
                return default
            self._items.move_to_end(key)
            return self._items[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def hash_vec(x: Sequence[float] | np.ndarray) -> int:
    """64-bit polynomial hash over the float32 bit patterns of ``x``."""
    bits = np.ascontiguousarray(x, dtype=np.float32).reshape(-1).view(np.uint32)
    h = 0
    for word in bits.tolist():
        h = (h * _HASH_BASE + word) & _MASK64
    return h