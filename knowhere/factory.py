"""Registry mapping index names to constructors."""

from __future__ import annotations

import threading
from typing import Any, Callable, ClassVar

from knowhere.errors import KnowhereError
from knowhere.log import get_logger, module_prefix

IndexCreator = Callable[[Any], Any]


class IndexFactory:
    """Process-wide registry of index constructors."""

    _registry: ClassVar[dict[str, IndexCreator]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()
    _instance: ClassVar["IndexFactory | None"] = None

    @classmethod
    def instance(cls) -> "IndexFactory":
        """Return the shared factory."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def register(self, name: str, func: IndexCreator) -> "IndexFactory":
        """Register ``func`` as the constructor for ``name``."""
        with self._lock:
            self._registry[name] = func
        return self

    def create(self, name: str, obj: Any = None) -> Any:
        """Build the index registered as ``name`` from ``obj``."""
        with self._lock:
            func = self._registry.get(name)
        if func is None:
            raise KnowhereError(f"index type {name} is not registered")
        get_logger().info(module_prefix("Create") + f"create knowhere index {name}")
        return func(obj)