"""Status codes and exceptions raised across the package."""

from __future__ import annotations

import inspect
from enum import Enum, auto


class Status(Enum):
    """Outcome codes reported by index operations."""

    success = auto()
    invalid_args = auto()
    invalid_param_in_json = auto()
    invalid_value_in_json = auto()
    invalid_metric_type = auto()
    empty_index = auto()
    not_implemented = auto()
    malloc_error = auto()
    diskann_file_error = auto()
    diskann_inner_error = auto()


class KnowhereError(Exception):
    """Base error of the package, carrying a formatted message."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    @classmethod
    def at(cls, msg: str, func_name: str, file: str, line: int) -> "KnowhereError":
        """Build an error whose message names the function, file and line."""
        filename = file.rsplit("/", 1)[-1]
        return cls(f"Error in {func_name} at {filename}:{line}: {msg}")

    def __str__(self) -> str:
        return self.msg


class StatusError(KnowhereError):
    """An error that carries a non-success ``Status``."""

    def __init__(self, status: Status, msg: str | None = None) -> None:
        super().__init__(msg if msg is not None else status.name)
        self.status = status


def throw_if_not(condition: bool, expression: str, message: str | None = None) -> None:
    """Raise ``KnowhereError`` naming the failed check when ``condition`` is false."""
    if condition:
        return
    text = f"Error: '{expression}' failed"
    if message is not None:
        text += f": {message}"
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is None:
        raise KnowhereError(text)
    raise KnowhereError.at(text, caller.f_code.co_name, caller.f_code.co_filename, caller.f_lineno)