"""Logging helpers: module logger, thread naming and message prefixes."""

from __future__ import annotations

import logging
import threading

MODULE_NAME = "KNOWHERE"
_MAX_THREAD_NAME = 15
_UNNAMED = "unamed"


def set_thread_name(name: str) -> None:
    """Name the current thread."""
    threading.current_thread().name = name


def get_thread_name() -> str:
    """Return the current thread's name, limited as the system limits it."""
    name = threading.current_thread().name
    if not name:
        return _UNNAMED
    return name[:_MAX_THREAD_NAME]


def module_prefix(function: str) -> str:
    """Prefix placed in front of log lines emitted from ``function``."""
    return f"[{MODULE_NAME}][{function}][{get_thread_name()}] "


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return logging.getLogger("knowhere")