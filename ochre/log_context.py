"""Simple assembly log context using contextvars.

Provides automatic injection of assembly-specific fields (entity uuid, page
slug, element title) into log records via ContextFilter.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_context: ContextVar[dict[str, Any]] = ContextVar("ochre_context", default={})


def get_context() -> dict[str, Any]:
    """Get current assembly context as a dict."""
    return _context.get().copy()


@contextmanager
def log_context(**kwargs):
    """Add fields to log context for duration of block.

    Composes with outer contexts - inner blocks inherit and can override.

    Example:
        with log_context(website="abc"):
            with log_context(page="about"):
                logger.info("Building")  # Has both fields
    """
    previous = _context.get()
    _context.set({**previous, **kwargs})
    try:
        yield
    finally:
        _context.set(previous)


class ContextFilter(logging.Filter):
    """Adds assembly context to Python LogRecords.

    Each field is set on the record. ``record.context`` also carries them all as
    " [key=value ...]", or an empty string outside any context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_context()
        for key, value in context.items():
            setattr(record, key, value)
        record.context = (
            " [" + " ".join(f"{key}={value}" for key, value in context.items()) + "]"
            if context
            else ""
        )
        return True
