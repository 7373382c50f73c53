"""
Logging context management for dddcheck.

Correlation fields (run_id, marker_kind, phase) live in a context variable
and are merged into every record logged through DddCheckLogger. Worker
threads see the fields of the phase that submitted them because the
fan-out runs each task in a copy of the submitting context.

Example:
    >>> with logging_context(run_id="run-123", marker_kind="entity"):
    ...     logger.info("Detecting markers")  # carries both fields
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict

_fields: ContextVar[Dict[str, Any]] = ContextVar("dddcheck_log_context", default={})


class LogContext:
    """
    Accessors for the current logging context.

    The stored mapping is never mutated in place; every change installs a
    new dict, so a copied context keeps the fields it was copied with.
    """

    @classmethod
    def get_context(cls) -> Dict[str, Any]:
        """Get a copy of the current context fields."""
        return dict(_fields.get())

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        return _fields.get().get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        cls.update({key: value})

    @classmethod
    def update(cls, fields: Dict[str, Any]) -> None:
        _fields.set({**_fields.get(), **fields})

    @classmethod
    def remove(cls, *keys: str) -> None:
        current = _fields.get()
        _fields.set({k: v for k, v in current.items() if k not in keys})

    @classmethod
    def clear(cls) -> None:
        _fields.set({})


@contextmanager
def logging_context(**fields):
    """
    Set context fields for the duration of a block.

    On exit the context is restored to exactly what it was on entry,
    including values that the block overrode.

    Nested contexts:
        >>> with logging_context(run_id="outer"):
        ...     with logging_context(phase="detect"):
        ...         pass  # run_id and phase
        ...     # only run_id
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)
