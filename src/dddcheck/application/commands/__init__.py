"""Command handlers."""

from .validate_markers import (
    ValidateMarkersCommand,
    ValidateMarkersHandler,
    create_handler,
    validate,
)

__all__ = [
    "ValidateMarkersCommand",
    "ValidateMarkersHandler",
    "create_handler",
    "validate",
]
