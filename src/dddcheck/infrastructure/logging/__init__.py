"""Logging infrastructure for dddcheck."""

from .logger import DddCheckLogger, get_logger
from .context import LogContext, logging_context

__all__ = ["DddCheckLogger", "get_logger", "LogContext", "logging_context"]
