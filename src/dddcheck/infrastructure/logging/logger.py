"""
dddcheck Logging Infrastructure.

Provides centralized logging with:
- Console output: human-readable, to stderr
- Optional file output: JSON lines with daily rotation
- Correlation fields (run_id, marker_kind, phase) from LogContext
- Singleton pattern for global access

Design Decisions:
- Use Python's standard logging module
- Console stays quiet by default (WARNING) so reports own stdout
- File gets everything at DEBUG for later analysis
"""

import json
import logging
import logging.handlers
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Any, Dict

from .context import LogContext


_RESERVED_ATTRS = frozenset([
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "message", "asctime",
])


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per record.

    Includes standard fields, any extra fields (run_id, marker_kind,
    file counts...) and exception info if present.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string representation of log record
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Format: YYYY-MM-DD HH:MM:SS - LEVEL - message
    """

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


class ContextFilter(logging.Filter):
    """
    Copy LogContext fields onto records from plain module loggers.

    Fields already present on the record (explicit extra) are kept.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class DddCheckLogger:
    """
    Centralized logging for dddcheck.

    Singleton: the first ``get_instance`` call configures handlers,
    later calls return the same instance. ``reset`` drops the instance so
    the next call reconfigures.

    Example:
        >>> logger = DddCheckLogger.get_instance(level="DEBUG")
        >>> logger.info("Parsed tree", extra={"files": 12})
    """

    _instance: Optional['DddCheckLogger'] = None
    _lock: threading.Lock = threading.Lock()

    def __init__(
        self,
        level: str = "WARNING",
        log_file: Optional[Path] = None,
        console: bool = True,
        rotation: str = "daily",
        retention_days: int = 30,
    ):
        """
        Initialize dddcheck logger.

        Args:
            level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to JSON log file (optional)
            console: Enable console output
            rotation: Log rotation strategy ("daily" or "none")
            retention_days: Days to retain rotated logs
        """
        self.logger = logging.getLogger("dddcheck")
        self.logger.setLevel(logging.DEBUG if log_file else getattr(logging, level.upper()))
        self.logger.propagate = False
        self.logger.handlers.clear()

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(HumanReadableFormatter())
            console_handler.addFilter(ContextFilter())
            self.logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            if rotation == "daily":
                file_handler = logging.handlers.TimedRotatingFileHandler(
                    filename=str(log_file),
                    when='midnight',
                    interval=1,
                    backupCount=retention_days,
                    encoding='utf-8'
                )
            else:
                file_handler = logging.FileHandler(str(log_file), encoding='utf-8')

            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(JSONFormatter())
            file_handler.addFilter(ContextFilter())
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    @classmethod
    def get_instance(
        cls,
        level: str = "WARNING",
        log_file: Optional[Path] = None,
        console: bool = True,
        rotation: str = "daily",
        retention_days: int = 30,
    ) -> 'DddCheckLogger':
        """
        Get singleton instance of DddCheckLogger.

        Args:
            level: Console log level
            log_file: Path to log file
            console: Enable console output
            rotation: Rotation strategy
            retention_days: Days to retain

        Returns:
            Singleton DddCheckLogger instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(
                        level=level,
                        log_file=log_file,
                        console=console,
                        rotation=rotation,
                        retention_days=retention_days,
                    )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton and close its handlers."""
        with cls._lock:
            if cls._instance is not None:
                for handler in list(cls._instance.logger.handlers):
                    handler.close()
                cls._instance.logger.handlers.clear()
            cls._instance = None

    def _merge_context(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge LogContext into kwargs['extra'].

        Explicit extra fields take precedence over context fields.
        """
        context = LogContext.get_context()

        if context:
            extra = kwargs.get('extra', {})
            kwargs = kwargs.copy()
            kwargs['extra'] = {**context, **extra}

        return kwargs

    def debug(self, message: str, **kwargs):
        """Log debug message with automatic context injection."""
        self.logger.debug(message, **self._merge_context(kwargs))

    def info(self, message: str, **kwargs):
        """Log info message with automatic context injection."""
        self.logger.info(message, **self._merge_context(kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message with automatic context injection."""
        self.logger.warning(message, **self._merge_context(kwargs))

    def error(self, message: str, **kwargs):
        """Log error message with automatic context injection."""
        self.logger.error(message, **self._merge_context(kwargs))

    def critical(self, message: str, **kwargs):
        """Log critical message with automatic context injection."""
        self.logger.critical(message, **self._merge_context(kwargs))


def get_logger(name: str) -> logging.Logger:
    """
    Get a child of the ``dddcheck`` logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger whose records reach the handlers DddCheckLogger installed
    """
    if name == "dddcheck" or name.startswith("dddcheck."):
        return logging.getLogger(name)
    return logging.getLogger(f"dddcheck.{name}")
