"""Output formatters for validation runs."""

from .base_formatter import OutputFormatter
from .console_formatter import ConsoleFormatter
from .json_formatter import JSONFormatter
from .sarif_formatter import SARIFFormatter
from .formatter_factory import FormatterFactory

__all__ = [
    "OutputFormatter",
    "ConsoleFormatter",
    "JSONFormatter",
    "SARIFFormatter",
    "FormatterFactory",
]
