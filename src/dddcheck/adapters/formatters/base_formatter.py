"""Base formatter interface."""

from abc import ABC, abstractmethod
from ...domain.models.validation import ValidationRun, Violation


class OutputFormatter(ABC):
    """
    Base class for output formatters.

    Formatters convert validation runs into console, JSON or SARIF output.
    All ordering shown to users is imposed here.
    """

    @abstractmethod
    def format_run(self, run: ValidationRun) -> str:
        """
        Format a complete validation run.

        Args:
            run: ValidationRun to format

        Returns:
            Formatted string
        """
        pass

    @abstractmethod
    def format_violation(self, violation: Violation) -> str:
        """
        Format a single violation.

        Args:
            violation: Violation to format

        Returns:
            Formatted string
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """
        Get file extension for this format.

        Returns:
            File extension (e.g., ".json", ".sarif")
        """
        pass
