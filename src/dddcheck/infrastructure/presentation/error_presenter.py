"""
ErrorPresenter - User-friendly error message generation.

Transforms exceptions into actionable messages.
Supports verbose mode for technical details.
"""

import traceback
from typing import Tuple, List

from ...domain.exceptions import (
    RootPathError,
    ProjectRootNotFoundError,
    UnknownMarkerKindError,
    ConfigurationError,
    ParserUnavailableError,
    ValidationCancelledError,
)


class ErrorPresenter:
    """
    Presents errors to users with helpful messages and actions.

    Provides two modes:
    - Normal: User-friendly message with actionable suggestions
    - Verbose: Technical details including stack trace
    """

    @staticmethod
    def present(error: BaseException, verbose: bool = False) -> str:
        """
        Present error with user-friendly message.

        Args:
            error: Exception to present
            verbose: Show technical details (stack trace, error type)

        Returns:
            Formatted error message
        """
        message, suggestions = ErrorPresenter._get_friendly_message(error)

        if verbose:
            return ErrorPresenter._format_verbose(error, message, suggestions)
        return ErrorPresenter._format_friendly(message, suggestions)

    @staticmethod
    def _get_friendly_message(error: BaseException) -> Tuple[str, List[str]]:
        """
        Get friendly message and actionable suggestions for error.

        Args:
            error: Exception to analyze

        Returns:
            Tuple of (message, suggestions)
        """
        error_str = str(error)

        if isinstance(error, RootPathError):
            return (
                "Cannot read the source tree",
                [
                    error_str,
                    "Check the path points to a directory: `ls -la <path>`",
                    "Ensure you have read access to the directory",
                ]
            )

        if isinstance(error, ProjectRootNotFoundError):
            return (
                "Could not find the project root (no go.mod above the working directory)",
                [
                    "Pass the directory to validate explicitly: `dddcheck validate <path>`",
                    "Run the command from inside a Go module",
                    "Set scan.project_marker if your project uses a different marker file",
                ]
            )

        if isinstance(error, UnknownMarkerKindError):
            return (
                error_str,
                [
                    "List configured kinds: `dddcheck kinds`",
                    "Declare custom kinds under `markers:` in dddcheck.yaml",
                ]
            )

        if isinstance(error, ConfigurationError):
            return (
                "Invalid configuration",
                [
                    error_str,
                    "Show the effective configuration: `dddcheck config --show`",
                    "Create a fresh default file: `dddcheck config --init --path dddcheck.yaml`",
                ]
            )

        if isinstance(error, ParserUnavailableError):
            return (
                "The Go grammar could not be loaded",
                [
                    "Reinstall the parser package: `pip install --force-reinstall tree-sitter-language-pack`",
                    "Check that tree-sitter and tree-sitter-language-pack versions match",
                ]
            )

        if isinstance(error, (ValidationCancelledError, KeyboardInterrupt)):
            return (
                "Operation cancelled by user",
                []
            )

        if isinstance(error, FileNotFoundError):
            file_path = error_str.replace("Configuration file not found: ", "").replace(
                "[Errno 2] No such file or directory: ", ""
            ).strip("'\"")
            return (
                f"File not found: {file_path}",
                [
                    "Check the file path is correct",
                    "Check for typos in the path",
                ]
            )

        if isinstance(error, PermissionError):
            path = error_str.replace("[Errno 13] Permission denied: ", "").strip("'\"")
            return (
                f"Permission denied: {path}",
                [
                    f"Check file permissions: `ls -la {path}`",
                    "Ensure you have read access to the file/directory",
                ]
            )

        error_type = type(error).__name__
        error_msg = error_str if error_str else "No details available"

        return (
            f"An error occurred: {error_type}",
            [
                f"Error details: {error_msg}",
                "Run with --verbose for more information",
            ]
        )

    @staticmethod
    def _format_friendly(message: str, suggestions: List[str]) -> str:
        """
        Format user-friendly error message.

        Args:
            message: Main error message
            suggestions: List of actionable suggestions

        Returns:
            Formatted string
        """
        output = [f"Error: {message}"]

        if suggestions:
            output.append("")
            output.append("Suggestions:")
            for suggestion in suggestions:
                output.append(f"  - {suggestion}")

        return "\n".join(output)

    @staticmethod
    def _format_verbose(error: BaseException, message: str, suggestions: List[str]) -> str:
        """
        Format verbose error message with technical details.

        Args:
            error: Original exception
            message: User-friendly message
            suggestions: Actionable suggestions

        Returns:
            Formatted string with full details
        """
        output = [ErrorPresenter._format_friendly(message, suggestions)]

        output.append("")
        output.append("Technical Details:")
        output.append(f"  Error Type: {type(error).__name__}")
        output.append(f"  Error Message: {str(error)}")

        if error.__cause__:
            output.append(f"  Caused by: {type(error.__cause__).__name__}: {str(error.__cause__)}")

        output.append("")
        output.append("Traceback:")
        tb_lines = traceback.format_exception(type(error), error, error.__traceback__)
        for line in tb_lines:
            for sub_line in line.rstrip().split('\n'):
                output.append(f"  {sub_line}")

        return "\n".join(output)
