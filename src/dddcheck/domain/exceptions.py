"""Domain exceptions for dddcheck."""


class DddCheckError(Exception):
    """Base exception for dddcheck errors."""
    pass


class RootPathError(DddCheckError):
    """Raised when the root path cannot be enumerated."""
    pass


class ProjectRootNotFoundError(DddCheckError):
    """Raised when no project marker file is found walking upward."""
    pass


class UnknownMarkerKindError(DddCheckError):
    """Raised when a marker kind name is not configured."""
    pass


class ConfigurationError(DddCheckError):
    """Raised when configuration is invalid."""
    pass


class ParserUnavailableError(DddCheckError):
    """Raised when the Go grammar cannot be loaded."""
    pass


class SourceParseError(DddCheckError):
    """Raised when a single source file cannot be parsed."""
    pass


class ValidationCancelledError(DddCheckError):
    """Raised between phases when the caller cancelled a validation run."""
    pass
