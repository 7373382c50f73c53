"""Domain value objects."""

from .marker_definition import MarkerDefinition, MarkerKind

__all__ = ["MarkerDefinition", "MarkerKind"]
