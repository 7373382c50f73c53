"""
Marker definition value objects.

A marker is a sentinel struct type that carries no data. Embedding it in a
struct as a blank-named field tags that struct with a domain-object category:

    type Money struct {
        amount int
        _      valueobject.ValueObject
    }

Each category is described by one MarkerDefinition. The detection engine is
the same for every category; only the definition changes.
"""

from dataclasses import dataclass
from enum import Enum


class MarkerKind(str, Enum):
    """Built-in domain-object categories."""

    VALUE_OBJECT = "value_object"
    ENTITY = "entity"
    AGGREGATE = "aggregate"
    AGGREGATE_ROOT = "aggregate_root"
    COMMAND = "command"


@dataclass(frozen=True)
class MarkerDefinition:
    """
    Description of one marker kind.

    Two definitions may share a package (aggregate and aggregate root do);
    they are still evaluated independently.
    """

    kind: str
    """Kind name used to select the definition and to label violations."""

    package_path: str
    """Import path of the package declaring the marker type."""

    type_name: str
    """Name of the marker type inside that package."""

    field_name: str = "_"
    """Name the marker field must carry in a tagged struct."""

    def __post_init__(self):
        """Normalize enum kinds to their string value."""
        if isinstance(self.kind, MarkerKind):
            object.__setattr__(self, "kind", self.kind.value)

    @property
    def default_alias(self) -> str:
        """Identifier a file uses for the package when imported without a name."""
        return self.package_path.rstrip("/").split("/")[-1]

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``ValueObject``."""
        return self.type_name
