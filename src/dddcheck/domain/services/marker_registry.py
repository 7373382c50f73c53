"""Registry of marker definitions."""

from typing import Dict, Iterable, List

from ..exceptions import UnknownMarkerKindError
from ..value_objects.marker_definition import MarkerDefinition, MarkerKind


DDDGO_MODULE = "github.com/nobuenhombre/dddgo"
_OBJECTS = f"{DDDGO_MODULE}/pkg/layers/infrastructure/interface-adapters/application"

BUILTIN_MARKERS = (
    MarkerDefinition(
        kind=MarkerKind.VALUE_OBJECT,
        package_path=f"{_OBJECTS}/domain/objects/value-object/valueobject",
        type_name="ValueObject",
    ),
    MarkerDefinition(
        kind=MarkerKind.ENTITY,
        package_path=f"{_OBJECTS}/domain/objects/entity",
        type_name="Entity",
    ),
    MarkerDefinition(
        kind=MarkerKind.AGGREGATE,
        package_path=f"{_OBJECTS}/domain/objects/aggregate",
        type_name="Aggregate",
    ),
    # Same package as the aggregate marker, checked as its own kind
    MarkerDefinition(
        kind=MarkerKind.AGGREGATE_ROOT,
        package_path=f"{_OBJECTS}/domain/objects/aggregate",
        type_name="AggregateRoot",
    ),
    MarkerDefinition(
        kind=MarkerKind.COMMAND,
        package_path=f"{_OBJECTS}/objects/commands",
        type_name="Command",
    ),
)


def builtin_markers() -> List[MarkerDefinition]:
    """Get the built-in marker definitions."""
    return list(BUILTIN_MARKERS)


class MarkerRegistry:
    """
    Registry for marker definitions.

    Starts from the built-in table; configured definitions replace
    built-ins of the same kind or add new kinds.
    """

    def __init__(self, markers: Iterable[MarkerDefinition] = BUILTIN_MARKERS):
        """
        Initialize registry.

        Args:
            markers: Initial definitions
        """
        self._markers: Dict[str, MarkerDefinition] = {}
        for marker in markers:
            self.register(marker)

    def register(self, marker: MarkerDefinition) -> None:
        """Register a definition, replacing any existing one of the same kind."""
        self._markers[marker.kind] = marker

    def get_marker(self, kind: str) -> MarkerDefinition:
        """
        Get definition by kind.

        Args:
            kind: Kind name (e.g. "value_object"); dashes are accepted

        Returns:
            MarkerDefinition

        Raises:
            UnknownMarkerKindError: If the kind is not registered
        """
        normalized = kind.strip().lower().replace("-", "_")
        marker = self._markers.get(normalized)
        if marker is None:
            raise UnknownMarkerKindError(
                f"Unknown marker kind: {kind}. "
                f"Available kinds: {', '.join(self.get_kinds())}"
            )
        return marker

    def select(self, kinds: Iterable[str] = ()) -> List[MarkerDefinition]:
        """Get definitions for the given kinds, or all of them when none are given."""
        kinds = list(kinds)
        if not kinds:
            return self.get_all_markers()
        return [self.get_marker(kind) for kind in kinds]

    def get_all_markers(self) -> List[MarkerDefinition]:
        return list(self._markers.values())

    def get_kinds(self) -> List[str]:
        return list(self._markers.keys())
