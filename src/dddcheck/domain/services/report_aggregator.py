"""Report aggregation domain service."""

from typing import AbstractSet, Mapping, Optional

from ..models.syntax import QualifiedTypeName
from ..models.validation import ConstructorKey, ConstructorRecord, ValidationReport, Violation
from ..value_objects.marker_definition import MarkerDefinition


def aggregate_report(
    marker: MarkerDefinition,
    types: AbstractSet[QualifiedTypeName],
    constructors: Mapping[ConstructorKey, ConstructorRecord],
    violations: AbstractSet[Violation],
) -> Optional[ValidationReport]:
    """
    Combine phase results into a report.

    Args:
        marker: Marker kind validated
        types: Marked types
        constructors: Constructor records
        violations: Violations

    Returns:
        ValidationReport, or None when the tree has no marked types.
        None means "nothing to validate", never "validated, zero findings".
    """
    if not types:
        return None

    return ValidationReport(
        marker=marker,
        types=frozenset(types),
        constructors=dict(constructors),
        violations=frozenset(violations),
    )
