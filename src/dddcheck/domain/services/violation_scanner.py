"""Zero-value violation scanning domain service."""

from concurrent.futures import Executor
from typing import AbstractSet, FrozenSet, Iterable, List, Mapping, Optional, Set

from ..models.syntax import GoSourceFile, QualifiedTypeName
from ..models.validation import (
    ConstructorKey,
    ConstructorRecord,
    Violation,
    ZeroValueOccurrence,
)
from ..value_objects.marker_definition import MarkerDefinition
from ._fanout import map_files


class ViolationScanner:
    """
    Domain service triaging zero-value constructions of marked types.

    Only the syntactically empty form ``T{}`` is considered. An occurrence
    is legitimate when a constructor of that exact type, recorded in that
    exact file, spans its line. Constructors in other files never exempt it.
    """

    def scan(
        self,
        marker: MarkerDefinition,
        types: AbstractSet[QualifiedTypeName],
        constructors: Mapping[ConstructorKey, ConstructorRecord],
        files: Iterable[GoSourceFile],
        executor: Optional[Executor] = None,
    ) -> FrozenSet[Violation]:
        """
        Find zero-value constructions outside constructors.

        Args:
            marker: Marker kind being validated
            types: Marked types found by the detector
            constructors: Constructor records found by the locator
            files: Parsed source files
            executor: Optional executor for per-file work

        Returns:
            Set of violations
        """
        violations: Set[Violation] = set()
        if not types:
            return frozenset(violations)

        def scan_file(source: GoSourceFile) -> List[Violation]:
            return [
                self._to_violation(marker, occurrence)
                for occurrence in self.find_occurrences(types, source)
                if not self.is_inside_constructor(occurrence, constructors)
            ]

        for found in map_files(scan_file, files, executor):
            violations.update(found)

        return frozenset(violations)

    def find_occurrences(
        self,
        types: AbstractSet[QualifiedTypeName],
        source: GoSourceFile,
    ) -> List[ZeroValueOccurrence]:
        """
        Find zero-value constructions of marked types in one file.

        Args:
            types: Marked types
            source: Parsed source file

        Returns:
            Occurrences in source order
        """
        occurrences = []

        for literal in source.composite_literals:
            if not literal.is_zero_value:
                continue

            type_name = source.resolve(literal.type_ref)
            if type_name is None or type_name not in types:
                continue

            occurrences.append(ZeroValueOccurrence(
                type=type_name,
                file=source.path,
                line=literal.line,
                context=literal.context,
            ))

        return occurrences

    @staticmethod
    def is_inside_constructor(
        occurrence: ZeroValueOccurrence,
        constructors: Mapping[ConstructorKey, ConstructorRecord],
    ) -> bool:
        """Check whether a constructor of the occurrence's type spans it in the same file."""
        for record in constructors.values():
            if record.type == occurrence.type and record.contains(occurrence.file, occurrence.line):
                return True
        return False

    @staticmethod
    def _to_violation(marker: MarkerDefinition, occurrence: ZeroValueOccurrence) -> Violation:
        return Violation(
            kind=marker.kind,
            type=occurrence.type,
            file=occurrence.file,
            line=occurrence.line,
            label=marker.label,
        )
