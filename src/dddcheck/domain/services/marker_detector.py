"""Marker detection domain service."""

from concurrent.futures import Executor
from typing import FrozenSet, Iterable, Optional, Set

from ..models.syntax import GoSourceFile, StructDecl, QualifiedTypeName
from ..value_objects.marker_definition import MarkerDefinition
from ._fanout import map_files


class MarkerDetector:
    """
    Domain service finding struct declarations tagged with a marker.

    A struct is tagged when one of its fields declares exactly one name,
    that name is the marker field name, and the field's type is
    ``<alias>.<MarkerType>`` with ``<alias>`` bound by the file's own
    imports to the marker's package. Matching is purely declarative: no
    embedding is followed beyond this direct field.
    """

    def detect(
        self,
        marker: MarkerDefinition,
        files: Iterable[GoSourceFile],
        executor: Optional[Executor] = None,
    ) -> FrozenSet[QualifiedTypeName]:
        """
        Find every marked type in the tree.

        Args:
            marker: Marker definition to look for
            files: Parsed source files
            executor: Optional executor for per-file work

        Returns:
            Set of qualified names of marked types (possibly empty)
        """
        types: Set[QualifiedTypeName] = set()
        for found in map_files(lambda f: self.detect_in_file(marker, f), files, executor):
            types |= found
        return frozenset(types)

    def detect_in_file(
        self,
        marker: MarkerDefinition,
        source: GoSourceFile,
    ) -> Set[QualifiedTypeName]:
        """Find marked types declared in one file."""
        alias = source.alias_for(marker.package_path)
        if alias is None:
            # File does not import the marker package
            return set()

        return {
            QualifiedTypeName(source.package_path, struct.name)
            for struct in source.structs
            if self.is_marked(struct, alias, marker)
        }

    @staticmethod
    def is_marked(struct: StructDecl, alias: str, marker: MarkerDefinition) -> bool:
        """
        Check a struct's fields for the marker field.

        Args:
            struct: Struct declaration
            alias: Identifier the file binds to the marker package
            marker: Marker definition

        Returns:
            True if the struct carries the marker
        """
        for field_decl in struct.fields:
            if len(field_decl.names) != 1 or field_decl.names[0] != marker.field_name:
                continue

            type_ref = field_decl.type_ref
            if type_ref is None or not type_ref.is_qualified:
                continue

            if type_ref.package == alias and type_ref.name == marker.type_name:
                return True

        return False
