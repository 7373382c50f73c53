"""Constructor discovery domain service."""

from concurrent.futures import Executor
from typing import AbstractSet, Dict, Iterable, List, Optional

from ..models.syntax import GoSourceFile, FunctionDecl, QualifiedTypeName
from ..models.validation import ConstructorKey, ConstructorRecord
from ._fanout import map_files


class ConstructorLocator:
    """
    Domain service locating the constructors of marked types.

    A constructor is any function or method whose name starts with the
    constructor prefix and whose first declared result resolves to a
    marked type. The comparison is package-qualified, so a ``NewMoney``
    returning some other package's ``Money`` is not a constructor of
    this package's ``Money``.
    """

    def __init__(self, prefix: str = "New"):
        """
        Initialize locator.

        Args:
            prefix: Constructor naming prefix
        """
        self.prefix = prefix

    def locate(
        self,
        types: AbstractSet[QualifiedTypeName],
        files: Iterable[GoSourceFile],
        executor: Optional[Executor] = None,
    ) -> Dict[ConstructorKey, ConstructorRecord]:
        """
        Find every constructor of the given types.

        Args:
            types: Marked types found by the detector
            files: Parsed source files
            executor: Optional executor for per-file work

        Returns:
            Constructor records keyed by (file, function, type)
        """
        constructors: Dict[ConstructorKey, ConstructorRecord] = {}
        if not types:
            return constructors

        for records in map_files(lambda f: self.locate_in_file(types, f), files, executor):
            for record in records:
                constructors[record.key] = record

        return constructors

    def locate_in_file(
        self,
        types: AbstractSet[QualifiedTypeName],
        source: GoSourceFile,
    ) -> List[ConstructorRecord]:
        """Find constructors of marked types declared in one file."""
        records = []

        for func in source.functions:
            produced = self._produced_type(func, source)
            if produced is None or produced not in types:
                continue

            records.append(ConstructorRecord(
                type=produced,
                file=source.path,
                function=func.name,
                start_line=func.start_line,
                end_line=func.end_line,
            ))

        return records

    def _produced_type(
        self,
        func: FunctionDecl,
        source: GoSourceFile,
    ) -> Optional[QualifiedTypeName]:
        """Resolve the first result of a prefix-named function."""
        if not func.name.startswith(self.prefix) or not func.results:
            return None
        return source.resolve(func.results[0])
