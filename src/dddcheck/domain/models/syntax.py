"""
Syntax models for parsed Go source files.

These are the only view of the source tree the domain services see. The
infrastructure parser builds them from tree-sitter output; tests may build
them by hand.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True, order=True)
class QualifiedTypeName:
    """Type identity: import path of the declaring package plus local name."""
    package: str
    name: str

    def __str__(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


@dataclass(frozen=True)
class TypeRef:
    """A type as written in source: ``Name`` or ``pkg.Name``."""
    name: str
    package: Optional[str] = None

    @property
    def is_qualified(self) -> bool:
        return self.package is not None

    def __str__(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


@dataclass(frozen=True)
class ImportSpec:
    """One import line, optionally aliased."""
    path: str
    name: Optional[str] = None

    @property
    def alias(self) -> str:
        """Identifier the file uses to reference the package."""
        if self.name:
            return self.name
        return self.path.rstrip("/").split("/")[-1]


@dataclass(frozen=True)
class FieldDecl:
    """A struct field declaration. Embedded fields have no names."""
    names: List[str]
    type_ref: Optional[TypeRef]
    line: int = 0


@dataclass(frozen=True)
class StructDecl:
    """A named struct type declaration."""
    name: str
    line: int
    fields: List[FieldDecl] = field(default_factory=list)


@dataclass(frozen=True)
class FunctionDecl:
    """
    A function or method declaration.

    ``results`` holds one entry per declared result. Entries are None where
    the result type is not a plain or package-qualified identifier.
    """
    name: str
    start_line: int
    end_line: int
    results: List[Optional[TypeRef]] = field(default_factory=list)
    is_method: bool = False


class LiteralContext(str, Enum):
    """Syntactic position of a composite literal."""

    BARE = "bare"
    ASSIGNMENT = "assignment"
    RETURN = "return"


@dataclass(frozen=True)
class CompositeLiteral:
    """
    A composite literal construction such as ``Money{}`` or ``pkg.Money{a: 1}``.

    ``type_ref`` is None when the literal's type is not a plain or
    package-qualified identifier (slices, maps, generics, anonymous structs).
    """
    type_ref: Optional[TypeRef]
    line: int
    element_count: int
    context: LiteralContext = LiteralContext.BARE

    @property
    def is_zero_value(self) -> bool:
        """True for the syntactically empty form ``T{}``."""
        return self.element_count == 0


@dataclass
class GoSourceFile:
    """Everything the engine needs from one parsed Go file."""
    path: str
    package_name: str
    package_path: str
    imports: List[ImportSpec] = field(default_factory=list)
    structs: List[StructDecl] = field(default_factory=list)
    functions: List[FunctionDecl] = field(default_factory=list)
    composite_literals: List[CompositeLiteral] = field(default_factory=list)

    def alias_for(self, package_path: str) -> Optional[str]:
        """
        Get the identifier this file binds to an imported package.

        Args:
            package_path: Full import path

        Returns:
            Explicit alias, else the path's final segment; None if not imported
        """
        for spec in self.imports:
            if spec.path == package_path:
                return spec.alias
        return None

    def resolve(self, type_ref: Optional[TypeRef]) -> Optional[QualifiedTypeName]:
        """
        Resolve a written type to its qualified name.

        Bare identifiers belong to this file's package. Qualified ones are
        looked up in this file's import table.

        Args:
            type_ref: Type as written

        Returns:
            QualifiedTypeName, or None when the qualifier is not an import
        """
        if type_ref is None:
            return None

        if not type_ref.is_qualified:
            return QualifiedTypeName(self.package_path, type_ref.name)

        for spec in self.imports:
            if spec.alias == type_ref.package:
                return QualifiedTypeName(spec.path, type_ref.name)

        return None
