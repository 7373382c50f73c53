"""Domain models."""

from .syntax import (
    QualifiedTypeName,
    TypeRef,
    ImportSpec,
    FieldDecl,
    StructDecl,
    FunctionDecl,
    CompositeLiteral,
    LiteralContext,
    GoSourceFile,
)
from .validation import (
    ConstructorKey,
    ConstructorRecord,
    ZeroValueOccurrence,
    Violation,
    ValidationReport,
    MarkerOutcome,
    ValidationRun,
)

__all__ = [
    "QualifiedTypeName",
    "TypeRef",
    "ImportSpec",
    "FieldDecl",
    "StructDecl",
    "FunctionDecl",
    "CompositeLiteral",
    "LiteralContext",
    "GoSourceFile",
    "ConstructorKey",
    "ConstructorRecord",
    "ZeroValueOccurrence",
    "Violation",
    "ValidationReport",
    "MarkerOutcome",
    "ValidationRun",
]
