"""Validation result models: constructors, violations, reports and runs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Any

from .syntax import QualifiedTypeName, LiteralContext
from ..value_objects.marker_definition import MarkerDefinition


class ConstructorKey(NamedTuple):
    """Composite key keeping same-named constructors for different types apart."""
    file: str
    function: str
    type: QualifiedTypeName


@dataclass(frozen=True)
class ConstructorRecord:
    """Sanctioned origin of zero values for one marked type."""
    type: QualifiedTypeName
    file: str
    function: str
    start_line: int
    end_line: int

    @property
    def key(self) -> ConstructorKey:
        return ConstructorKey(self.file, self.function, self.type)

    def contains(self, file: str, line: int) -> bool:
        """Check whether a source position lies inside this constructor's span."""
        return self.file == file and self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class ZeroValueOccurrence:
    """A ``T{}`` construction of a marked type, before scope triage."""
    type: QualifiedTypeName
    file: str
    line: int
    context: LiteralContext


@dataclass(frozen=True)
class Violation:
    """
    A zero-value construction of a marked type outside its constructors.

    Identity is (kind, type, file, line): repeated occurrences on one line
    collapse into a single violation.
    """
    kind: str
    type: QualifiedTypeName
    file: str
    line: int
    label: str = field(default="", compare=False)

    def render(self) -> str:
        """Render as ``VIOLATION: <kind> <qualified-type> at <file>:<line>``."""
        return f"VIOLATION: {self.label or self.kind} {self.type} at {self.file}:{self.line}"

    def sort_key(self):
        return (self.file, self.line, str(self.type), self.kind)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ValidationReport:
    """
    Result of validating one marker kind over a source tree.

    Only built when at least one marked type exists. The absence of a
    report (None) means the tree has nothing of this kind to validate.
    """
    marker: MarkerDefinition
    types: FrozenSet[QualifiedTypeName]
    constructors: Dict[ConstructorKey, ConstructorRecord]
    violations: FrozenSet[Violation]

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    def sorted_types(self) -> List[QualifiedTypeName]:
        return sorted(self.types)

    def sorted_constructors(self) -> List[ConstructorRecord]:
        return sorted(
            self.constructors.values(),
            key=lambda c: (c.file, c.start_line, c.function, str(c.type)),
        )

    def sorted_violations(self) -> List[Violation]:
        """Violations in (file, line, type) order for presentation."""
        return sorted(self.violations, key=Violation.sort_key)

    def constructors_for(self, type_name: QualifiedTypeName) -> List[ConstructorRecord]:
        """Constructors producing ``type_name``, in (file, line) order."""
        return [c for c in self.sorted_constructors() if c.type == type_name]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with deterministic ordering."""
        return {
            "kind": self.marker.kind,
            "marker": f"{self.marker.package_path}.{self.marker.type_name}",
            "types": [str(t) for t in self.sorted_types()],
            "constructors": [
                {
                    "function": c.function,
                    "type": str(c.type),
                    "file": c.file,
                    "start_line": c.start_line,
                    "end_line": c.end_line,
                }
                for c in self.sorted_constructors()
            ],
            "violations": [
                {
                    "type": str(v.type),
                    "file": v.file,
                    "line": v.line,
                    "message": v.render(),
                }
                for v in self.sorted_violations()
            ],
        }


@dataclass(frozen=True)
class MarkerOutcome:
    """Outcome of one marker kind within a run. ``report`` is None when no marked types exist."""
    marker: MarkerDefinition
    report: Optional[ValidationReport]

    @property
    def has_types(self) -> bool:
        return self.report is not None

    @property
    def violation_count(self) -> int:
        return len(self.report.violations) if self.report else 0


@dataclass
class ValidationRun:
    """
    A validation session over one source tree, covering one or more marker kinds.
    """
    root_path: str
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    files_analyzed: int = 0
    outcomes: List[MarkerOutcome] = field(default_factory=list)

    @classmethod
    def create(cls, root_path: str) -> "ValidationRun":
        return cls(root_path=root_path)

    def add_outcome(self, outcome: MarkerOutcome) -> None:
        self.outcomes.append(outcome)

    def complete(self) -> None:
        self.completed_at = datetime.now()

    def get_outcome(self, kind: str) -> Optional[MarkerOutcome]:
        for outcome in self.outcomes:
            if outcome.marker.kind == kind:
                return outcome
        return None

    @property
    def total_violations(self) -> int:
        return sum(o.violation_count for o in self.outcomes)

    @property
    def has_violations(self) -> bool:
        return self.total_violations > 0
