"""JSON formatter for machine-readable output."""

import json
from typing import Dict, Any

from ... import __version__
from ...domain.models.validation import MarkerOutcome, ValidationRun, Violation
from .base_formatter import OutputFormatter


class JSONFormatter(OutputFormatter):
    """
    Format validation runs as JSON.

    Provides machine-readable output for CI integration and further
    processing. Violations are structured, with the rendered message
    included for convenience.
    """

    def __init__(self, pretty: bool = True):
        """
        Initialize JSON formatter.

        Args:
            pretty: Enable pretty-printing with indentation
        """
        self.pretty = pretty

    def format_run(self, run: ValidationRun) -> str:
        """
        Format complete validation run as JSON.

        Args:
            run: ValidationRun to format

        Returns:
            JSON string
        """
        return self._dump(self._run_to_dict(run))

    def format_violation(self, violation: Violation) -> str:
        """Format single violation as JSON."""
        return self._dump(self._violation_to_dict(violation))

    def get_file_extension(self) -> str:
        """Get file extension."""
        return ".json"

    def _dump(self, data: Dict[str, Any]) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, default=str)
        return json.dumps(data, default=str)

    def _run_to_dict(self, run: ValidationRun) -> Dict[str, Any]:
        return {
            "tool": {
                "name": "dddcheck",
                "version": __version__,
            },
            "run": {
                "root_path": run.root_path,
                "started_at": run.started_at.isoformat() if run.started_at else None,
                "completed_at": run.completed_at.isoformat() if run.completed_at else None,
                "files_analyzed": run.files_analyzed,
            },
            "summary": {
                "total_violations": run.total_violations,
                "kinds_checked": len(run.outcomes),
                "kinds_with_types": sum(1 for o in run.outcomes if o.has_types),
            },
            "outcomes": [self._outcome_to_dict(o) for o in run.outcomes],
        }

    def _outcome_to_dict(self, outcome: MarkerOutcome) -> Dict[str, Any]:
        if outcome.report is None:
            return {
                "kind": outcome.marker.kind,
                "marker": f"{outcome.marker.package_path}.{outcome.marker.type_name}",
                "status": "no_marked_types",
            }

        data = outcome.report.to_dict()
        data["status"] = "violations" if outcome.report.has_violations else "ok"
        return data

    def _violation_to_dict(self, violation: Violation) -> Dict[str, Any]:
        return {
            "kind": violation.kind,
            "type": str(violation.type),
            "file": violation.file,
            "line": violation.line,
            "message": violation.render(),
        }
