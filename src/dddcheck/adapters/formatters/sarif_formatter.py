"""SARIF formatter for tool integration."""

import json
from typing import Dict, Any, List

from ... import __version__
from ...domain.models.validation import ValidationRun, Violation
from ...domain.value_objects.marker_definition import MarkerDefinition
from .base_formatter import OutputFormatter


class SARIFFormatter(OutputFormatter):
    """
    Format validation runs as SARIF 2.1.0.

    Each marker kind becomes one rule; each violation one result at
    level ``error``. Code scanning services (GitHub, GitLab, Azure
    DevOps) consume this directly.

    Spec: https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
    """

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
    RULE_PREFIX = "dddcheck"

    def format_run(self, run: ValidationRun) -> str:
        """
        Format complete validation run as SARIF.

        Args:
            run: ValidationRun to format

        Returns:
            SARIF JSON string
        """
        return json.dumps(self._create_sarif_document(run), indent=2, default=str)

    def format_violation(self, violation: Violation) -> str:
        """Format single violation as a SARIF result."""
        return json.dumps(self._violation_to_sarif_result(violation), indent=2, default=str)

    def get_file_extension(self) -> str:
        """Get file extension."""
        return ".sarif"

    def _create_sarif_document(self, run: ValidationRun) -> Dict[str, Any]:
        results = []
        for outcome in run.outcomes:
            if outcome.report is None:
                continue
            results.extend(
                self._violation_to_sarif_result(v)
                for v in outcome.report.sorted_violations()
            )

        return {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "dddcheck",
                            "version": __version__,
                            "semanticVersion": __version__,
                            "rules": [self._marker_to_rule(o.marker) for o in run.outcomes],
                        }
                    },
                    "invocations": [
                        {
                            "executionSuccessful": True,
                            "startTimeUtc": run.started_at.isoformat() if run.started_at else None,
                            "endTimeUtc": run.completed_at.isoformat() if run.completed_at else None,
                        }
                    ],
                    "results": results,
                }
            ],
        }

    def _violation_to_sarif_result(self, violation: Violation) -> Dict[str, Any]:
        return {
            "ruleId": self.rule_id(violation.kind),
            "level": "error",
            "message": {
                "text": violation.render(),
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": violation.file,
                        },
                        "region": {
                            "startLine": violation.line,
                        },
                    }
                }
            ],
            "properties": {
                "type": str(violation.type),
            },
        }

    def _marker_to_rule(self, marker: MarkerDefinition) -> Dict[str, Any]:
        return {
            "id": self.rule_id(marker.kind),
            "name": f"ZeroValue{marker.label}",
            "shortDescription": {
                "text": f"Zero-value {marker.label} constructed outside its constructor"
            },
            "fullDescription": {
                "text": (
                    f"Types tagged with {marker.package_path}.{marker.type_name} must be "
                    f"created through a constructor; an empty composite literal "
                    f"elsewhere bypasses their invariants."
                )
            },
            "defaultConfiguration": {
                "level": "error"
            },
            "properties": {
                "tags": ["ddd", marker.kind],
                "precision": "high",
            },
        }

    @classmethod
    def rule_id(cls, kind: str) -> str:
        return f"{cls.RULE_PREFIX}-{kind.replace('_', '-')}"
