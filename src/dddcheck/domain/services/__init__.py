"""Domain services - marker detection, constructor discovery, violation triage."""

from .marker_detector import MarkerDetector
from .constructor_locator import ConstructorLocator
from .violation_scanner import ViolationScanner
from .marker_registry import MarkerRegistry, builtin_markers
from .project_root_finder import find_project_root
from .report_aggregator import aggregate_report

__all__ = [
    "MarkerDetector",
    "ConstructorLocator",
    "ViolationScanner",
    "MarkerRegistry",
    "builtin_markers",
    "find_project_root",
    "aggregate_report",
]
