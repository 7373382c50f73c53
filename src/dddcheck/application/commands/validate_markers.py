"""Validate markers command and handler."""

import threading
import time
import uuid
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ...domain.exceptions import ValidationCancelledError
from ...domain.models.syntax import GoSourceFile
from ...domain.models.validation import MarkerOutcome, ValidationReport, ValidationRun
from ...domain.services.constructor_locator import ConstructorLocator
from ...domain.services.marker_detector import MarkerDetector
from ...domain.services.report_aggregator import aggregate_report
from ...domain.services.violation_scanner import ViolationScanner
from ...domain.value_objects.marker_definition import MarkerDefinition
from ...infrastructure.ast.go_parser import GoParser
from ...infrastructure.filesystem.tree_walker import TreeWalker
from ...infrastructure.logging import DddCheckLogger, logging_context


@dataclass
class ValidateMarkersCommand:
    """
    Command to validate one or more marker kinds over a source tree.

    The tree is parsed once; each marker kind is then validated
    independently against the same parsed files.
    """
    root_path: Path
    markers: List[MarkerDefinition]
    max_workers: int = 4
    cancel_event: Optional[threading.Event] = None


class ValidateMarkersHandler:
    """
    Handler for validate markers command.

    Orchestrates, per marker kind, a strictly ordered pipeline:
    1. Marker detection over the whole tree
    2. Constructor discovery for the detected types
    3. Violation scanning against the discovered constructors
    4. Report aggregation

    Within a phase files are processed on a thread pool. A phase starts
    only after the previous one has finished over every file.
    """

    def __init__(
        self,
        tree_walker: TreeWalker,
        marker_detector: MarkerDetector,
        constructor_locator: ConstructorLocator,
        violation_scanner: ViolationScanner,
    ):
        """
        Initialize handler.

        Args:
            tree_walker: Source enumeration and parsing
            marker_detector: Marked type detection
            constructor_locator: Constructor discovery
            violation_scanner: Zero-value triage
        """
        self.tree_walker = tree_walker
        self.marker_detector = marker_detector
        self.constructor_locator = constructor_locator
        self.violation_scanner = violation_scanner
        self.logger = DddCheckLogger.get_instance()

    def handle(self, command: ValidateMarkersCommand) -> ValidationRun:
        """
        Execute validate markers command.

        Args:
            command: Validation command

        Returns:
            ValidationRun with one outcome per marker kind

        Raises:
            RootPathError: If the root cannot be enumerated
            ValidationCancelledError: If cancelled between phases
        """
        start_time = time.time()
        run = ValidationRun.create(str(command.root_path))

        with logging_context(run_id=uuid.uuid4().hex[:12], root_path=str(command.root_path)):
            self.logger.info(
                "Starting validation",
                extra={
                    "marker_kinds": [m.kind for m in command.markers],
                    "max_workers": command.max_workers,
                },
            )

            with ThreadPoolExecutor(max_workers=command.max_workers) as executor:
                with logging_context(phase="parse"):
                    files = self.tree_walker.parse_tree(command.root_path, executor)
                run.files_analyzed = len(files)

                for marker in command.markers:
                    self._check_cancelled(command.cancel_event)
                    with logging_context(marker_kind=marker.kind):
                        report = self.validate_files(
                            marker, files, executor, cancel_event=command.cancel_event
                        )
                    run.add_outcome(MarkerOutcome(marker=marker, report=report))

            run.complete()

            self.logger.info(
                "Validation completed",
                extra={
                    "files_analyzed": run.files_analyzed,
                    "total_violations": run.total_violations,
                    "duration_seconds": round(time.time() - start_time, 3),
                },
            )

        return run

    def validate_files(
        self,
        marker: MarkerDefinition,
        files: Sequence[GoSourceFile],
        executor: Optional[Executor] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[ValidationReport]:
        """
        Validate one marker kind over already parsed files.

        Args:
            marker: Marker kind
            files: Parsed source files
            executor: Optional executor for per-file work
            cancel_event: Checked between phases

        Returns:
            ValidationReport, or None when no marked types exist
        """
        with logging_context(phase="detect"):
            types = self.marker_detector.detect(marker, files, executor)
            self.logger.debug(f"Found {len(types)} {marker.label} types", extra={"types": len(types)})

        if not types:
            self.logger.info(f"No {marker.label} types found")
            return None

        self._check_cancelled(cancel_event)
        with logging_context(phase="locate"):
            constructors = self.constructor_locator.locate(types, files, executor)
            self.logger.debug(
                f"Found {len(constructors)} {marker.label} constructors",
                extra={"constructors": len(constructors)},
            )

        self._check_cancelled(cancel_event)
        with logging_context(phase="scan"):
            violations = self.violation_scanner.scan(marker, types, constructors, files, executor)
            self.logger.info(
                f"{marker.label}: {len(types)} types, {len(violations)} violations",
                extra={"types": len(types), "violations": len(violations)},
            )

        return aggregate_report(marker, types, constructors, violations)

    @staticmethod
    def _check_cancelled(event: Optional[threading.Event]) -> None:
        if event is not None and event.is_set():
            raise ValidationCancelledError("Validation cancelled")


def create_handler(
    constructor_prefix: str = "New",
    source_extension: str = ".go",
    test_suffix: str = "_test.go",
    excluded_dirs: Sequence[str] = (".git", "vendor", "node_modules"),
    module_marker: str = "go.mod",
) -> ValidateMarkersHandler:
    """Wire a handler with the default collaborators."""
    tree_walker = TreeWalker(
        parser=GoParser(),
        source_extension=source_extension,
        test_suffix=test_suffix,
        excluded_dirs=excluded_dirs,
        module_marker=module_marker,
    )
    return ValidateMarkersHandler(
        tree_walker=tree_walker,
        marker_detector=MarkerDetector(),
        constructor_locator=ConstructorLocator(prefix=constructor_prefix),
        violation_scanner=ViolationScanner(),
    )


def validate(
    marker: MarkerDefinition,
    root_path: Path,
    max_workers: int = 4,
) -> Optional[ValidationReport]:
    """
    Validate a single marker kind over a source tree.

    Args:
        marker: Marker kind to validate
        root_path: Root directory of the tree

    Returns:
        ValidationReport, or None when the tree has no marked types

    Raises:
        RootPathError: If the root cannot be enumerated
    """
    run = create_handler().handle(ValidateMarkersCommand(
        root_path=Path(root_path),
        markers=[marker],
        max_workers=max_workers,
    ))
    return run.outcomes[0].report
