"""Dependency injection container for dddcheck."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config.config_loader import ConfigLoader
from ..config.config_models import DddCheckConfig
from ..ast.go_parser import GoParser
from ..filesystem.tree_walker import TreeWalker
from ..logging import DddCheckLogger
from ...domain.services.marker_detector import MarkerDetector
from ...domain.services.constructor_locator import ConstructorLocator
from ...domain.services.violation_scanner import ViolationScanner
from ...domain.services.marker_registry import MarkerRegistry
from ...application.commands.validate_markers import ValidateMarkersHandler


@dataclass
class DIContainer:
    """
    Dependency injection container for dddcheck.

    Assembles all components from configuration.
    Created once per CLI invocation.
    """

    # Configuration
    config: DddCheckConfig

    # Infrastructure
    logger: DddCheckLogger
    parser: GoParser
    tree_walker: TreeWalker

    # Domain Services
    marker_registry: MarkerRegistry
    marker_detector: MarkerDetector
    constructor_locator: ConstructorLocator
    violation_scanner: ViolationScanner

    # Application Handlers
    validate_handler: ValidateMarkersHandler

    @classmethod
    def create(
        cls,
        config_path: Optional[str] = None,
        verbose: bool = False,
    ) -> "DIContainer":
        """
        Create and wire all dependencies.

        Args:
            config_path: Optional path to configuration file
            verbose: Lower console logging to DEBUG

        Returns:
            DIContainer with all dependencies wired
        """
        config = ConfigLoader.load(config_path)

        # Logging is configured first so every component logs through it
        DddCheckLogger.reset()
        logger = DddCheckLogger.get_instance(
            level="DEBUG" if verbose else config.logging.level,
            log_file=Path(config.logging.file) if config.logging.file else None,
            console=config.logging.console,
            rotation=config.logging.rotation,
            retention_days=config.logging.retention_days,
        )

        # Infrastructure layer
        parser = GoParser()
        tree_walker = TreeWalker(
            parser=parser,
            source_extension=config.scan.source_extension,
            test_suffix=config.scan.test_suffix,
            excluded_dirs=config.scan.excluded_dirs,
            module_marker=config.scan.project_marker,
        )

        # Domain services
        marker_registry = MarkerRegistry()
        for marker in config.marker_definitions():
            marker_registry.register(marker)

        marker_detector = MarkerDetector()
        constructor_locator = ConstructorLocator(prefix=config.scan.constructor_prefix)
        violation_scanner = ViolationScanner()

        # Application handlers
        validate_handler = ValidateMarkersHandler(
            tree_walker=tree_walker,
            marker_detector=marker_detector,
            constructor_locator=constructor_locator,
            violation_scanner=violation_scanner,
        )

        return cls(
            config=config,
            logger=logger,
            parser=parser,
            tree_walker=tree_walker,
            marker_registry=marker_registry,
            marker_detector=marker_detector,
            constructor_locator=constructor_locator,
            violation_scanner=violation_scanner,
            validate_handler=validate_handler,
        )
