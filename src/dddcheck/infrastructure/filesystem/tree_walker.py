"""Source tree enumeration and parsing."""

import os
from concurrent.futures import Executor
from pathlib import Path
from typing import Iterable, List, Optional

from ...domain.exceptions import RootPathError, SourceParseError
from ...domain.models.syntax import GoSourceFile
from ...domain.services._fanout import map_files
from ..ast.go_modules import GoModuleResolver
from ..ast.go_parser import GoParser
from ..logging import get_logger

logger = get_logger(__name__)


class TreeWalker:
    """
    Enumerates and parses the Go files of a source tree.

    Skips:
    - files without the source extension
    - test files (zero values are unconstrained in test code)
    - excluded directories (matched by directory name)

    Only a root that cannot be enumerated is an error. Unreadable entries,
    undecodable files and files with syntax errors are dropped and logged.
    """

    def __init__(
        self,
        parser: GoParser,
        source_extension: str = ".go",
        test_suffix: str = "_test.go",
        excluded_dirs: Iterable[str] = (".git", "vendor", "node_modules"),
        module_marker: str = "go.mod",
    ):
        """
        Initialize walker.

        Args:
            parser: Go parser
            source_extension: Extension of source files
            test_suffix: File name suffix of test files
            excluded_dirs: Directory names never descended into
            module_marker: Module definition file name
        """
        self.parser = parser
        self.source_extension = source_extension
        self.test_suffix = test_suffix
        self.excluded_dirs = frozenset(excluded_dirs)
        self.module_marker = module_marker

    def discover_files(self, root_path: Path) -> List[Path]:
        """
        List candidate source files under a root.

        Args:
            root_path: Root directory

        Returns:
            Sorted list of source file paths

        Raises:
            RootPathError: If root is missing, not a directory, or unreadable
        """
        root_path = Path(root_path)
        if not root_path.exists():
            raise RootPathError(f"Root path does not exist: {root_path}")
        if not root_path.is_dir():
            raise RootPathError(f"Root path is not a directory: {root_path}")

        try:
            with os.scandir(root_path):
                pass
        except OSError as e:
            raise RootPathError(f"Cannot read root path {root_path}: {e}") from e

        files = []
        for dirpath, dirnames, filenames in os.walk(root_path, onerror=self._on_walk_error):
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)

            for filename in filenames:
                if self.is_source_file(filename):
                    files.append(Path(dirpath) / filename)

        return sorted(files)

    def is_source_file(self, filename: str) -> bool:
        """Check extension and test-file convention."""
        return filename.endswith(self.source_extension) and not filename.endswith(self.test_suffix)

    def parse_tree(
        self,
        root_path: Path,
        executor: Optional[Executor] = None,
    ) -> List[GoSourceFile]:
        """
        Discover and parse every source file under a root.

        Args:
            root_path: Root directory
            executor: Optional executor for per-file parsing

        Returns:
            Parsed files in path order

        Raises:
            RootPathError: If root cannot be enumerated
        """
        files = self.discover_files(root_path)
        resolver = GoModuleResolver(Path(root_path), marker_file=self.module_marker)

        parsed = [
            source
            for source in map_files(lambda p: self.parse_file(p, resolver), files, executor)
            if source is not None
        ]

        logger.info(
            f"Parsed {len(parsed)} of {len(files)} source files",
            extra={"files_discovered": len(files), "files_parsed": len(parsed)},
        )
        return parsed

    def parse_file(self, path: Path, resolver: GoModuleResolver) -> Optional[GoSourceFile]:
        """
        Parse one file, or None when it has to be dropped.

        Args:
            path: Source file path
            resolver: Module resolver for package import paths

        Returns:
            GoSourceFile or None
        """
        try:
            content = path.read_bytes()
            content.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
            return None

        try:
            return self.parser.parse(
                content,
                str(path),
                lambda package_name: resolver.package_path(path.parent, package_name),
            )
        except SourceParseError as e:
            logger.debug(f"Skipping unparseable file: {e}")
            return None

    @staticmethod
    def _on_walk_error(error: OSError):
        logger.debug(f"Skipping inaccessible entry {error.filename}: {error}")
