"""Go module resolution: maps directories to package import paths."""

import re
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..logging import get_logger

logger = get_logger(__name__)


class GoModuleResolver:
    """
    Resolve a directory to the import path of the package it holds.

    The nearest ``go.mod`` at or above the directory supplies the module
    path; the package path is the module path joined with the directory's
    location inside the module. Trees without a ``go.mod`` fall back to the
    directory path relative to the scanned root.
    """

    MODULE_PATTERN = re.compile(r'^\s*module\s+"?([^"\s]+)"?', re.MULTILINE)

    def __init__(self, root: Path, marker_file: str = "go.mod"):
        """
        Initialize resolver.

        Args:
            root: Scanned root directory
            marker_file: Module definition file name
        """
        self.root = Path(root).resolve()
        self.marker_file = marker_file
        self._modules: Dict[Path, Optional[Tuple[Path, str]]] = {}

    def package_path(self, directory: Path, package_name: str) -> str:
        """
        Get the import path for the package in ``directory``.

        Args:
            directory: Directory containing the source file
            package_name: Name from the file's package clause

        Returns:
            Import path (or root-relative directory path without a module)
        """
        directory = Path(directory).resolve()
        module = self._find_module(directory)

        if module is not None:
            module_dir, module_path = module
            relative = directory.relative_to(module_dir)
            if not relative.parts:
                return module_path
            return f"{module_path}/{relative.as_posix()}"

        try:
            relative = directory.relative_to(self.root)
        except ValueError:
            return package_name

        if not relative.parts:
            return package_name
        return relative.as_posix()

    def _find_module(self, directory: Path) -> Optional[Tuple[Path, str]]:
        """Find the (module directory, module path) governing a directory."""
        if directory in self._modules:
            return self._modules[directory]

        module = None
        mod_file = directory / self.marker_file
        if mod_file.is_file():
            module_path = self._read_module_path(mod_file)
            if module_path:
                module = (directory, module_path)

        if module is None and directory.parent != directory:
            module = self._find_module(directory.parent)

        self._modules[directory] = module
        return module

    def _read_module_path(self, mod_file: Path) -> Optional[str]:
        """Read the module directive from a go.mod file."""
        try:
            content = mod_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {mod_file}: {e}")
            return None

        match = self.MODULE_PATTERN.search(content)
        if not match:
            logger.debug(f"No module directive in {mod_file}")
            return None
        return match.group(1)
