"""
Project root discovery.

Walks upward from an explicit origin until a directory holding the project
marker file (``go.mod`` for Go modules) is found.
"""

from pathlib import Path
from typing import Union

from ..exceptions import ProjectRootNotFoundError


def find_project_root(
    origin: Union[str, Path],
    marker_file: str = "go.mod",
) -> Path:
    """
    Find the closest ancestor of ``origin`` containing ``marker_file``.

    Args:
        origin: Starting file or directory (e.g. the working directory)
        marker_file: File name marking the project root

    Returns:
        Absolute path to the project root

    Raises:
        ProjectRootNotFoundError: If the filesystem root is reached first
    """
    current = Path(origin).resolve()
    if current.is_file():
        current = current.parent

    while True:
        if (current / marker_file).is_file():
            return current

        if current.parent == current:
            break
        current = current.parent

    raise ProjectRootNotFoundError(
        f"Cannot find project root: no {marker_file} found above {origin}"
    )
