"""
Project root discovery for SysrootKit.

A project root is the nearest directory, starting from the working directory
and walking up, that contains a ``Cargo.toml`` manifest. Custom target spec
files placed there take precedence over the ``RUST_TARGET_PATH`` directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "Cargo.toml"


@dataclass(frozen=True)
class ProjectRoot:
    """
    Directory holding the project manifest.

    Attributes:
        path: Project root directory
    """

    path: Path

    @property
    def manifest(self) -> Path:
        """Path to the project's ``Cargo.toml``."""
        return self.path / MANIFEST_FILENAME


def find_project_root(start: Optional[Path] = None) -> Optional[ProjectRoot]:
    """
    Find the nearest ancestor directory containing ``Cargo.toml``.

    Args:
        start: Directory to start searching from (defaults to the current
            working directory)

    Returns:
        ProjectRoot, or None if no ancestor holds a manifest

    Example:
        >>> root = find_project_root(Path('/work/app/src'))
        >>> print(root.path)
        /work/app
    """
    if start is None:
        start = Path.cwd()

    start = start.absolute()
    for directory in (start, *start.parents):
        if (directory / MANIFEST_FILENAME).is_file():
            logger.debug(f"Found project root at {directory}")
            return ProjectRoot(directory)

    logger.debug(f"No {MANIFEST_FILENAME} found above {start}")
    return None


__all__ = [
    "MANIFEST_FILENAME",
    "ProjectRoot",
    "find_project_root",
]
