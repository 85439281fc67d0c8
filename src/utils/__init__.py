"""Path utilities for the cigar-title-matcher project.

This module provides centralized path utilities to avoid duplication across
the codebase.
"""

from pathlib import Path


def get_workspace_root() -> Path:
    """Get the project workspace root directory.

    The workspace root is the parent directory of the src/ directory.
    This is calculated from the location of this file to work correctly
    regardless of where the module is imported from.

    Returns:
        Path: The workspace root directory.
    """
    return Path(__file__).parent.parent.parent


def ensure_dir(path: Path) -> None:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory to ensure.

    Returns:
        None
    """
    path.mkdir(parents=True, exist_ok=True)
