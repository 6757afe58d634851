"""Filesystem boundary for media files read from local paths."""

from __future__ import annotations

from pathlib import Path

from .config import get_config


def resolve_path(path_value: str) -> Path:
    """Resolve a user-supplied path to an absolute filesystem path."""
    return Path(path_value).expanduser().resolve()


def enforce_local_access_root(path: Path) -> Path:
    """Reject *path* when it lies outside ``LOCAL_FILE_ACCESS_ROOT`` (if configured).

    Raises:
        PermissionError: If the path falls outside the configured access root.
    """
    root_value = get_config().local_file_access_root
    if not root_value:
        return path

    root = resolve_path(root_value)
    if not path.is_relative_to(root):
        raise PermissionError(f"Path '{path}' is outside LOCAL_FILE_ACCESS_ROOT '{root}'")
    return path
