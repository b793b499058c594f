"""Path sanitization for working directories and file arguments."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Optional

from gitdriver.git.errors import validation_error


def sanitize_path(path: str, *, allow_absolute: bool = True, root_dir: Optional[str] = None) -> str:
    """Return the canonical absolute form of *path* or raise ``validation-error``.

    Rejects empty paths, null bytes and ``..`` components. When *root_dir*
    is set, relative paths are resolved against it, ``..`` is allowed, and
    the result must stay inside the root.
    """
    if not path or not path.strip():
        raise validation_error("Path must not be empty")
    if "\x00" in path:
        raise validation_error("Path contains a null byte")
    if not allow_absolute and os.path.isabs(path):
        raise validation_error("Absolute paths are not allowed", path=path)

    if root_dir is None:
        if ".." in PurePath(path).parts:
            raise validation_error("Path traversal ('..') is not allowed", path=path)
        return os.path.realpath(os.path.abspath(path))

    root = os.path.realpath(root_dir)
    resolved = os.path.realpath(os.path.join(root, path))
    if os.path.commonpath([root, resolved]) != root:
        raise validation_error(
            f"Path escapes the allowed base directory {root}", path=path, base_dir=root
        )
    return resolved


def validate_pathspec(path: str) -> str:
    """Validate a repository-relative file argument (add, blame, checkout paths)."""
    if not path or not path.strip():
        raise validation_error("File path must not be empty")
    if "\x00" in path:
        raise validation_error("File path contains a null byte")
    if os.path.isabs(path):
        raise validation_error("File path must be relative to the repository", path=path)
    if ".." in PurePath(path).parts:
        raise validation_error("Path traversal ('..') is not allowed", path=path)
    return path
