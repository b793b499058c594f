"""Ref-name and commit-message validation.

Ref names follow ``git check-ref-format`` plus one extra rule: a name may
not start with ``-``, so a positional value can never be read as an option.
"""

from __future__ import annotations

import re
from typing import Optional

from gitdriver.git.errors import validation_error

MAX_COMMIT_MESSAGE_LENGTH = 10000

_FORBIDDEN_CHARS_RE = re.compile(r"[\x00-\x20\x7f~^:?*\[\\]")


def _ref_problem(name: str) -> Optional[str]:
    if not name:
        return "must not be empty"
    if name.startswith("-"):
        return "must not start with '-'"
    if name == "@":
        return "must not be '@'"
    if _FORBIDDEN_CHARS_RE.search(name):
        return "contains a forbidden character (space, control, ~ ^ : ? * [ or \\)"
    if ".." in name:
        return "must not contain '..'"
    if "@{" in name:
        return "must not contain '@{'"
    if name.startswith("/") or name.endswith("/") or "//" in name:
        return "must not start or end with '/' or contain '//'"
    if name.endswith("."):
        return "must not end with '.'"
    for component in name.split("/"):
        if component.startswith("."):
            return "components must not start with '.'"
        if component.endswith(".lock"):
            return "components must not end with '.lock'"
    return None


def validate_ref_name(name: str, what: str = "ref", operation: Optional[str] = None) -> str:
    """Return *name* if it is a valid ref name, else raise ``validation-error``."""
    problem = _ref_problem(name)
    if problem:
        raise validation_error(f"Invalid {what} name {name!r}: {problem}", operation, name=name)
    return name


def validate_revision(revision: str, operation: Optional[str] = None) -> str:
    """Looser check for commit-ish arguments (``HEAD~2``, ``v1.0^{}``, hashes)."""
    if not revision or not revision.strip():
        raise validation_error("Revision must not be empty", operation)
    if revision.startswith("-"):
        raise validation_error(f"Revision {revision!r} must not start with '-'", operation, revision=revision)
    if "\x00" in revision:
        raise validation_error("Revision contains a null byte", operation)
    return revision


def validate_commit_message(
    message: str, max_length: int = MAX_COMMIT_MESSAGE_LENGTH, operation: Optional[str] = None
) -> str:
    if not message or not message.strip():
        raise validation_error("Commit message must not be empty", operation)
    if "\x00" in message:
        raise validation_error("Commit message contains a null byte", operation)
    if len(message) > max_length:
        raise validation_error(
            f"Commit message exceeds {max_length} characters", operation, length=len(message)
        )
    return message
