"""Safety validators applied before any command is built."""

from gitdriver.safety.paths import sanitize_path, validate_pathspec
from gitdriver.safety.protection import BranchProtection
from gitdriver.safety.refs import validate_commit_message, validate_ref_name, validate_revision
from gitdriver.safety.workdir import (
    SESSION_SENTINEL,
    InMemorySessionStore,
    SessionStore,
    WorkingDirectoryResolver,
    session_key,
)

__all__ = [
    "SESSION_SENTINEL",
    "BranchProtection",
    "InMemorySessionStore",
    "SessionStore",
    "WorkingDirectoryResolver",
    "sanitize_path",
    "session_key",
    "validate_commit_message",
    "validate_pathspec",
    "validate_ref_name",
    "validate_revision",
]
