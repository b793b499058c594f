"""Error taxonomy and the ordered pattern classifier.

Every failure that leaves the engine is a :class:`StructuredError`. Raw git
failures are mapped by :class:`ErrorClassifier`, which tests an ordered list
of :class:`ErrorPattern` entries against the error text; the first match
wins, so the order of ``DEFAULT_PATTERNS`` is part of the contract.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from gitdriver.parsers.conflicts import parse_conflicted_files


class ErrorKind(str, Enum):
    VALIDATION_ERROR = "validation-error"
    NOT_A_REPOSITORY = "not-a-repository"
    REPOSITORY_NOT_FOUND = "repository-not-found"
    PERMISSION_DENIED = "permission-denied"
    PATHSPEC_NOT_FOUND = "pathspec-not-found"
    PATH_NOT_FOUND = "path-not-found"
    PATH_CONFLICT = "path-conflict"
    MERGE_CONFLICT = "merge-conflict"
    BRANCH_EXISTS = "branch-exists"
    BRANCH_NOT_FOUND = "branch-not-found"
    BRANCH_NOT_MERGED = "branch-not-merged"
    BRANCH_IN_USE = "branch-in-use"
    TAG_EXISTS = "tag-exists"
    TAG_NOT_FOUND = "tag-not-found"
    REMOTE_EXISTS = "remote-exists"
    REMOTE_NOT_FOUND = "remote-not-found"
    REMOTE_UNREACHABLE = "remote-unreachable"
    AUTH_FAILED = "auth-failed"
    PUSH_REJECTED = "push-rejected"
    NETWORK_ERROR = "network-error"
    NOTHING_TO_COMMIT = "nothing-to-commit"
    AMBIGUOUS_REFERENCE = "ambiguous-reference"
    UNKNOWN_REVISION = "unknown-revision"
    INVALID_REFERENCE = "invalid-reference"
    OUTPUT_LIMIT_EXCEEDED = "output-limit-exceeded"
    TOOL_NOT_INSTALLED = "tool-not-installed"
    INTERNAL = "internal"


class Severity(str, Enum):
    CALLER = "caller"  # mistake in the request
    STATE = "state"  # repository state prevents the action
    ENVIRONMENT = "environment"
    UNEXPECTED = "unexpected"


_SEVERITY: Dict[ErrorKind, Severity] = {
    ErrorKind.VALIDATION_ERROR: Severity.CALLER,
    ErrorKind.NOT_A_REPOSITORY: Severity.CALLER,
    ErrorKind.REPOSITORY_NOT_FOUND: Severity.CALLER,
    ErrorKind.PERMISSION_DENIED: Severity.ENVIRONMENT,
    ErrorKind.PATHSPEC_NOT_FOUND: Severity.CALLER,
    ErrorKind.PATH_NOT_FOUND: Severity.CALLER,
    ErrorKind.PATH_CONFLICT: Severity.STATE,
    ErrorKind.MERGE_CONFLICT: Severity.STATE,
    ErrorKind.BRANCH_EXISTS: Severity.CALLER,
    ErrorKind.BRANCH_NOT_FOUND: Severity.CALLER,
    ErrorKind.BRANCH_NOT_MERGED: Severity.STATE,
    ErrorKind.BRANCH_IN_USE: Severity.STATE,
    ErrorKind.TAG_EXISTS: Severity.CALLER,
    ErrorKind.TAG_NOT_FOUND: Severity.CALLER,
    ErrorKind.REMOTE_EXISTS: Severity.CALLER,
    ErrorKind.REMOTE_NOT_FOUND: Severity.CALLER,
    ErrorKind.REMOTE_UNREACHABLE: Severity.ENVIRONMENT,
    ErrorKind.AUTH_FAILED: Severity.ENVIRONMENT,
    ErrorKind.PUSH_REJECTED: Severity.STATE,
    ErrorKind.NETWORK_ERROR: Severity.ENVIRONMENT,
    ErrorKind.NOTHING_TO_COMMIT: Severity.STATE,
    ErrorKind.AMBIGUOUS_REFERENCE: Severity.CALLER,
    ErrorKind.UNKNOWN_REVISION: Severity.CALLER,
    ErrorKind.INVALID_REFERENCE: Severity.CALLER,
    ErrorKind.OUTPUT_LIMIT_EXCEEDED: Severity.ENVIRONMENT,
    ErrorKind.TOOL_NOT_INSTALLED: Severity.ENVIRONMENT,
    ErrorKind.INTERNAL: Severity.UNEXPECTED,
}


class StructuredError(Exception):
    """The only error type raised across the engine boundary."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = dict(details or {})
        self.operation = operation

    @property
    def severity(self) -> Severity:
        return _SEVERITY.get(self.kind, Severity.UNEXPECTED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
            "details": self.details,
            "operation": self.operation,
        }

    def __repr__(self) -> str:
        return f"StructuredError(kind={self.kind.value!r}, message={self.message!r})"


def validation_error(message: str, operation: Optional[str] = None, **details: Any) -> StructuredError:
    """Build a ``validation-error``; raised before any subprocess runs."""
    return StructuredError(ErrorKind.VALIDATION_ERROR, message, details, operation)


DetailExtractor = Callable[["re.Match[str]", str], Dict[str, Any]]


@dataclass(frozen=True)
class ErrorPattern:
    """One entry of the ordered classification list.

    Named groups in *pattern* become error details; *extract* may add more
    from the full error text.
    """

    pattern: str
    kind: ErrorKind
    extract: Optional[DetailExtractor] = field(default=None, compare=False)

    @property
    def compiled(self) -> "re.Pattern[str]":
        return _compile(self.pattern)

    def search(self, text: str) -> Optional["re.Match[str]"]:
        return self.compiled.search(text)

    def details(self, match: "re.Match[str]", text: str) -> Dict[str, Any]:
        found = {k: v for k, v in match.groupdict().items() if v is not None}
        if self.extract is not None:
            found.update(self.extract(match, text))
        return found


_COMPILED: Dict[str, "re.Pattern[str]"] = {}


def _compile(pattern: str) -> "re.Pattern[str]":
    compiled = _COMPILED.get(pattern)
    if compiled is None:
        compiled = _COMPILED[pattern] = re.compile(pattern, re.IGNORECASE | re.MULTILINE)
    return compiled


# --- detail extractors ---

def _conflicted_files(match: "re.Match[str]", text: str) -> Dict[str, Any]:
    return {"conflicted_files": parse_conflicted_files(text)}


_REJECTED_REF_RE = re.compile(r"^\s*!\s+\[(?:remote )?rejected\]\s+(\S+)", re.MULTILINE)
# push --porcelain: "!\trefs/heads/x:refs/heads/x\t[rejected] (fetch first)"
_REJECTED_PORCELAIN_RE = re.compile(r"^!\t[^:\t]*:(?:refs/heads/)?([^\t]+)\t", re.MULTILINE)


def _rejected_refs(match: "re.Match[str]", text: str) -> Dict[str, Any]:
    refs = _REJECTED_REF_RE.findall(text)
    refs += [r for r in _REJECTED_PORCELAIN_RE.findall(text) if r not in refs]
    return {"rejected_refs": refs}


_OVERWRITTEN_RE = re.compile(
    r"would be (?:overwritten|removed) by \w+:\n((?:\t.+\n?)+)", re.IGNORECASE
)


def _overwritten_files(match: "re.Match[str]", text: str) -> Dict[str, Any]:
    m = _OVERWRITTEN_RE.search(text)
    if not m:
        return {}
    return {"files": [line.strip() for line in m.group(1).splitlines() if line.strip()]}


# Order matters: specific messages before the generic ones that can co-occur
# with them. "not a git repository" is checked first.
DEFAULT_PATTERNS: Tuple[ErrorPattern, ...] = (
    # --- repository ---
    ErrorPattern(r"not a git repository", ErrorKind.NOT_A_REPOSITORY),
    ErrorPattern(r"repository '(?P<url>[^']+)' (?:not found|does not exist)", ErrorKind.REPOSITORY_NOT_FOUND),
    ErrorPattern(r"working directory does not exist: (?P<path>.+)$", ErrorKind.PATH_NOT_FOUND),
    # --- output / limits ---
    ErrorPattern(r"exceeded the maximum buffer size", ErrorKind.OUTPUT_LIMIT_EXCEEDED),
    # --- authentication (before permission: "Permission denied (publickey)") ---
    ErrorPattern(
        r"authentication failed|permission denied \(publickey|could not read username"
        r"|could not read password|terminal prompts disabled|invalid username or password"
        r"|returned error: 40[13]",
        ErrorKind.AUTH_FAILED,
    ),
    ErrorPattern(r"permission denied|eacces|operation not permitted", ErrorKind.PERMISSION_DENIED),
    # --- files ---
    ErrorPattern(
        r"pathspec '(?P<pathspec>.+?)' did not match any file", ErrorKind.PATHSPEC_NOT_FOUND
    ),
    ErrorPattern(r"destination path '(?P<path>[^']+)' already exists", ErrorKind.PATH_CONFLICT),
    ErrorPattern(r"no such path '(?P<path>[^']+)'", ErrorKind.PATH_NOT_FOUND),
    ErrorPattern(r"path '(?P<path>[^']+)' does not exist", ErrorKind.PATH_NOT_FOUND),
    ErrorPattern(r"no such file or directory", ErrorKind.PATH_NOT_FOUND),
    # --- conflicts ---
    ErrorPattern(
        r"^CONFLICT \(|automatic merge failed|could not apply|merge conflict in"
        r"|you have not concluded your merge|unmerged files|failed to merge",
        ErrorKind.MERGE_CONFLICT,
        _conflicted_files,
    ),
    ErrorPattern(
        r"local changes to the following files would be overwritten"
        r"|untracked working tree files would be (?:overwritten|removed)"
        r"|you have unstaged changes|please commit or stash them",
        ErrorKind.PATH_CONFLICT,
        _overwritten_files,
    ),
    # --- branches ---
    ErrorPattern(r"a branch named '(?P<branch>[^']+)' already exists", ErrorKind.BRANCH_EXISTS),
    ErrorPattern(r"branch '(?P<branch>[^']+)' already exists", ErrorKind.BRANCH_EXISTS),
    ErrorPattern(r"branch '(?P<branch>[^']+)' not found", ErrorKind.BRANCH_NOT_FOUND),
    ErrorPattern(r"remote branch (?P<branch>\S+) not found", ErrorKind.BRANCH_NOT_FOUND),
    ErrorPattern(r"the branch '(?P<branch>[^']+)' is not fully merged", ErrorKind.BRANCH_NOT_MERGED),
    ErrorPattern(
        r"cannot delete branch '(?P<branch>[^']+)' (?:checked out|used by worktree)"
        r"|'(?P<checked_out>[^']+)' is already (?:checked out|used by worktree)",
        ErrorKind.BRANCH_IN_USE,
    ),
    # --- tags ---
    ErrorPattern(r"tag '(?P<tag>[^']+)' already exists", ErrorKind.TAG_EXISTS),
    ErrorPattern(r"tag '(?P<tag>[^']+)' not found", ErrorKind.TAG_NOT_FOUND),
    # --- remotes ---
    ErrorPattern(r"remote (?P<remote>\S+) already exists", ErrorKind.REMOTE_EXISTS),
    ErrorPattern(
        r"no such remote:? '?(?P<remote>[^'\s]+)'?|remote '?(?P<missing>[^'\s]+)'? does not exist"
        r"|'(?P<name>[^']+)' does not appear to be a git repository",
        ErrorKind.REMOTE_NOT_FOUND,
    ),
    ErrorPattern(
        r"\[(?:remote )?rejected\]|failed to push some refs|updates were rejected",
        ErrorKind.PUSH_REJECTED,
        _rejected_refs,
    ),
    # --- commits (stdout may list untracked files with arbitrary names) ---
    ErrorPattern(
        r"nothing to commit|nothing added to commit|no changes added to commit",
        ErrorKind.NOTHING_TO_COMMIT,
    ),
    # --- network ---
    ErrorPattern(
        r"could not resolve host|could not read from remote repository|failed to connect"
        r"|unable to access '|connection refused|the remote end hung up|network is unreachable",
        ErrorKind.REMOTE_UNREACHABLE,
    ),
    ErrorPattern(
        r"timed out|operation timeout|network error|connection (?:reset|closed)"
        r"|early eof|rpc failed",
        ErrorKind.NETWORK_ERROR,
    ),
    # --- references ---
    ErrorPattern(
        r"reference is not a tree|not a valid object name:? '?(?P<ref>[^'\s]*)'?"
        r"|is not a valid reference|invalid reference: (?P<reference>\S+)|bad object (?P<object>\S+)",
        ErrorKind.INVALID_REFERENCE,
    ),
    ErrorPattern(
        r"(?:ambiguous argument|bad revision) '(?P<revision>[^']+)'(?:: unknown revision)"
        r"|unknown revision|needed a single revision|invalid upstream '(?P<upstream>[^']+)'",
        ErrorKind.UNKNOWN_REVISION,
    ),
    ErrorPattern(
        r"ambiguous argument '(?P<argument>[^']+)'|refname '(?P<ref>[^']+)' is ambiguous",
        ErrorKind.AMBIGUOUS_REFERENCE,
    ),
    ErrorPattern(r"no stash entries found|bad revision", ErrorKind.INVALID_REFERENCE),
)

_TOOL_MISSING_MARKERS = ("not found", "enoent", "command not found")
_PREFIX_RE = re.compile(r"^(?:(?:stderr|stdout|fatal|error|warning):\s*)+", re.IGNORECASE)


def _is_tool_missing(text: str) -> bool:
    lowered = text.lower()
    return "git" in lowered and any(marker in lowered for marker in _TOOL_MISSING_MARKERS)


def _clean(line: str) -> str:
    return _PREFIX_RE.sub("", line.strip())


def _line_at(text: str, pos: int) -> str:
    start = text.rfind("\n", 0, pos) + 1
    end = text.find("\n", pos)
    return _clean(text[start:] if end == -1 else text[start:end])


def _first_line(error: Union[BaseException, str]) -> str:
    """First meaningful diagnostic line, preferring git's own stderr."""
    if isinstance(error, str):
        sources = [error]
    else:
        sources = [
            getattr(error, "stderr", "") or "",
            getattr(error, "message", "") or str(error),
        ]
    for source in sources:
        for line in source.splitlines():
            if line.strip() and not line.lower().startswith("hint:"):
                return _clean(line)
    return ""


class ErrorClassifier:
    """Map raw failures to a :class:`StructuredError` by first-match."""

    def __init__(self, patterns: Optional[Sequence[ErrorPattern]] = None) -> None:
        self.patterns: Tuple[ErrorPattern, ...] = tuple(
            DEFAULT_PATTERNS if patterns is None else patterns
        )

    def with_patterns_first(self, extra: Iterable[ErrorPattern]) -> "ErrorClassifier":
        """Return a classifier that tests *extra* before the current list."""
        return ErrorClassifier((*extra, *self.patterns))

    def classify(self, error: Union[BaseException, str], operation: str = "unknown") -> StructuredError:
        if isinstance(error, StructuredError):
            return error

        text = error if isinstance(error, str) else str(error)
        details: Dict[str, Any] = {}
        exit_code = getattr(error, "exit_code", None)
        if exit_code is not None:
            details["exit_code"] = exit_code

        for pattern in self.patterns:
            match = pattern.search(text)
            if match:
                details.update(pattern.details(match, text))
                return StructuredError(
                    pattern.kind, _message(operation, _line_at(text, match.start())), details, operation
                )

        if _is_tool_missing(text):
            return StructuredError(
                ErrorKind.TOOL_NOT_INSTALLED,
                "git is not installed or not on PATH",
                details,
                operation,
            )
        return StructuredError(ErrorKind.INTERNAL, _message(operation, _first_line(error)), details, operation)


def _message(operation: str, summary: str) -> str:
    return f"git {operation} failed: {summary}" if summary else f"git {operation} failed"


def load_custom_patterns(path: Union[str, Path]) -> List[ErrorPattern]:
    """Load site-specific patterns from a YAML file.

    Expected shape::

        patterns:
          - pattern: "pre-receive hook declined"
            kind: push-rejected
    """
    import yaml

    from gitdriver.config.loader import ConfigError

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read error patterns from {path}: {exc}") from exc

    entries = data.get("patterns", []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ConfigError(f"{path}: 'patterns' must be a list")

    patterns: List[ErrorPattern] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or "pattern" not in entry or "kind" not in entry:
            raise ConfigError(f"{path}: pattern #{i + 1} needs 'pattern' and 'kind'")
        try:
            kind = ErrorKind(entry["kind"])
        except ValueError:
            raise ConfigError(f"{path}: unknown error kind {entry['kind']!r}") from None
        try:
            re.compile(entry["pattern"])
        except re.error as exc:
            raise ConfigError(f"{path}: invalid regex {entry['pattern']!r}: {exc}") from exc
        patterns.append(ErrorPattern(pattern=str(entry["pattern"]), kind=kind))
    return patterns
