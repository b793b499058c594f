"""Parser for ``git status --porcelain=v2 --branch``."""

from __future__ import annotations

from typing import Dict, List, Optional

from gitdriver.models.results import FileChange, FileStatus, StatusResult

_CODE_TO_STATUS: Dict[str, FileStatus] = {
    "M": FileStatus.MODIFIED,
    "T": FileStatus.TYPE_CHANGED,
    "A": FileStatus.ADDED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
    "C": FileStatus.COPIED,
}


def _changes(xy: str, path: str, old_path: Optional[str], staged: List[FileChange], unstaged: List[FileChange]) -> None:
    index_code, worktree_code = xy[0], xy[1]
    if index_code in _CODE_TO_STATUS:
        staged.append(FileChange(path=path, status=_CODE_TO_STATUS[index_code], old_path=old_path))
    if worktree_code in _CODE_TO_STATUS:
        unstaged.append(FileChange(path=path, status=_CODE_TO_STATUS[worktree_code]))


def parse_status(output: str) -> StatusResult:
    current_branch: Optional[str] = None
    head: Optional[str] = None
    upstream: Optional[str] = None
    ahead: Optional[int] = None
    behind: Optional[int] = None
    staged: List[FileChange] = []
    unstaged: List[FileChange] = []
    untracked: List[str] = []
    conflicted: List[str] = []

    for line in output.splitlines():
        line = line.rstrip("\r")
        if not line:
            continue

        # ---- branch headers ----
        if line.startswith("# "):
            key, _, value = line[2:].partition(" ")
            if key == "branch.oid":
                head = None if value == "(initial)" else value
            elif key == "branch.head":
                current_branch = None if value == "(detached)" else value
            elif key == "branch.upstream":
                upstream = value
            elif key == "branch.ab":
                counts = value.split()
                if len(counts) == 2:
                    ahead = int(counts[0].lstrip("+"))
                    behind = int(counts[1].lstrip("-"))
            continue

        # ---- entries ----
        kind = line[0]
        if kind == "1":
            parts = line.split(" ", 8)
            if len(parts) == 9:
                _changes(parts[1], parts[8], None, staged, unstaged)
        elif kind == "2":
            parts = line.split(" ", 9)
            if len(parts) == 10:
                path, _, old_path = parts[9].partition("\t")
                _changes(parts[1], path, old_path or None, staged, unstaged)
        elif kind == "u":
            parts = line.split(" ", 10)
            if len(parts) == 11:
                conflicted.append(parts[10])
        elif kind == "?":
            untracked.append(line[2:])

    return StatusResult(
        current_branch=current_branch,
        head=head,
        upstream=upstream,
        ahead=ahead,
        behind=behind,
        staged=staged,
        unstaged=unstaged,
        untracked=untracked,
        conflicted=conflicted,
        is_clean=not (staged or unstaged or untracked or conflicted),
    )
