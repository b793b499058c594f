"""Parsers for ``git worktree list --porcelain`` and ``git worktree prune -v``."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from gitdriver.models.results import WorktreeInfo

_BRANCH_PREFIX = "refs/heads/"
_PRUNE_RE = re.compile(r"^Removing (?:worktrees/)?(?P<name>[^:]+):")


def _record_to_info(record: Dict[str, Optional[str]]) -> WorktreeInfo:
    branch = record.get("branch")
    if branch and branch.startswith(_BRANCH_PREFIX):
        branch = branch[len(_BRANCH_PREFIX):]
    return WorktreeInfo(
        path=record.get("worktree") or "",
        head=record.get("HEAD"),
        branch=branch,
        bare="bare" in record,
        detached="detached" in record,
        locked="locked" in record,
        locked_reason=record.get("locked") or None,
        prunable="prunable" in record,
        prunable_reason=record.get("prunable") or None,
    )


def parse_worktree_list(output: str) -> List[WorktreeInfo]:
    """Blank-line separated records of ``key value`` lines.

    Bare keywords (``bare``, ``detached``, ``locked``, ``prunable``) are
    flags; ``locked``/``prunable`` may carry a reason after the keyword.
    """
    worktrees: List[WorktreeInfo] = []
    record: Dict[str, Optional[str]] = {}
    for line in output.splitlines():
        line = line.rstrip("\r")
        if not line.strip():
            if "worktree" in record:
                worktrees.append(_record_to_info(record))
            record = {}
            continue
        key, _, value = line.partition(" ")
        record[key] = value if value else None
    if "worktree" in record:
        worktrees.append(_record_to_info(record))
    return worktrees


def parse_worktree_prune(output: str) -> List[str]:
    """Names of administrative entries that were (or would be) pruned."""
    pruned: List[str] = []
    for line in output.splitlines():
        m = _PRUNE_RE.match(line.strip())
        if m:
            pruned.append(m.group("name"))
    return pruned
