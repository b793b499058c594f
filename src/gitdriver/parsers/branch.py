"""Parser for ``git branch -vv --no-abbrev`` output.

Line shapes::

    * main      <hash> [origin/main: ahead 1, behind 2] subject
      dev       <hash> subject
    + feature   <hash> (/path/to/worktree) subject
      remotes/origin/HEAD -> origin/main
    * (HEAD detached at abc1234) <hash> subject

``*`` marks the current branch and ``+`` one checked out in another
worktree. Symbolic ``->`` lines and detached-HEAD lines are skipped.
"""

from __future__ import annotations

import re
from typing import List, Optional

from gitdriver.models.results import BranchInfo

_LINE_RE = re.compile(r"^(?P<marker>[*+ ]) (?P<name>\S+)\s+(?P<hash>[0-9a-f]{4,})\b(?:\s+(?P<rest>.*))?$")
_UPSTREAM_RE = re.compile(r"^\[(?P<upstream>[^\]:]+)(?::\s*(?P<track>[^\]]*))?\]\s*")
_WORKTREE_RE = re.compile(r"^\((?P<path>[^)]+)\)\s*")
_AHEAD_RE = re.compile(r"ahead (\d+)")
_BEHIND_RE = re.compile(r"behind (\d+)")

REMOTE_PREFIX = "remotes/"


def _parse_line(line: str, remote_only: bool) -> Optional[BranchInfo]:
    if " -> " in line:
        return None
    m = _LINE_RE.match(line)
    if not m:
        return None
    name = m.group("name")
    if name.startswith("("):
        return None  # detached HEAD / rebase in progress

    remote = remote_only
    if name.startswith(REMOTE_PREFIX):
        name = name[len(REMOTE_PREFIX):]
        remote = True

    rest = m.group("rest") or ""
    upstream: Optional[str] = None
    ahead: Optional[int] = None
    behind: Optional[int] = None
    gone = False
    um = _UPSTREAM_RE.match(rest)
    if um:
        upstream = um.group("upstream")
        track = um.group("track") or ""
        if track.strip() == "gone":
            gone = True
        else:
            a = _AHEAD_RE.search(track)
            b = _BEHIND_RE.search(track)
            ahead = int(a.group(1)) if a else 0
            behind = int(b.group(1)) if b else 0
        rest = rest[um.end():]

    worktree_path: Optional[str] = None
    if m.group("marker") == "+":
        wm = _WORKTREE_RE.match(rest)
        if wm:
            worktree_path = wm.group("path")
            rest = rest[wm.end():]

    return BranchInfo(
        name=name,
        current=m.group("marker") == "*",
        commit_hash=m.group("hash"),
        remote=remote,
        upstream=upstream,
        ahead=ahead,
        behind=behind,
        upstream_gone=gone,
        worktree_path=worktree_path,
        subject=rest.strip(),
    )


def parse_branch_list(output: str, remote_only: bool = False) -> List[BranchInfo]:
    """Parse verbose branch listing. *remote_only* is set for ``branch -r``."""
    branches: List[BranchInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        info = _parse_line(line.rstrip("\r"), remote_only)
        if info is not None:
            branches.append(info)
    return branches
