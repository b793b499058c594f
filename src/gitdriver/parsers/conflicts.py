"""Merge-family output: conflict lines and fast-forward detection."""

from __future__ import annotations

import re
from typing import List, Tuple

_MERGE_CONFLICT_RE = re.compile(r"^CONFLICT \([^)]*\): Merge conflict in (?P<path>.+?)\s*$", re.MULTILINE)
_DELETE_CONFLICT_RE = re.compile(r"^CONFLICT \([^)]*\): (?P<path>.+?) deleted in ", re.MULTILINE)
_ALREADY_UP_TO_DATE_RE = re.compile(r"already up.to.date", re.IGNORECASE)


def parse_conflicted_files(output: str) -> List[str]:
    """Return the paths named by ``CONFLICT (...)`` lines, in order, once each."""
    found: List[Tuple[int, str]] = []
    for regex in (_MERGE_CONFLICT_RE, _DELETE_CONFLICT_RE):
        found.extend((m.start(), m.group("path")) for m in regex.finditer(output))
    paths: List[str] = []
    for _, path in sorted(found):
        if path not in paths:
            paths.append(path)
    return paths


def is_fast_forward(output: str) -> bool:
    return "Fast-forward" in output


def is_up_to_date(output: str) -> bool:
    return bool(_ALREADY_UP_TO_DATE_RE.search(output)) or "is up to date." in output
