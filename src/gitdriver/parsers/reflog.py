"""Reflog and stash-list parsers (both read reflog selectors)."""

from __future__ import annotations

import re
from typing import List, Optional

from gitdriver.git.delimiters import field, format_option, split_records
from gitdriver.models.results import ReflogEntry, StashInfo

# hash, selector (HEAD@{n}), reflog subject, committer time
REFLOG_FORMAT = format_option("%H", "%gd", "%gs", "%ct")
# selector (stash@{n}), reflog subject, committer time
STASH_FORMAT = format_option("%gd", "%gs", "%ct")

_SELECTOR_RE = re.compile(r"\{([^}]+)\}")
_STASH_BRANCH_RE = re.compile(r"^(?:WIP on|On) (?P<branch>[^:]+):\s*(?P<rest>.*)$", re.DOTALL)


def _to_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_reflog(output: str) -> List[ReflogEntry]:
    entries: List[ReflogEntry] = []
    for fields in split_records(output):
        commit_hash = field(fields, 0).strip()
        if not commit_hash:
            continue
        selector = field(fields, 1)
        subject = field(fields, 2)
        m = _SELECTOR_RE.search(selector)
        kind, sep, message = subject.partition(":")
        entries.append(
            ReflogEntry(
                hash=commit_hash,
                selector=selector,
                action=m.group(1) if m else "",
                kind=kind.strip() if sep else "",
                message=message.strip() if sep else subject.strip(),
                timestamp=_to_int(field(fields, 3)),
            )
        )
    return entries


def parse_stash_list(output: str) -> List[StashInfo]:
    stashes: List[StashInfo] = []
    for fields in split_records(output):
        ref = field(fields, 0).strip()
        m = _SELECTOR_RE.search(ref)
        if not m:
            continue
        subject = field(fields, 1)
        branch: Optional[str] = None
        bm = _STASH_BRANCH_RE.match(subject)
        if bm:
            branch = bm.group("branch").strip()
        stashes.append(
            StashInfo(
                ref=ref,
                index=_to_int(m.group(1)),
                branch=branch,
                description=subject,
                timestamp=_to_int(field(fields, 2)),
            )
        )
    return stashes
