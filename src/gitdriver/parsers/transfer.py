"""Ref-update lines printed by fetch, pull (stderr) and ``push --porcelain`` (stdout)."""

from __future__ import annotations

import re
from typing import List

from gitdriver.models.results import RefUpdate

_FETCH_LINE_RE = re.compile(
    r"^ (?P<flag>[ +\-x!*=t]) (?P<summary>\[[^\]]+\]|\S+)\s+(?P<source>\S+)\s+->\s+(?P<dest>\S+)"
    r"(?:\s+\((?P<reason>[^)]*)\))?\s*$"
)
_PUSH_SUMMARY_RE = re.compile(r"^(?P<summary>\[[^\]]+\]|\S+)(?:\s+\((?P<reason>[^)]*)\))?$")

FLAG_DELETED = "-"
FLAG_REJECTED = "!"
FLAG_UP_TO_DATE = "="


def parse_fetch_updates(output: str) -> List[RefUpdate]:
    updates: List[RefUpdate] = []
    for line in output.splitlines():
        m = _FETCH_LINE_RE.match(line.rstrip("\r"))
        if m:
            updates.append(
                RefUpdate(
                    flag=m.group("flag"),
                    summary=m.group("summary"),
                    source=m.group("source"),
                    destination=m.group("dest"),
                    reason=m.group("reason"),
                )
            )
    return updates


def parse_push_porcelain(output: str) -> List[RefUpdate]:
    """``<flag>\\t<from>:<to>\\t<summary> (<reason>)`` lines."""
    updates: List[RefUpdate] = []
    for line in output.splitlines():
        parts = line.rstrip("\r").split("\t")
        if len(parts) < 3 or len(parts[0]) != 1:
            continue
        source, _, destination = parts[1].partition(":")
        sm = _PUSH_SUMMARY_RE.match(parts[2].strip())
        updates.append(
            RefUpdate(
                flag=parts[0],
                summary=sm.group("summary") if sm else parts[2].strip(),
                source=source,
                destination=destination,
                reason=sm.group("reason") if sm else None,
            )
        )
    return updates


def transferred(updates: List[RefUpdate]) -> List[str]:
    """Destinations that actually moved (not deleted, rejected or unchanged)."""
    skip = (FLAG_DELETED, FLAG_REJECTED, FLAG_UP_TO_DATE)
    return [u.destination for u in updates if u.flag not in skip]


def deleted(updates: List[RefUpdate]) -> List[str]:
    return [u.destination for u in updates if u.flag == FLAG_DELETED]
