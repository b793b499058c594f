"""Parser for ``git blame --porcelain``.

Porcelain prints a commit's author metadata only the first time the commit
appears, so metadata is cached per hash and reused for later lines.
"""

from __future__ import annotations

import re
from typing import Dict, List

from gitdriver.models.results import BlameLine

_HEADER_RE = re.compile(r"^(?P<hash>[0-9a-f]{40,64}) (?P<orig>\d+) (?P<final>\d+)(?: \d+)?$")


def parse_blame_porcelain(output: str) -> List[BlameLine]:
    lines: List[BlameLine] = []
    meta_by_hash: Dict[str, Dict[str, str]] = {}
    current_hash = ""
    current_line = 0

    for raw in output.split("\n"):
        if raw.startswith("\t"):
            if not current_hash:
                continue
            meta = meta_by_hash.get(current_hash, {})
            lines.append(
                BlameLine(
                    line_number=current_line,
                    commit_hash=current_hash,
                    author=meta.get("author", ""),
                    author_email=meta.get("author-mail", "").strip("<>"),
                    timestamp=int(meta.get("author-time", "0") or 0),
                    summary=meta.get("summary", ""),
                    content=raw[1:].rstrip("\r"),
                )
            )
            continue

        m = _HEADER_RE.match(raw)
        if m:
            current_hash = m.group("hash")
            current_line = int(m.group("final"))
            meta_by_hash.setdefault(current_hash, {})
            continue

        if current_hash and raw:
            key, _, value = raw.partition(" ")
            meta_by_hash[current_hash].setdefault(key, value)

    return lines
