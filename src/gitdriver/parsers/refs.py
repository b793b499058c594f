"""Tag and remote listings."""

from __future__ import annotations

from typing import Dict, List, Optional

from gitdriver.git.delimiters import field, format_option, split_records
from gitdriver.models.results import RemoteInfo, TagInfo

# name, object, peeled object (annotated only), object type, subject, tagger, tagger date
TAG_FORMAT = format_option(
    "%(refname:strip=2)",
    "%(objectname)",
    "%(*objectname)",
    "%(objecttype)",
    "%(contents:subject)",
    "%(taggername) %(taggeremail)",
    "%(taggerdate:unix)",
)


def parse_tag_list(output: str) -> List[TagInfo]:
    tags: List[TagInfo] = []
    for fields in split_records(output):
        name = field(fields, 0).strip()
        if not name:
            continue
        annotated = field(fields, 3).strip() == "tag"
        peeled = field(fields, 2).strip()
        tagger = field(fields, 5).strip()
        stamp = field(fields, 6).strip()
        message = field(fields, 4)
        tags.append(
            TagInfo(
                name=name,
                commit=peeled if annotated and peeled else field(fields, 1).strip(),
                annotated=annotated,
                message=message if annotated and message else None,
                tagger=tagger if annotated and tagger else None,
                timestamp=int(stamp) if stamp.isdigit() else None,
            )
        )
    return tags


def parse_remote_list(output: str) -> List[RemoteInfo]:
    """Group ``git remote -v`` lines by name; push URL defaults to fetch URL."""
    order: List[str] = []
    fetch: Dict[str, str] = {}
    push: Dict[str, str] = {}
    for line in output.splitlines():
        # "<name>\t<url> (fetch)"; local-path URLs may contain spaces
        name, tab, rest = line.strip().partition("\t")
        url, marker, kind = rest.rpartition(" (")
        if not tab or not marker or kind not in ("fetch)", "push)"):
            continue
        url = url.strip()
        if not name or not url:
            continue
        if name not in order:
            order.append(name)
        target = fetch if kind == "fetch)" else push
        target.setdefault(name, url)

    remotes: List[RemoteInfo] = []
    for name in order:
        fetch_url: Optional[str] = fetch.get(name) or push.get(name)
        remotes.append(
            RemoteInfo(name=name, fetch_url=fetch_url or "", push_url=push.get(name) or fetch_url or "")
        )
    return remotes
