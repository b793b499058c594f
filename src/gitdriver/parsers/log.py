"""Commit records from the delimited log format (log, commit, show)."""

from __future__ import annotations

from typing import List, Optional, Tuple

from gitdriver.git.delimiters import field, format_option, split_first_record, split_records
from gitdriver.models.results import CommitRecord

# hash, short hash, author name, author email, author time, subject, body, parents
COMMIT_FIELDS = ("%H", "%h", "%an", "%ae", "%at", "%s", "%b", "%P")
COMMIT_FORMAT = format_option(*COMMIT_FIELDS)


def _to_int(value: str, default: int = 0) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def commit_from_fields(fields: List[str]) -> Optional[CommitRecord]:
    """Build a CommitRecord from one delimited record; None if it has no hash."""
    commit_hash = field(fields, 0).strip()
    if not commit_hash:
        return None
    body = field(fields, 6).strip("\n")
    parents = field(fields, 7).split()
    return CommitRecord(
        hash=commit_hash,
        short_hash=field(fields, 1).strip(),
        author=field(fields, 2),
        author_email=field(fields, 3),
        timestamp=_to_int(field(fields, 4)),
        subject=field(fields, 5),
        body=body or None,
        parent_hashes=parents,
    )


def parse_log(output: str) -> List[CommitRecord]:
    """Parse ``git log`` output produced with COMMIT_FORMAT."""
    commits: List[CommitRecord] = []
    for fields in split_records(output):
        record = commit_from_fields(fields)
        if record is not None:
            commits.append(record)
    return commits


def parse_commit_with_files(output: str) -> Tuple[Optional[CommitRecord], List[str]]:
    """Parse ``git show --name-only`` with COMMIT_FORMAT: header, then paths."""
    fields, rest = split_first_record(output)
    record = commit_from_fields(fields) if fields else None
    files = [line.strip() for line in rest.splitlines() if line.strip()]
    return record, files


def parse_commit_with_content(output: str) -> Tuple[Optional[CommitRecord], str]:
    """Parse ``git show`` with COMMIT_FORMAT: header, then the patch or stat."""
    fields, rest = split_first_record(output)
    record = commit_from_fields(fields) if fields else None
    return record, rest.lstrip("\n")
