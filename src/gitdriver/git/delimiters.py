"""Delimiter protocol for custom git ``--format`` strings.

Git placeholders are joined with FIELD_DELIMITER and each record is
terminated with RECORD_DELIMITER. Both are two-character control sequences,
so a subject, author name or multi-line body containing either control
character on its own still splits correctly.

Parsing always splits on records first, then on fields inside each record.
"""

from __future__ import annotations

from typing import List, Tuple

FIELD_DELIMITER = "\x1f\x1d"
RECORD_DELIMITER = "\x1e\x1d"


def format_string(*placeholders: str) -> str:
    """Join git placeholders into one delimited record format."""
    return FIELD_DELIMITER.join(placeholders) + RECORD_DELIMITER


def format_option(*placeholders: str) -> str:
    """Return a ``--format=...`` argument for the given placeholders."""
    return f"--format={format_string(*placeholders)}"


def split_records(output: str) -> List[List[str]]:
    """Split delimited output into a list of field lists.

    The final record delimiter leaves a trailing (whitespace-only) chunk
    which is dropped, as are the newlines git inserts between records.
    """
    records: List[List[str]] = []
    for chunk in output.split(RECORD_DELIMITER):
        chunk = chunk.strip("\r\n")
        if not chunk.strip():
            continue
        records.append(chunk.split(FIELD_DELIMITER))
    return records


def split_first_record(output: str) -> Tuple[List[str], str]:
    """Split off the first record and return ``(fields, remainder)``.

    Used where a delimited header is followed by free-form git output, e.g.
    ``git show --format=<header> --name-only``.
    """
    head, sep, rest = output.partition(RECORD_DELIMITER)
    if not sep:
        return [], output
    return head.strip("\r\n").split(FIELD_DELIMITER), rest


def field(fields: List[str], index: int, default: str = "") -> str:
    """Return ``fields[index]`` or *default* when the record is short."""
    return fields[index] if index < len(fields) else default
