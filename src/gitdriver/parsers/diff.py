"""Unified diff and ``--stat`` parsing.

The per-file walk handles binary markers, renames, copies, mode-only
changes, new and deleted files. Totals come from the ``--stat`` summary
line rather than from counting hunk lines.
"""

from __future__ import annotations

import re
from typing import List, Optional

from gitdriver.models.results import DiffFile, DiffStat, FileStatus

# --- Regex patterns for diff parsing ---

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_BINARY_RE = re.compile(r"^Binary files .* and .* differ$")
_GIT_BINARY_PATCH_RE = re.compile(r"^GIT binary patch$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_COPY_FROM_RE = re.compile(r"^copy from (.+)$")
_COPY_TO_RE = re.compile(r"^copy to (.+)$")
_OLD_MODE_RE = re.compile(r"^old mode \d+$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")
_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+\d+(?:,\d+)? @@")

# --- --stat output ---

_FILES_CHANGED_RE = re.compile(r"(\d+) files? changed")
_INSERTIONS_RE = re.compile(r"(\d+) insertions?\(\+\)")
_DELETIONS_RE = re.compile(r"(\d+) deletions?\(-\)")
_STAT_FILE_RE = re.compile(r"^\s(?P<path>\S.*?)\s+\|\s+(?:\d+|Bin\b)")


class DiffParser:
    """Walk unified diff text and collect one DiffFile per ``diff --git`` block."""

    def __init__(self, diff_text: str) -> None:
        self._lines = [line.rstrip("\r") for line in diff_text.splitlines()]

    def files(self) -> List[DiffFile]:
        result: List[DiffFile] = []
        idx = 0
        total = len(self._lines)

        while idx < total:
            m = _DIFF_HEADER_RE.match(self._lines[idx])
            if not m:
                idx += 1
                continue

            old_file: Optional[str] = m.group(1)
            current_file = m.group(2)
            status = FileStatus.MODIFIED
            is_mode_change = False
            is_binary = False
            idx += 1

            # Sub-headers up to the first hunk or the next file
            while idx < total:
                sub = self._lines[idx]
                if _DIFF_HEADER_RE.match(sub):
                    break
                if _HUNK_HEADER_RE.match(sub):
                    idx += 1
                    break
                if _OLD_MODE_RE.match(sub):
                    is_mode_change = True
                elif _DELETED_FILE_RE.match(sub):
                    status = FileStatus.DELETED
                elif _NEW_FILE_RE.match(sub):
                    status = FileStatus.ADDED
                elif (rm := _RENAME_FROM_RE.match(sub)):
                    old_file = rm.group(1)
                    status = FileStatus.RENAMED
                elif (rt := _RENAME_TO_RE.match(sub)):
                    current_file = rt.group(1)
                elif (cm := _COPY_FROM_RE.match(sub)):
                    old_file = cm.group(1)
                    status = FileStatus.COPIED
                elif (ct := _COPY_TO_RE.match(sub)):
                    current_file = ct.group(1)
                elif _BINARY_RE.match(sub) or _GIT_BINARY_PATCH_RE.match(sub):
                    is_binary = True
                idx += 1

            has_hunks = self._has_hunks_before_next_file(idx - 1, total)
            if is_mode_change and status == FileStatus.MODIFIED and not has_hunks and not is_binary:
                status = FileStatus.MODE_CHANGED

            result.append(
                DiffFile(
                    path=current_file,
                    old_path=old_file if status in (FileStatus.RENAMED, FileStatus.COPIED) else None,
                    status=status,
                    binary=is_binary,
                )
            )

        return result

    def _has_hunks_before_next_file(self, idx: int, total: int) -> bool:
        """Check if there are hunk headers ahead for the current file."""
        while idx < total:
            line = self._lines[idx]
            if _HUNK_HEADER_RE.match(line):
                return True
            if _DIFF_HEADER_RE.match(line):
                return False
            idx += 1
        return False


def parse_diff_files(diff_text: str) -> List[DiffFile]:
    return DiffParser(diff_text).files()


def has_binary(diff_text: str) -> bool:
    return "Binary files" in diff_text


def parse_diff_stat(stat_text: str) -> DiffStat:
    """Totals from the ``N files changed, X insertions(+), Y deletions(-)`` line."""
    for line in reversed(stat_text.splitlines()):
        files = _FILES_CHANGED_RE.search(line)
        if files:
            ins = _INSERTIONS_RE.search(line)
            dels = _DELETIONS_RE.search(line)
            return DiffStat(
                files_changed=int(files.group(1)),
                insertions=int(ins.group(1)) if ins else 0,
                deletions=int(dels.group(1)) if dels else 0,
            )
    return DiffStat()


def parse_stat_files(stat_text: str) -> List[str]:
    """Paths from ``path | N +-`` lines printed by diff --stat, merge and pull."""
    return [m.group("path") for m in map(_STAT_FILE_RE.match, stat_text.splitlines()) if m]
