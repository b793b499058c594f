"""Line-oriented output of add, reset and clean."""

from __future__ import annotations

import re
from typing import List, Tuple

_ADD_RE = re.compile(r"^(?:add|remove) '(?P<path>.+)'$")
_CLEAN_RE = re.compile(r"^(?:Removing|Would remove) (?P<path>.+)$")
_RESET_RE = re.compile(r"^[MADTU]\t(?P<path>.+)$")


def parse_add_verbose(output: str) -> List[str]:
    """Paths reported by ``git add --verbose``."""
    return [m.group("path") for m in map(_ADD_RE.match, output.splitlines()) if m]


def parse_reset_output(output: str) -> List[str]:
    """Paths listed under "Unstaged changes after reset:"."""
    return [m.group("path") for m in map(_RESET_RE.match, output.splitlines()) if m]


def parse_clean_output(output: str) -> Tuple[List[str], List[str]]:
    """Split ``Removing`` / ``Would remove`` lines into (files, directories)."""
    files: List[str] = []
    directories: List[str] = []
    for line in output.splitlines():
        m = _CLEAN_RE.match(line.rstrip("\r"))
        if not m:
            continue
        path = m.group("path")
        if path.endswith("/"):
            directories.append(path.rstrip("/"))
        else:
            files.append(path)
    return files, directories
