"""JSON rendering of operation results and structured errors."""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any, Dict

from gitdriver import __version__
from gitdriver.git.errors import StructuredError


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_dict(result: Any, *, operation: str = "") -> Dict[str, Any]:
    """Convert a result dataclass (or a StructuredError) to a JSON-serialisable dict."""
    if isinstance(result, StructuredError):
        return {"version": __version__, "ok": False, "operation": result.operation or operation, "error": result.to_dict()}
    if not dataclasses.is_dataclass(result) or isinstance(result, type):
        raise TypeError(f"Cannot render {type(result).__name__} as a result")
    return {
        "version": __version__,
        "ok": True,
        "operation": operation,
        "type": type(result).__name__,
        "result": _plain(dataclasses.asdict(result)),
    }


def render(result: Any, *, operation: str = "") -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, operation=operation), indent=2, default=str)
