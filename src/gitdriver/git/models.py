"""Call-scoped data carried through the execution layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class OperationContext:
    """Per-call context. ``working_directory`` is absolute and sanitized."""

    working_directory: str
    tenant_id: str = "default"
    trace_context: Optional[Any] = field(default=None, compare=False)


@dataclass(frozen=True)
class RawExecutionResult:
    """Captured output of one successful git invocation."""

    stdout: str
    stderr: str = ""
