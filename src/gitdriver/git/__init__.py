"""Git interface layer: command specs, execution, delimiters, error taxonomy."""

from gitdriver.git.command import CommandSpec, build
from gitdriver.git.errors import (
    DEFAULT_PATTERNS,
    ErrorClassifier,
    ErrorKind,
    ErrorPattern,
    Severity,
    StructuredError,
    load_custom_patterns,
    validation_error,
)
from gitdriver.git.executor import GitCommandError, GitExecutor
from gitdriver.git.models import OperationContext, RawExecutionResult

__all__ = [
    "CommandSpec",
    "DEFAULT_PATTERNS",
    "ErrorClassifier",
    "ErrorKind",
    "ErrorPattern",
    "GitCommandError",
    "GitExecutor",
    "OperationContext",
    "RawExecutionResult",
    "Severity",
    "StructuredError",
    "build",
    "load_custom_patterns",
    "validation_error",
]
