"""Logging: structlog loggers backed by the stdlib ``gitdriver`` logger.

The logger is standalone: it never touches the global structlog
configuration, so an embedding application keeps control of its own
logging. Until ``configure_logging`` is called no handler is attached and
only warnings and errors reach stderr (through the stdlib last-resort
handler); after it, records at the configured level go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, TYPE_CHECKING, Any, List, Literal, Optional, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormat = Literal["json", "text"]

_LOGGER_NAME = "gitdriver"
_logger: Optional["FilteringBoundLogger"] = None


def _level_from_string(level: Optional[str]) -> int:
    """Map a level name to a logging level; GITDRIVER_DEBUG forces DEBUG."""
    if os.environ.get("GITDRIVER_DEBUG"):
        return logging.DEBUG
    name = (level or os.environ.get("GITDRIVER_LOG_LEVEL") or "warning").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    @property
    def stream(self) -> IO[str]:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: IO[str]) -> None:
        pass


def _attach(stdlib_logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(handler)
    stdlib_logger.propagate = False


def _create_logger(
    level: Optional[str] = None,
    log_format: LogFormat = "text",
    stream: Optional[IO[str]] = None,
    attach_stderr: bool = False,
) -> "FilteringBoundLogger":
    effective_level = _level_from_string(level)

    stdlib_logger = logging.getLogger(_LOGGER_NAME)
    stdlib_logger.setLevel(effective_level)
    if stream is not None:
        stdlib_logger.handlers.clear()
        _attach(stdlib_logger, logging.StreamHandler(stream))
    elif attach_stderr and not stdlib_logger.handlers:
        _attach(stdlib_logger, _StderrHandler())

    processors: List[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            stdlib_logger,
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def configure_logging(
    level: Optional[str] = None,
    log_format: LogFormat = "text",
    stream: Optional[IO[str]] = None,
) -> "FilteringBoundLogger":
    """(Re)build the package logger.

    Records go to *stream* when given, otherwise to stderr unless the
    ``gitdriver`` logger already has a handler.
    """
    global _logger
    _logger = _create_logger(level, log_format, stream, attach_stderr=True)
    return _logger


def get_logger(**initial_values: Any) -> "FilteringBoundLogger":
    """Return the package logger, optionally bound to *initial_values*."""
    global _logger
    if _logger is None:
        _logger = _create_logger()
    return _logger.bind(**initial_values) if initial_values else _logger
