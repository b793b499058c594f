"""Provider backed by the local ``git`` executable."""

from __future__ import annotations

import dataclasses
import os
from typing import Any, Optional

from gitdriver import __version__
from gitdriver.config.schema import GitDriverConfig
from gitdriver.git.command import build
from gitdriver.git.errors import ErrorClassifier, ErrorKind, StructuredError, load_custom_patterns, validation_error
from gitdriver.git.executor import GitCommandError, GitExecutor
from gitdriver.git.models import OperationContext
from gitdriver.log import get_logger
from gitdriver.operations import OPERATIONS, Runtime
from gitdriver.provider.base import Capabilities, GitProvider
from gitdriver.safety.paths import sanitize_path
from gitdriver.safety.protection import BranchProtection
from gitdriver.safety.workdir import WorkingDirectoryResolver


class CliGitProvider(GitProvider):
    """Runs operations by spawning git.

    Every call re-sanitizes the working directory, runs the operation and
    converts any failure into a :class:`StructuredError`.
    """

    name = "cli"

    def __init__(
        self,
        config: Optional[GitDriverConfig] = None,
        executor: Optional[GitExecutor] = None,
        classifier: Optional[ErrorClassifier] = None,
        resolver: Optional[WorkingDirectoryResolver] = None,
    ) -> None:
        self.config = config or GitDriverConfig()
        self.executor = executor or GitExecutor(
            self.config.git.binary,
            timeout=self.config.execution.timeout,
            network_timeout=self.config.execution.network_timeout,
            max_output_bytes=self.config.execution.max_output_bytes,
        )
        self.classifier = classifier or self._default_classifier()
        self.resolver = resolver or WorkingDirectoryResolver(base_dir=self.config.git.base_dir)
        self.protection = BranchProtection(
            self.config.protection.protected_branches,
            enforce=self.config.protection.enforce,
        )

    def _default_classifier(self) -> ErrorClassifier:
        classifier = ErrorClassifier()
        if self.config.provider.custom_error_patterns:
            classifier = classifier.with_patterns_first(
                load_custom_patterns(self.config.provider.custom_error_patterns)
            )
        return classifier

    @property
    def version(self) -> str:
        return __version__

    @property
    def capabilities(self) -> Capabilities:
        return Capabilities(sign_commits=self.config.git.sign_commits)

    async def health_check(self) -> bool:
        """True when the git binary runs."""
        log = get_logger()
        try:
            result = await self.executor.run(build("--version"), sanitize_path("."))
        except GitCommandError as exc:
            log.warning("provider.unhealthy", provider=self.name, error=str(exc))
            return False
        log.debug("provider.healthy", provider=self.name, git=result.stdout.strip())
        return True

    async def context_for(
        self, path: str, tenant_id: str = "default", trace_context: Optional[Any] = None
    ) -> OperationContext:
        """Build an OperationContext, resolving the session sentinel ``"."``."""
        directory = await self.resolver.resolve(path, tenant_id)
        return OperationContext(working_directory=directory, tenant_id=tenant_id, trace_context=trace_context)

    async def execute(self, operation: str, options: Any, ctx: OperationContext) -> Any:
        entry = OPERATIONS.get(operation)
        if entry is None:
            raise validation_error(f"Unknown operation {operation!r}", operation, known=sorted(OPERATIONS))
        func, options_cls = entry
        if not isinstance(options, options_cls):
            raise validation_error(
                f"{operation} expects {options_cls.__name__}, got {type(options).__name__}", operation
            )

        log = get_logger(
            operation=operation,
            tenant_id=ctx.tenant_id,
            working_directory=ctx.working_directory,
            trace=ctx.trace_context,
        )
        log.debug("operation.start")
        try:
            rt = Runtime(
                executor=self.executor,
                ctx=self._sanitized(ctx),
                config=self.config,
                protection=self.protection,
                operation=operation,
            )
            result = await func(rt, options)
        except StructuredError as exc:
            self._log_failure(log, exc)
            raise
        except Exception as exc:
            error = self.classifier.classify(exc, operation)
            self._log_failure(log, error)
            raise error from None
        log.info("operation.success")
        return result

    def _sanitized(self, ctx: OperationContext) -> OperationContext:
        if not os.path.isabs(ctx.working_directory):
            raise validation_error(
                "Working directory must be an absolute path; resolve it with context_for() first",
                path=ctx.working_directory,
            )
        directory = sanitize_path(ctx.working_directory, root_dir=self.config.git.base_dir)
        if directory == ctx.working_directory:
            return ctx
        return dataclasses.replace(ctx, working_directory=directory)

    @staticmethod
    def _log_failure(log: Any, error: StructuredError) -> None:
        emit = log.error if error.kind is ErrorKind.INTERNAL else log.warning
        emit("operation.failed", kind=error.kind.value, error=error.message, details=error.details)
