"""Per-call runtime shared by the operation functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gitdriver.config.schema import GitDriverConfig
from gitdriver.git.command import build
from gitdriver.git.executor import GitCommandError, GitExecutor
from gitdriver.git.models import OperationContext, RawExecutionResult
from gitdriver.safety.protection import BranchProtection


@dataclass(frozen=True)
class Runtime:
    """Everything one operation call needs. Built fresh per call."""

    executor: GitExecutor
    ctx: OperationContext
    config: GitDriverConfig
    protection: BranchProtection
    operation: str = "unknown"

    @property
    def cwd(self) -> str:
        return self.ctx.working_directory

    async def git(
        self,
        command: str,
        *args: str,
        cwd: Optional[str] = None,
        network: Optional[bool] = None,
        max_output_bytes: Optional[int] = None,
    ) -> RawExecutionResult:
        spec = build(command, args)
        return await self.executor.run(
            spec,
            cwd or self.cwd,
            self.ctx,
            network=network,
            max_output_bytes=max_output_bytes,
        )

    async def git_large(self, command: str, *args: str) -> RawExecutionResult:
        """Run with the larger output ceiling used for diff and show."""
        return await self.git(
            command, *args, max_output_bytes=self.config.execution.diff_max_output_bytes
        )


async def current_branch(rt: Runtime, cwd: Optional[str] = None) -> Optional[str]:
    """Short name of the checked-out branch, or None when HEAD is detached."""
    try:
        result = await rt.git("symbolic-ref", "--short", "-q", "HEAD", cwd=cwd)
    except GitCommandError as exc:
        if exc.exit_code == 1:
            return None
        raise
    return result.stdout.strip() or None


async def head_hash(rt: Runtime) -> str:
    result = await rt.git("rev-parse", "HEAD")
    return result.stdout.strip()


def combined(result: RawExecutionResult) -> str:
    return f"{result.stdout}\n{result.stderr}"
