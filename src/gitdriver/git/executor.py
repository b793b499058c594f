"""Git subprocess execution: argument vectors only, bounded time and output."""

from __future__ import annotations

import asyncio
import os
from typing import Dict, Mapping, Optional, Sequence, Tuple

from gitdriver.git.command import CommandSpec
from gitdriver.git.models import OperationContext, RawExecutionResult
from gitdriver.log import get_logger

# Subcommands that talk to a remote and get the longer time ceiling.
NETWORK_COMMANDS = frozenset({"clone", "fetch", "pull", "push", "ls-remote"})

DEFAULT_TIMEOUT = 60.0
DEFAULT_NETWORK_TIMEOUT = 300.0
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024

# Stable, non-interactive, untranslated output for the parsers.
GIT_ENV: Dict[str, str] = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_EDITOR": "true",
    "LC_ALL": "C",
    "LANG": "C",
    "LANGUAGE": "C",
}
GIT_GLOBAL_OPTIONS: Tuple[str, ...] = ("-c", "core.quotepath=off", "-c", "color.ui=never")

_READ_CHUNK = 64 * 1024


class GitCommandError(Exception):
    """Raised when git cannot start, exits nonzero, or exceeds a limit.

    Carries the raw output for the error classifier; the provider converts it
    into a StructuredError before anything leaves the engine.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out

    def __str__(self) -> str:
        parts = [self.message]
        if self.stderr.strip():
            parts.append(f"stderr: {self.stderr.strip()}")
        if self.stdout.strip():
            parts.append(f"stdout: {self.stdout.strip()}")
        return "\n".join(parts)


class _OutputLimitExceeded(Exception):
    pass


async def _read_capped(stream: Optional[asyncio.StreamReader], limit: int) -> bytes:
    """Read *stream* to EOF, raising once more than *limit* bytes arrive."""
    if stream is None:
        return b""
    chunks = []
    total = 0
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise _OutputLimitExceeded()
        chunks.append(chunk)
    return b"".join(chunks)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class GitExecutor:
    """Runs one git process per call. Holds configuration only, no call state."""

    def __init__(
        self,
        binary: str = "git",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        network_timeout: float = DEFAULT_NETWORK_TIMEOUT,
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
        global_options: Sequence[str] = GIT_GLOBAL_OPTIONS,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.binary = binary
        self.timeout = timeout
        self.network_timeout = network_timeout
        self.max_output_bytes = max_output_bytes
        self.global_options = tuple(global_options)
        self._extra_env = dict(env or {})

    def _environment(self) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(GIT_ENV)
        env.update(self._extra_env)
        return env

    async def run(
        self,
        spec: CommandSpec,
        cwd: str,
        ctx: Optional[OperationContext] = None,
        *,
        network: Optional[bool] = None,
        timeout: Optional[float] = None,
        max_output_bytes: Optional[int] = None,
    ) -> RawExecutionResult:
        """Execute *spec* in *cwd* and return its output.

        Raises GitCommandError on a nonzero exit, a timeout, an output
        overflow, or when the process cannot be started.
        """
        if network is None:
            network = spec.command in NETWORK_COMMANDS
        time_limit = timeout or (self.network_timeout if network else self.timeout)
        output_limit = max_output_bytes or self.max_output_bytes
        argv = spec.argv(self.binary, self.global_options)

        log = get_logger()
        log.debug(
            "git.exec",
            command=spec.describe(),
            cwd=cwd,
            tenant_id=ctx.tenant_id if ctx else None,
            time_limit=time_limit,
        )

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=cwd,
                env=self._environment(),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            if not os.path.isdir(cwd):
                raise GitCommandError(
                    f"working directory does not exist: {cwd}", command=spec.command
                ) from exc
            raise GitCommandError(
                f"{self.binary}: command not found (is git installed and on PATH?)",
                command=spec.command,
            ) from exc
        except OSError as exc:
            raise GitCommandError(
                f"failed to start {self.binary}: {exc.strerror or exc}", command=spec.command
            ) from exc

        async def _communicate() -> Tuple[bytes, bytes, int]:
            out, err = await asyncio.gather(
                _read_capped(proc.stdout, output_limit),
                _read_capped(proc.stderr, output_limit),
            )
            return out, err, await proc.wait()

        try:
            stdout_b, stderr_b, exit_code = await asyncio.wait_for(_communicate(), timeout=time_limit)
        except asyncio.TimeoutError:
            await self._kill(proc)
            if network:
                message = f"git {spec.command} timed out after {time_limit:g}s"
            else:
                message = f"git {spec.command} exceeded the {time_limit:g}s time limit and was killed"
            raise GitCommandError(message, command=spec.command, timed_out=True) from None
        except _OutputLimitExceeded:
            await self._kill(proc)
            raise GitCommandError(
                f"git {spec.command} output exceeded the maximum buffer size of {output_limit} bytes",
                command=spec.command,
            ) from None

        stdout, stderr = _decode(stdout_b), _decode(stderr_b)
        if exit_code != 0:
            raise GitCommandError(
                f"git {spec.command} exited with code {exit_code}",
                command=spec.command,
                exit_code=exit_code,
                stdout=stdout,
                stderr=stderr,
            )
        return RawExecutionResult(stdout=stdout, stderr=stderr)

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()
