"""Command builder: typed operation arguments to a git argument vector."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class CommandSpec:
    """A git subcommand plus its ordered arguments.

    Every argument is a discrete vector element. Nothing here is ever joined
    into a string or handed to a shell.
    """

    command: str
    args: Tuple[str, ...] = ()

    def argv(self, binary: str = "git", global_options: Sequence[str] = ()) -> List[str]:
        """Return the full argument vector for process creation."""
        return [binary, *global_options, self.command, *self.args]

    def describe(self) -> str:
        """Human-readable rendering for logs and error messages only."""
        return " ".join(["git", self.command, *self.args])


def build(command: str, args: Iterable[str] = ()) -> CommandSpec:
    """Build a CommandSpec. Pure and total: never fails, never touches disk."""
    return CommandSpec(command=command, args=tuple(str(a) for a in args))
