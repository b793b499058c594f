"""Protected-branch guard for destructive operations."""

from __future__ import annotations

from typing import Iterable, Optional

from gitdriver.config.schema import DEFAULT_PROTECTED_BRANCHES
from gitdriver.git.errors import validation_error

_HEADS_PREFIX = "refs/heads/"


class BranchProtection:
    """Reject destructive actions on protected branches unless confirmed.

    Names are compared case-insensitively. With ``enforce=False`` every
    check passes.
    """

    def __init__(self, protected_branches: Optional[Iterable[str]] = None, enforce: bool = True) -> None:
        names = DEFAULT_PROTECTED_BRANCHES if protected_branches is None else protected_branches
        self.protected = frozenset(n.strip().lower() for n in names if n.strip())
        self.enforce = enforce

    def is_protected(self, branch: Optional[str]) -> bool:
        if not self.enforce or not branch:
            return False
        if branch.startswith(_HEADS_PREFIX):
            branch = branch[len(_HEADS_PREFIX):]
        return branch.lower() in self.protected

    def check(
        self,
        branch: Optional[str],
        action: str,
        confirmed: bool = False,
        operation: Optional[str] = None,
    ) -> None:
        """Raise ``validation-error`` for an unconfirmed *action* on a protected branch."""
        if confirmed or not self.is_protected(branch):
            return
        raise validation_error(
            f"Refusing to {action} protected branch '{branch}' without explicit confirmation",
            operation,
            branch=branch,
            action=action,
            requires_confirmation=True,
        )
