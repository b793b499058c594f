"""Provider interface and capability descriptor."""

from __future__ import annotations

import abc
from dataclasses import dataclass, fields
from typing import Any, Iterable, List, Optional

from gitdriver.git.models import OperationContext
from gitdriver.models import options as opts
from gitdriver.models import results as res


@dataclass(frozen=True)
class Capabilities:
    """What a provider can do. Boolean flags plus a repository size ceiling."""

    init: bool = True
    clone: bool = True
    commit: bool = True
    branch: bool = True
    merge: bool = True
    rebase: bool = True
    remote: bool = True
    fetch: bool = True
    push: bool = True
    pull: bool = True
    tag: bool = True
    stash: bool = True
    worktree: bool = True
    blame: bool = True
    reflog: bool = True
    sign_commits: bool = False
    ssh_auth: bool = True
    http_auth: bool = True
    max_repo_size_mb: Optional[int] = None  # None = unlimited

    def supports(self, name: str) -> bool:
        value = getattr(self, name, False)
        return value is True

    def missing(self, required: Iterable[str]) -> List[str]:
        return [name for name in required if not self.supports(name)]

    def flags(self) -> List[str]:
        """Names of every boolean capability that is enabled."""
        return [f.name for f in fields(self) if getattr(self, f.name) is True]


class GitProvider(abc.ABC):
    """A backend able to run every git operation.

    Each operation takes its options dataclass and an
    :class:`OperationContext` and returns a typed result, raising
    :class:`~gitdriver.git.errors.StructuredError` on failure.
    """

    name: str = "abstract"

    @property
    @abc.abstractmethod
    def version(self) -> str: ...

    @property
    @abc.abstractmethod
    def capabilities(self) -> Capabilities: ...

    @abc.abstractmethod
    async def health_check(self) -> bool: ...

    @abc.abstractmethod
    async def execute(self, operation: str, options: Any, ctx: OperationContext) -> Any:
        """Run *operation* by name."""

    # ---- typed entry points ----

    async def init(self, options: opts.InitOptions, ctx: OperationContext) -> res.InitResult:
        return await self.execute("init", options, ctx)

    async def clone(self, options: opts.CloneOptions, ctx: OperationContext) -> res.CloneResult:
        return await self.execute("clone", options, ctx)

    async def status(self, options: opts.StatusOptions, ctx: OperationContext) -> res.StatusResult:
        return await self.execute("status", options, ctx)

    async def add(self, options: opts.AddOptions, ctx: OperationContext) -> res.AddResult:
        return await self.execute("add", options, ctx)

    async def commit(self, options: opts.CommitOptions, ctx: OperationContext) -> res.CommitResult:
        return await self.execute("commit", options, ctx)

    async def log(self, options: opts.LogOptions, ctx: OperationContext) -> res.LogResult:
        return await self.execute("log", options, ctx)

    async def show(self, options: opts.ShowOptions, ctx: OperationContext) -> res.ShowResult:
        return await self.execute("show", options, ctx)

    async def diff(self, options: opts.DiffOptions, ctx: OperationContext) -> res.DiffResult:
        return await self.execute("diff", options, ctx)

    async def branch(self, options: opts.BranchOptions, ctx: OperationContext) -> res.BranchResult:
        return await self.execute("branch", options, ctx)

    async def checkout(self, options: opts.CheckoutOptions, ctx: OperationContext) -> res.CheckoutResult:
        return await self.execute("checkout", options, ctx)

    async def merge(self, options: opts.MergeOptions, ctx: OperationContext) -> Any:
        return await self.execute("merge", options, ctx)

    async def rebase(self, options: opts.RebaseOptions, ctx: OperationContext) -> Any:
        return await self.execute("rebase", options, ctx)

    async def cherry_pick(self, options: opts.CherryPickOptions, ctx: OperationContext) -> Any:
        return await self.execute("cherry_pick", options, ctx)

    async def stash(self, options: opts.StashOptions, ctx: OperationContext) -> res.StashResult:
        return await self.execute("stash", options, ctx)

    async def tag(self, options: opts.TagOptions, ctx: OperationContext) -> res.TagResult:
        return await self.execute("tag", options, ctx)

    async def worktree(self, options: opts.WorktreeOptions, ctx: OperationContext) -> res.WorktreeResult:
        return await self.execute("worktree", options, ctx)

    async def remote(self, options: opts.RemoteOptions, ctx: OperationContext) -> res.RemoteResult:
        return await self.execute("remote", options, ctx)

    async def fetch(self, options: opts.FetchOptions, ctx: OperationContext) -> res.FetchResult:
        return await self.execute("fetch", options, ctx)

    async def pull(self, options: opts.PullOptions, ctx: OperationContext) -> res.PullResult:
        return await self.execute("pull", options, ctx)

    async def push(self, options: opts.PushOptions, ctx: OperationContext) -> res.PushResult:
        return await self.execute("push", options, ctx)

    async def reset(self, options: opts.ResetOptions, ctx: OperationContext) -> res.ResetResult:
        return await self.execute("reset", options, ctx)

    async def clean(self, options: opts.CleanOptions, ctx: OperationContext) -> res.CleanResult:
        return await self.execute("clean", options, ctx)

    async def blame(self, options: opts.BlameOptions, ctx: OperationContext) -> res.BlameResult:
        return await self.execute("blame", options, ctx)

    async def reflog(self, options: opts.ReflogOptions, ctx: OperationContext) -> res.ReflogResult:
        return await self.execute("reflog", options, ctx)
