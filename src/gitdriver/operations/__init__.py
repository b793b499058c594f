"""Operation logic: one coroutine per git operation, plus the name registry."""

from typing import Any, Awaitable, Callable, Dict, Tuple

from gitdriver.models import options as opts
from gitdriver.operations.branches import branch, checkout, cherry_pick, merge, rebase
from gitdriver.operations.commits import add, commit, diff, log, show
from gitdriver.operations.common import Runtime
from gitdriver.operations.history import blame, reflog
from gitdriver.operations.remotes import fetch, pull, push, remote
from gitdriver.operations.repository import clean, clone, init, reset, status
from gitdriver.operations.stash import stash
from gitdriver.operations.tags import tag
from gitdriver.operations.worktree import worktree

OperationFn = Callable[[Runtime, Any], Awaitable[Any]]

# operation name -> (coroutine, options class)
OPERATIONS: Dict[str, Tuple[OperationFn, type]] = {
    "init": (init, opts.InitOptions),
    "clone": (clone, opts.CloneOptions),
    "status": (status, opts.StatusOptions),
    "add": (add, opts.AddOptions),
    "commit": (commit, opts.CommitOptions),
    "log": (log, opts.LogOptions),
    "show": (show, opts.ShowOptions),
    "diff": (diff, opts.DiffOptions),
    "branch": (branch, opts.BranchOptions),
    "checkout": (checkout, opts.CheckoutOptions),
    "merge": (merge, opts.MergeOptions),
    "rebase": (rebase, opts.RebaseOptions),
    "cherry_pick": (cherry_pick, opts.CherryPickOptions),
    "stash": (stash, opts.StashOptions),
    "tag": (tag, opts.TagOptions),
    "worktree": (worktree, opts.WorktreeOptions),
    "remote": (remote, opts.RemoteOptions),
    "fetch": (fetch, opts.FetchOptions),
    "pull": (pull, opts.PullOptions),
    "push": (push, opts.PushOptions),
    "reset": (reset, opts.ResetOptions),
    "clean": (clean, opts.CleanOptions),
    "blame": (blame, opts.BlameOptions),
    "reflog": (reflog, opts.ReflogOptions),
}

__all__ = ["OPERATIONS", "OperationFn", "Runtime"]
