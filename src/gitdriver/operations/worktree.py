"""Worktree operation (list, add, remove, move, prune)."""

from __future__ import annotations

from typing import Optional

from gitdriver.git.errors import validation_error
from gitdriver.models.options import WorktreeOptions
from gitdriver.models.results import (
    RenamedRef,
    WorktreeAddResult,
    WorktreeListResult,
    WorktreeMoveResult,
    WorktreePruneResult,
    WorktreeRemoveResult,
    WorktreeResult,
)
from gitdriver.operations.common import Runtime, combined
from gitdriver.operations.repository import resolve_target
from gitdriver.parsers.worktree import parse_worktree_list, parse_worktree_prune
from gitdriver.safety.refs import validate_ref_name, validate_revision


def _path(rt: Runtime, value: Optional[str], name: str, mode: str) -> str:
    if not value:
        raise validation_error(f"{name} is required for worktree mode '{mode}'", rt.operation)
    return resolve_target(rt, value)


async def worktree(rt: Runtime, options: WorktreeOptions) -> WorktreeResult:
    mode = options.mode

    if mode == "list":
        result = await rt.git("worktree", "list", "--porcelain")
        return WorktreeListResult(worktrees=parse_worktree_list(result.stdout))

    if mode == "prune":
        args = ["prune", "-v"]
        if options.dry_run:
            args.append("--dry-run")
        result = await rt.git("worktree", *args)
        return WorktreePruneResult(pruned=parse_worktree_prune(combined(result)), dry_run=options.dry_run)

    path = _path(rt, options.path, "path", mode)

    if mode == "add":
        if options.branch and options.detach:
            raise validation_error("branch and detach are mutually exclusive", rt.operation)
        args = ["add"]
        if options.force:
            args.append("--force")
        if options.detach:
            args.append("--detach")
        if options.branch:
            args += ["-b", validate_ref_name(options.branch, "branch", rt.operation)]
        args.append(path)
        if options.commitish:
            args.append(validate_revision(options.commitish, rt.operation))
        await rt.git("worktree", *args)
        return WorktreeAddResult(added=path, branch=options.branch)

    if mode == "remove":
        args = ["remove"]
        if options.force:
            args.append("--force")
        await rt.git("worktree", *args, path)
        return WorktreeRemoveResult(removed=path)

    if mode == "move":
        new_path = _path(rt, options.new_path, "new_path", mode)
        await rt.git("worktree", "move", path, new_path)
        return WorktreeMoveResult(moved=RenamedRef(from_name=path, to_name=new_path))

    raise validation_error(f"Unknown worktree mode {mode!r}", rt.operation)
