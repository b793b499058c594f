"""Stash operation (list, push, apply, pop, drop, clear)."""

from __future__ import annotations

from gitdriver.git.errors import validation_error
from gitdriver.models.options import StashOptions
from gitdriver.models.results import (
    StashApplyResult,
    StashClearResult,
    StashDropResult,
    StashListResult,
    StashPushResult,
    StashResult,
)
from gitdriver.operations.common import Runtime, combined
from gitdriver.parsers.reflog import STASH_FORMAT, parse_stash_list
from gitdriver.safety.refs import validate_commit_message, validate_revision

_TOP = "stash@{0}"
_NOTHING_TO_STASH = "No local changes to save"


async def _list(rt: Runtime) -> StashListResult:
    result = await rt.git("stash", "list", STASH_FORMAT)
    return StashListResult(stashes=parse_stash_list(result.stdout))


async def stash(rt: Runtime, options: StashOptions) -> StashResult:
    mode = options.mode

    if mode == "list":
        return await _list(rt)

    if mode == "push":
        args = ["push"]
        if options.include_untracked:
            args.append("--include-untracked")
        if options.keep_index:
            args.append("--keep-index")
        if options.message:
            args += ["-m", validate_commit_message(options.message, operation=rt.operation)]
        result = await rt.git("stash", *args)
        if _NOTHING_TO_STASH in combined(result):
            return StashPushResult(created=None)
        return StashPushResult(created=_TOP)

    if mode in ("apply", "pop"):
        ref = validate_revision(options.stash_ref or _TOP, rt.operation)
        await rt.git("stash", mode, ref)
        return StashApplyResult(applied=ref, mode=mode)

    if mode == "drop":
        ref = validate_revision(options.stash_ref or _TOP, rt.operation)
        await rt.git("stash", "drop", ref)
        return StashDropResult(dropped=ref)

    if mode == "clear":
        count = len((await _list(rt)).stashes)
        await rt.git("stash", "clear")
        return StashClearResult(cleared=count)

    raise validation_error(f"Unknown stash mode {mode!r}", rt.operation)
