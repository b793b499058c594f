"""Branch operations: branch, checkout, merge, rebase, cherry-pick.

Conflicts make git exit nonzero; they surface as ``merge-conflict``
errors carrying the conflicted paths, never as a partial result.
"""

from __future__ import annotations

from typing import List, Optional, Union

from gitdriver.git.errors import validation_error
from gitdriver.models.options import BranchOptions, CheckoutOptions, CherryPickOptions, MergeOptions, RebaseOptions
from gitdriver.models.results import (
    AbortResult,
    BranchCreateResult,
    BranchDeleteResult,
    BranchListResult,
    BranchRenameResult,
    BranchResult,
    CheckoutResult,
    CherryPickResult,
    MergeResult,
    RebaseResult,
    RenamedRef,
)
from gitdriver.operations.common import Runtime, combined, current_branch, head_hash
from gitdriver.parsers.branch import parse_branch_list
from gitdriver.parsers.conflicts import is_fast_forward, is_up_to_date
from gitdriver.parsers.diff import parse_stat_files
from gitdriver.safety.paths import validate_pathspec
from gitdriver.safety.refs import validate_commit_message, validate_ref_name, validate_revision


def _required(value: Optional[str], name: str, rt: Runtime, mode: str) -> str:
    if not value:
        raise validation_error(f"{name} is required for {rt.operation} mode '{mode}'", rt.operation)
    return value


async def branch(rt: Runtime, options: BranchOptions) -> BranchResult:
    mode = options.mode

    if mode == "list":
        args = ["-vv", "--no-abbrev"]
        if options.all:
            args.append("--all")
        elif options.remote:
            args.append("--remotes")
        result = await rt.git("branch", *args)
        remote_only = options.remote and not options.all
        return BranchListResult(branches=parse_branch_list(result.stdout, remote_only=remote_only))

    name = validate_ref_name(_required(options.branch_name, "branch_name", rt, mode), "branch", rt.operation)

    if mode == "create":
        args = []
        if options.force:
            rt.protection.check(name, "force-reset", options.confirmed, rt.operation)
            args.append("--force")
        args.append(name)
        if options.start_point:
            args.append(validate_revision(options.start_point, rt.operation))
        await rt.git("branch", *args)
        return BranchCreateResult(created=name)

    if mode == "delete":
        if options.force:
            rt.protection.check(name, "force delete", options.confirmed, rt.operation)
        await rt.git("branch", "-D" if options.force else "-d", name)
        return BranchDeleteResult(deleted=name)

    if mode == "rename":
        new_name = validate_ref_name(
            _required(options.new_branch_name, "new_branch_name", rt, mode), "branch", rt.operation
        )
        rt.protection.check(name, "rename", options.confirmed, rt.operation)
        await rt.git("branch", "-M" if options.force else "-m", name, new_name)
        return BranchRenameResult(renamed=RenamedRef(from_name=name, to_name=new_name))

    raise validation_error(f"Unknown branch mode {mode!r}", rt.operation)


async def checkout(rt: Runtime, options: CheckoutOptions) -> CheckoutResult:
    target = validate_revision(options.target, rt.operation)

    if options.paths:
        paths = [validate_pathspec(p) for p in options.paths]
        await rt.git("checkout", target, "--", *paths)
        return CheckoutResult(target=target, current_branch=await current_branch(rt), paths_restored=paths)

    args: List[str] = []
    if options.force:
        args.append("--force")
    if options.create_branch:
        args += ["-b", validate_ref_name(target, "branch", rt.operation)]
    else:
        args += [target, "--"]
    await rt.git("checkout", *args)
    return CheckoutResult(
        target=target,
        branch_created=options.create_branch,
        current_branch=await current_branch(rt),
    )


async def merge(rt: Runtime, options: MergeOptions) -> Union[MergeResult, AbortResult]:
    if options.abort:
        await rt.git("merge", "--abort")
        return AbortResult(operation="merge")

    target = validate_revision(_required(options.branch, "branch", rt, "merge"), rt.operation)
    if options.no_fast_forward and options.fast_forward_only:
        raise validation_error("no_fast_forward and fast_forward_only are mutually exclusive", rt.operation)

    args = ["--no-edit"]
    if options.strategy:
        args += ["--strategy", options.strategy]
    if options.no_fast_forward:
        args.append("--no-ff")
    if options.fast_forward_only:
        args.append("--ff-only")
    if options.squash:
        args.append("--squash")
    if options.message:
        args += ["-m", validate_commit_message(options.message, operation=rt.operation)]

    result = await rt.git("merge", *args, target)
    text = combined(result)
    return MergeResult(
        branch=target,
        head=await head_hash(rt),
        fast_forward=is_fast_forward(text),
        already_up_to_date=is_up_to_date(text),
        squashed=options.squash,
        strategy=options.strategy,
        files_changed=parse_stat_files(result.stdout),
    )


async def rebase(rt: Runtime, options: RebaseOptions) -> Union[RebaseResult, AbortResult]:
    mode = options.mode
    if mode == "abort":
        await rt.git("rebase", "--abort")
        return AbortResult(operation="rebase")
    if mode in ("continue", "skip"):
        await rt.git("rebase", f"--{mode}")
        return RebaseResult(head=await head_hash(rt), current_branch=await current_branch(rt), mode=mode)

    upstream = validate_revision(_required(options.upstream, "upstream", rt, mode), rt.operation)
    rebased = options.branch or await current_branch(rt)
    rt.protection.check(rebased, "rebase", options.confirmed, rt.operation)

    args: List[str] = []
    if options.onto:
        args += ["--onto", validate_revision(options.onto, rt.operation)]
    args.append(upstream)
    if options.branch:
        args.append(validate_ref_name(options.branch, "branch", rt.operation))

    result = await rt.git("rebase", *args)
    return RebaseResult(
        head=await head_hash(rt),
        current_branch=await current_branch(rt),
        up_to_date=is_up_to_date(combined(result)),
        mode="start",
    )


async def cherry_pick(rt: Runtime, options: CherryPickOptions) -> Union[CherryPickResult, AbortResult]:
    if options.abort:
        await rt.git("cherry-pick", "--abort")
        return AbortResult(operation="cherry-pick")
    if options.continue_operation:
        await rt.git("cherry-pick", "--continue")
        return CherryPickResult(head=await head_hash(rt), mode="continue")

    if not options.commits:
        raise validation_error("At least one commit is required", rt.operation)
    commits = [validate_revision(c, rt.operation) for c in options.commits]

    args: List[str] = []
    if options.no_commit:
        args.append("--no-commit")
    if options.mainline is not None:
        if options.mainline < 1:
            raise validation_error("mainline must be a positive integer", rt.operation)
        args += ["-m", str(options.mainline)]
    if options.strategy:
        args += ["--strategy", options.strategy]
    if options.signoff:
        args.append("--signoff")

    await rt.git("cherry-pick", *args, *commits)
    return CherryPickResult(head=await head_hash(rt), picked_commits=commits)
