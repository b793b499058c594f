"""Remote management and transfer: remote, fetch, pull, push.

fetch, pull and push are network commands and run under the longer
network timeout.
"""

from __future__ import annotations

from typing import List

from gitdriver.git.errors import validation_error
from gitdriver.models.options import FetchOptions, PullOptions, PushOptions, RemoteOptions
from gitdriver.models.results import (
    FetchResult,
    PullResult,
    PushResult,
    RemoteAddResult,
    RemoteInfo,
    RemoteListResult,
    RemoteRemoveResult,
    RemoteRenameResult,
    RemoteResult,
    RemoteUrlResult,
    RenamedRef,
)
from gitdriver.operations.common import Runtime, combined, current_branch
from gitdriver.operations.repository import validate_url
from gitdriver.parsers.conflicts import is_up_to_date
from gitdriver.parsers.diff import parse_stat_files
from gitdriver.parsers.refs import parse_remote_list
from gitdriver.parsers.transfer import deleted, parse_fetch_updates, parse_push_porcelain, transferred
from gitdriver.safety.refs import validate_ref_name


def _remote_name(rt: Runtime, name: str) -> str:
    return validate_ref_name(name, "remote", rt.operation)


async def remote(rt: Runtime, options: RemoteOptions) -> RemoteResult:
    mode = options.mode

    if mode == "list":
        result = await rt.git("remote", "-v")
        return RemoteListResult(remotes=parse_remote_list(result.stdout))

    if not options.name:
        raise validation_error(f"name is required for remote mode '{mode}'", rt.operation)
    name = _remote_name(rt, options.name)

    if mode == "add":
        url = validate_url(options.url or "", rt.operation)
        await rt.git("remote", "add", name, url)
        return RemoteAddResult(added=RemoteInfo(name=name, fetch_url=url, push_url=url))

    if mode == "remove":
        await rt.git("remote", "remove", name)
        return RemoteRemoveResult(removed=name)

    if mode == "rename":
        new_name = _remote_name(rt, options.new_name or "")
        await rt.git("remote", "rename", name, new_name)
        return RemoteRenameResult(renamed=RenamedRef(from_name=name, to_name=new_name))

    if mode == "get-url":
        args = ["get-url"]
        if options.push:
            args.append("--push")
        result = await rt.git("remote", *args, name)
        return RemoteUrlResult(name=name, url=result.stdout.strip(), push=options.push)

    if mode == "set-url":
        url = validate_url(options.url or "", rt.operation)
        args = ["set-url"]
        if options.push:
            args.append("--push")
        await rt.git("remote", *args, name, url)
        return RemoteUrlResult(name=name, url=url, push=options.push, mode="set-url")

    raise validation_error(f"Unknown remote mode {mode!r}", rt.operation)


async def fetch(rt: Runtime, options: FetchOptions) -> FetchResult:
    name = _remote_name(rt, options.remote)
    args: List[str] = []
    if options.prune:
        args.append("--prune")
    if options.tags:
        args.append("--tags")
    if options.depth is not None:
        if options.depth < 1:
            raise validation_error("depth must be a positive integer", rt.operation, depth=options.depth)
        args.append(f"--depth={options.depth}")
    args.append(name)
    if options.refspec:
        if options.refspec.startswith("-"):
            raise validation_error(f"Refspec {options.refspec!r} must not start with '-'", rt.operation)
        args.append(options.refspec)

    result = await rt.git("fetch", *args)
    updates = parse_fetch_updates(result.stderr)
    return FetchResult(remote=name, updates=updates, fetched_refs=transferred(updates), pruned_refs=deleted(updates))


async def pull(rt: Runtime, options: PullOptions) -> PullResult:
    name = _remote_name(rt, options.remote)
    if options.rebase and options.fast_forward_only:
        raise validation_error("rebase and fast_forward_only are mutually exclusive", rt.operation)
    branch = validate_ref_name(options.branch, "branch", rt.operation) if options.branch else None

    if options.rebase:
        args, strategy = ["--rebase"], "rebase"
    elif options.fast_forward_only:
        args, strategy = ["--ff-only"], "fast-forward"
    else:
        args, strategy = ["--no-rebase"], "merge"
    args.append(name)
    if branch:
        args.append(branch)

    result = await rt.git("pull", *args)
    return PullResult(
        remote=name,
        branch=branch or await current_branch(rt),
        strategy=strategy,  # type: ignore[arg-type]
        already_up_to_date=is_up_to_date(combined(result)),
        updates=parse_fetch_updates(result.stderr),
        files_changed=parse_stat_files(result.stdout),
    )


async def push(rt: Runtime, options: PushOptions) -> PushResult:
    name = _remote_name(rt, options.remote)
    branch = options.branch or await current_branch(rt)
    if not branch and not options.tags:
        raise validation_error("No branch given and HEAD is detached", rt.operation)
    if branch:
        branch = validate_ref_name(branch, "branch", rt.operation)
    remote_branch = validate_ref_name(options.remote_branch, "branch", rt.operation) if options.remote_branch else None
    target = remote_branch or branch

    if options.force or options.force_with_lease:
        rt.protection.check(target, "force push to", options.confirmed, rt.operation)
    if options.delete:
        if not target:
            raise validation_error("A branch is required to delete a remote branch", rt.operation)
        rt.protection.check(target, "delete", options.confirmed, rt.operation)

    args = ["--porcelain"]
    if options.force_with_lease:
        args.append("--force-with-lease")
    elif options.force:
        args.append("--force")
    if options.set_upstream:
        args.append("--set-upstream")
    if options.tags:
        args.append("--tags")
    if options.dry_run:
        args.append("--dry-run")
    if options.delete:
        args += ["--delete", name, target]
    elif branch:
        args += [name, f"{branch}:{remote_branch}" if remote_branch else branch]
    else:
        args.append(name)

    result = await rt.git("push", *args)
    updates = parse_push_porcelain(result.stdout)
    return PushResult(
        remote=name,
        branch=branch,
        upstream_set=options.set_upstream and not options.dry_run,
        pushed_refs=transferred(updates),
        updates=updates,
    )
