"""Repository-level operations: init, clone, status, clean, reset."""

from __future__ import annotations

import os

from gitdriver.git.errors import validation_error
from gitdriver.models.options import CleanOptions, CloneOptions, InitOptions, ResetOptions, StatusOptions
from gitdriver.models.results import CleanResult, CloneResult, InitResult, ResetResult, StatusResult
from gitdriver.operations.common import Runtime, current_branch
from gitdriver.parsers.files import parse_clean_output, parse_reset_output
from gitdriver.parsers.status import parse_status
from gitdriver.safety.paths import sanitize_path, validate_pathspec
from gitdriver.safety.refs import validate_ref_name, validate_revision


def resolve_target(rt: Runtime, path: str) -> str:
    """Sanitize a path argument; relative paths are taken from the working directory."""
    if not os.path.isabs(path) and rt.config.git.base_dir is None:
        path = os.path.join(rt.cwd, path)
    return sanitize_path(path, root_dir=rt.config.git.base_dir)


def validate_url(url: str, operation: str) -> str:
    if not url or not url.strip():
        raise validation_error("Remote URL must not be empty", operation)
    if url.startswith("-"):
        raise validation_error(f"Remote URL {url!r} must not start with '-'", operation, url=url)
    if "\x00" in url or "\n" in url:
        raise validation_error("Remote URL contains a control character", operation)
    return url


async def init(rt: Runtime, options: InitOptions) -> InitResult:
    path = resolve_target(rt, options.path)
    initial_branch = options.initial_branch or rt.config.git.default_branch
    args = []
    if options.bare:
        args.append("--bare")
    if initial_branch:
        args += ["-b", validate_ref_name(initial_branch, "branch", rt.operation)]

    os.makedirs(path, exist_ok=True)
    await rt.git("init", *args, cwd=path)
    branch = initial_branch or await current_branch(rt, cwd=path)
    return InitResult(path=path, initial_branch=branch, bare=options.bare)


async def clone(rt: Runtime, options: CloneOptions) -> CloneResult:
    url = validate_url(options.remote_url, rt.operation)
    local_path = resolve_target(rt, options.local_path)
    args = []
    if options.branch:
        args += ["--branch", validate_ref_name(options.branch, "branch", rt.operation)]
    if options.depth is not None:
        if options.depth < 1:
            raise validation_error("depth must be a positive integer", rt.operation, depth=options.depth)
        args += ["--depth", str(options.depth)]
    if options.bare:
        args.append("--bare")
    if options.mirror:
        args.append("--mirror")
    if options.recurse_submodules:
        args.append("--recurse-submodules")

    parent = os.path.dirname(local_path)
    os.makedirs(parent, exist_ok=True)
    await rt.git("clone", *args, "--", url, local_path, cwd=parent)
    branch = options.branch or await current_branch(rt, cwd=local_path)
    return CloneResult(local_path=local_path, remote_url=url, branch=branch)


async def status(rt: Runtime, options: StatusOptions) -> StatusResult:
    args = ["--porcelain=v2", "--branch"]
    args.append("--untracked-files=all" if options.include_untracked else "--untracked-files=no")
    if options.ignore_submodules:
        args.append("--ignore-submodules=all")
    result = await rt.git("status", *args)
    return parse_status(result.stdout)


async def clean(rt: Runtime, options: CleanOptions) -> CleanResult:
    if not options.force and not options.dry_run:
        raise validation_error("clean deletes untracked files; pass force=True or dry_run=True", rt.operation)
    args = ["-n" if options.dry_run else "-f"]
    if options.directories:
        args.append("-d")
    if options.ignored:
        args.append("-x")
    result = await rt.git("clean", *args)
    files, directories = parse_clean_output(result.stdout)
    return CleanResult(files_removed=files, directories_removed=directories, dry_run=options.dry_run)


async def reset(rt: Runtime, options: ResetOptions) -> ResetResult:
    commit = validate_revision(options.commit, rt.operation)
    paths = [validate_pathspec(p) for p in options.paths]
    if paths and options.mode != "mixed":
        raise validation_error(f"Cannot do a {options.mode} reset with paths", rt.operation)
    if options.mode == "hard" and not paths:
        rt.protection.check(await current_branch(rt), "hard reset", options.confirmed, rt.operation)
    resolved = (await rt.git("rev-parse", "--verify", commit)).stdout.strip()

    if paths:
        await rt.git("reset", "-q", commit, "--", *paths)
        return ResetResult(mode=options.mode, commit=resolved, files_reset=paths)

    result = await rt.git("reset", f"--{options.mode}", commit)
    return ResetResult(mode=options.mode, commit=resolved, files_reset=parse_reset_output(result.stdout))
