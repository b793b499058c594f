"""Staging and history-writing operations: add, commit, log, show, diff."""

from __future__ import annotations

from typing import List, Optional

from gitdriver.git.errors import ErrorKind, StructuredError, validation_error
from gitdriver.git.executor import GitCommandError
from gitdriver.models.options import AddOptions, CommitOptions, DiffOptions, LogOptions, ShowOptions
from gitdriver.models.results import AddResult, CommitResult, DiffResult, LogResult, ShowResult
from gitdriver.operations.common import Runtime, current_branch, head_hash
from gitdriver.parsers.diff import has_binary, parse_diff_files, parse_diff_stat
from gitdriver.parsers.files import parse_add_verbose
from gitdriver.parsers.log import COMMIT_FORMAT, parse_commit_with_content, parse_commit_with_files, parse_log
from gitdriver.safety.paths import validate_pathspec
from gitdriver.safety.refs import validate_commit_message, validate_revision

_OBJECT_TYPES = ("commit", "tree", "blob", "tag")


def positive(value: Optional[int], name: str, operation: str) -> Optional[int]:
    if value is not None and value < 1:
        raise validation_error(f"{name} must be a positive integer", operation, **{name: value})
    return value


def _author_arg(name: str, email: str, operation: str) -> str:
    for value in (name, email):
        if not value.strip() or any(c in value for c in "<>\n\x00"):
            raise validation_error("Author name and email must be non-empty and free of '<', '>' and newlines", operation)
    return f"{name} <{email}>"


async def add(rt: Runtime, options: AddOptions) -> AddResult:
    if not (options.paths or options.all or options.update):
        raise validation_error("add needs paths, all=True or update=True", rt.operation)
    paths = [validate_pathspec(p) for p in options.paths]
    args = ["--verbose"]
    if options.force:
        args.append("--force")
    if options.all:
        args.append("--all")
    elif options.update:
        args.append("--update")
    if paths:
        args += ["--", *paths]
    result = await rt.git("add", *args)
    return AddResult(staged_files=parse_add_verbose(result.stdout))


async def commit(rt: Runtime, options: CommitOptions) -> CommitResult:
    message = validate_commit_message(options.message, operation=rt.operation)
    to_stage = [validate_pathspec(p) for p in options.files_to_stage]
    args = ["-m", message]
    if options.author is not None:
        args += ["--author", _author_arg(options.author.name, options.author.email, rt.operation)]
    if options.amend:
        rt.protection.check(await current_branch(rt), "amend a commit on", options.confirmed, rt.operation)
        args.append("--amend")
    if options.allow_empty:
        args.append("--allow-empty")
    if options.no_verify:
        args.append("--no-verify")
    sign = rt.config.git.sign_commits if options.sign is None else options.sign
    if sign:
        args.append("--gpg-sign")

    if to_stage:
        await rt.git("add", "--", *to_stage)
    await rt.git("commit", *args)

    # The hash is read back rather than parsed from commit's own output.
    commit_hash = await head_hash(rt)
    shown = await rt.git("show", COMMIT_FORMAT, "--name-only", commit_hash)
    record, files = parse_commit_with_files(shown.stdout)
    if record is None:
        raise StructuredError(
            ErrorKind.INTERNAL, f"Could not read back commit {commit_hash}", {"hash": commit_hash}, rt.operation
        )
    return CommitResult(commit=record, files_changed=files)


async def log(rt: Runtime, options: LogOptions) -> LogResult:
    args = [COMMIT_FORMAT]
    if positive(options.max_count, "max_count", rt.operation) is not None:
        args.append(f"--max-count={options.max_count}")
    if options.skip:
        args.append(f"--skip={int(options.skip)}")
    if options.since:
        args += ["--since", options.since]
    if options.until:
        args += ["--until", options.until]
    if options.author:
        args += ["--author", options.author]
    if options.grep:
        args += ["--grep", options.grep]
    if options.branch:
        args.append(validate_revision(options.branch, rt.operation))
    if options.path:
        args += ["--", validate_pathspec(options.path)]

    try:
        result = await rt.git("log", *args)
    except GitCommandError as exc:
        if "does not have any commits yet" in exc.stderr:
            return LogResult(commits=[], total_count=0)
        raise
    commits = parse_log(result.stdout)
    return LogResult(commits=commits, total_count=len(commits))


async def show(rt: Runtime, options: ShowOptions) -> ShowResult:
    target = validate_revision(options.object, rt.operation)
    if options.file_path:
        target = f"{target}:{validate_pathspec(options.file_path)}"

    object_type = (await rt.git("cat-file", "-t", target)).stdout.strip()
    if object_type not in _OBJECT_TYPES:
        raise StructuredError(
            ErrorKind.INTERNAL, f"Unexpected object type {object_type!r}", {"object": target}, rt.operation
        )

    if object_type == "commit":
        view = "--stat" if options.stat else "--patch"
        result = await rt.git_large("show", COMMIT_FORMAT, view, target)
        record, content = parse_commit_with_content(result.stdout)
        return ShowResult(object=target, type="commit", content=content, commit=record)

    result = await rt.git_large("show", target)
    return ShowResult(object=target, type=object_type, content=result.stdout)  # type: ignore[arg-type]


async def diff(rt: Runtime, options: DiffOptions) -> DiffResult:
    args: List[str] = []
    if options.staged:
        args.append("--cached")
    if options.unified is not None:
        if options.unified < 0:
            raise validation_error("unified must not be negative", rt.operation, unified=options.unified)
        args.append(f"--unified={options.unified}")
    revisions = [validate_revision(r, rt.operation) for r in (options.commit1, options.commit2) if r]
    paths = ["--", validate_pathspec(options.path)] if options.path else []

    content = await rt.git_large("diff", *args, *revisions, *paths)
    stat = await rt.git_large("diff", *args, "--stat", *revisions, *paths)
    totals = parse_diff_stat(stat.stdout)
    return DiffResult(
        diff=content.stdout,
        files=parse_diff_files(content.stdout),
        files_changed=totals.files_changed,
        insertions=totals.insertions,
        deletions=totals.deletions,
        binary=has_binary(content.stdout),
    )
