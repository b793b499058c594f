"""Line and ref history: blame, reflog."""

from __future__ import annotations

from gitdriver.git.errors import validation_error
from gitdriver.models.options import BlameOptions, ReflogOptions
from gitdriver.models.results import BlameResult, ReflogResult
from gitdriver.operations.commits import positive
from gitdriver.operations.common import Runtime
from gitdriver.parsers.blame import parse_blame_porcelain
from gitdriver.parsers.reflog import REFLOG_FORMAT, parse_reflog
from gitdriver.safety.paths import validate_pathspec
from gitdriver.safety.refs import validate_revision


async def blame(rt: Runtime, options: BlameOptions) -> BlameResult:
    path = validate_pathspec(options.file)
    start = positive(options.start_line, "start_line", rt.operation)
    end = positive(options.end_line, "end_line", rt.operation)
    if start is not None and end is not None and end < start:
        raise validation_error("end_line must not be before start_line", rt.operation, start_line=start, end_line=end)

    args = ["--porcelain"]
    if options.ignore_whitespace:
        args.append("-w")
    if start is not None or end is not None:
        args.append(f"-L{start or 1},{end or ''}")
    if options.revision:
        args.append(validate_revision(options.revision, rt.operation))

    result = await rt.git_large("blame", *args, "--", path)
    lines = parse_blame_porcelain(result.stdout)
    return BlameResult(file=path, lines=lines, total_lines=len(lines))


async def reflog(rt: Runtime, options: ReflogOptions) -> ReflogResult:
    ref = validate_revision(options.ref, rt.operation)
    args = [REFLOG_FORMAT]
    if positive(options.max_count, "max_count", rt.operation) is not None:
        args.append(f"--max-count={options.max_count}")
    result = await rt.git("reflog", "show", *args, ref)
    entries = parse_reflog(result.stdout)
    return ReflogResult(ref=ref, entries=entries, total_entries=len(entries))
