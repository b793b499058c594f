"""Tag operation (list, create, delete)."""

from __future__ import annotations

from gitdriver.git.errors import validation_error
from gitdriver.models.options import TagOptions
from gitdriver.models.results import TagCreateResult, TagDeleteResult, TagListResult, TagResult
from gitdriver.operations.common import Runtime
from gitdriver.parsers.refs import TAG_FORMAT, parse_tag_list
from gitdriver.safety.refs import validate_commit_message, validate_ref_name, validate_revision


async def tag(rt: Runtime, options: TagOptions) -> TagResult:
    mode = options.mode

    if mode == "list":
        refs = "refs/tags"
        if options.pattern:
            if options.pattern.startswith("-") or "\x00" in options.pattern:
                raise validation_error(f"Invalid tag pattern {options.pattern!r}", rt.operation)
            refs = f"refs/tags/{options.pattern}"
        result = await rt.git("for-each-ref", "--sort=-creatordate", TAG_FORMAT, refs)
        return TagListResult(tags=parse_tag_list(result.stdout))

    if not options.tag_name:
        raise validation_error(f"tag_name is required for tag mode '{mode}'", rt.operation)
    name = validate_ref_name(options.tag_name, "tag", rt.operation)

    if mode == "create":
        args = []
        if options.force:
            args.append("--force")
        if options.annotated or options.message:
            message = validate_commit_message(options.message or name, operation=rt.operation)
            args += ["-a", "-m", message]
        args.append(name)
        if options.commit:
            args.append(validate_revision(options.commit, rt.operation))
        await rt.git("tag", *args)
        return TagCreateResult(created=name)

    if mode == "delete":
        await rt.git("tag", "-d", name)
        return TagDeleteResult(deleted=name)

    raise validation_error(f"Unknown tag mode {mode!r}", rt.operation)
