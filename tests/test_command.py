"""Tests for the command builder and argument-vector construction."""

import pytest

from conftest import HASH_A, RecordingExecutor, log_record
from gitdriver.git.command import CommandSpec, build
from gitdriver.models.options import CommitOptions, LogOptions, TagOptions
from gitdriver.operations.commits import commit, log
from gitdriver.operations.tags import tag

HOSTILE = ["; rm -rf /", "`whoami`", "$(reboot)", "a | b", "x && y", "it's \"quoted\""]


class TestBuild:
    def test_argv_order(self):
        spec = build("log", ["--oneline", "-n", "3"])
        assert spec.argv() == ["git", "log", "--oneline", "-n", "3"]

    def test_global_options_before_command(self):
        spec = build("status")
        assert spec.argv("git", ("-c", "color.ui=never")) == ["git", "-c", "color.ui=never", "status"]

    def test_args_become_strings(self):
        spec = build("log", ["-n", 5])  # type: ignore[list-item]
        assert spec.args == ("-n", "5")

    def test_frozen(self):
        spec = CommandSpec("status")
        with pytest.raises(AttributeError):
            spec.command = "push"  # type: ignore[misc]

    @pytest.mark.parametrize("value", HOSTILE)
    def test_metacharacters_kept_verbatim(self, value):
        spec = build("commit", ["-m", value])
        assert spec.args == ("-m", value)
        assert spec.argv()[-1] == value


class TestNoShellInjection:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", HOSTILE)
    async def test_commit_message_is_one_element(self, make_runtime, value):
        executor = RecordingExecutor({"rev-parse": HASH_A + "\n", "show": log_record(subject=value) + "\nfile.txt\n"})
        rt = make_runtime(executor, "commit")
        result = await commit(rt, CommitOptions(message=value))
        assert result.commit.subject == value
        commit_spec = next(s for s in executor.specs if s.command == "commit")
        assert value in commit_spec.args
        assert commit_spec.args[commit_spec.args.index("-m") + 1] == value

    @pytest.mark.asyncio
    async def test_log_grep_is_one_element(self, make_runtime):
        executor = RecordingExecutor()
        rt = make_runtime(executor, "log")
        await log(rt, LogOptions(grep="$(reboot); echo"))
        spec = executor.specs[0]
        assert spec.args[spec.args.index("--grep") + 1] == "$(reboot); echo"

    @pytest.mark.asyncio
    async def test_tag_message_is_one_element(self, make_runtime):
        executor = RecordingExecutor()
        rt = make_runtime(executor, "tag")
        await tag(rt, TagOptions(mode="create", tag_name="v1.0", message="`id` | tee"))
        assert "`id` | tee" in executor.specs[0].args
