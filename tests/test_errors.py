"""Tests for the error taxonomy, the ordered classifier and custom YAML patterns."""

from pathlib import Path

import pytest

from gitdriver.config.loader import ConfigError
from gitdriver.git.errors import (
    DEFAULT_PATTERNS,
    ErrorClassifier,
    ErrorKind,
    ErrorPattern,
    Severity,
    StructuredError,
    load_custom_patterns,
    validation_error,
)
from gitdriver.git.executor import GitCommandError


def failure(stderr: str, stdout: str = "", command: str = "x", exit_code: int = 128) -> GitCommandError:
    return GitCommandError(
        f"git {command} exited with code {exit_code}",
        command=command,
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
    )


@pytest.fixture
def classifier() -> ErrorClassifier:
    return ErrorClassifier()


class TestKnownMessages:
    @pytest.mark.parametrize("operation", ["status", "log", "commit", "anything"])
    def test_not_a_repository_for_any_operation(self, classifier, operation):
        err = classifier.classify("fatal: not a git repository", operation)
        assert err.kind is ErrorKind.NOT_A_REPOSITORY
        assert err.operation == operation

    @pytest.mark.parametrize(
        "stderr, kind",
        [
            ("fatal: not a git repository (or any of the parent directories): .git", ErrorKind.NOT_A_REPOSITORY),
            ("fatal: repository 'https://x/y.git/' not found", ErrorKind.REPOSITORY_NOT_FOUND),
            ("error: pathspec 'nope.txt' did not match any file(s) known to git", ErrorKind.PATHSPEC_NOT_FOUND),
            ("fatal: destination path 'repo' already exists and is not an empty directory.", ErrorKind.PATH_CONFLICT),
            ("fatal: a branch named 'dev' already exists", ErrorKind.BRANCH_EXISTS),
            ("error: branch 'ghost' not found.", ErrorKind.BRANCH_NOT_FOUND),
            ("error: The branch 'dev' is not fully merged.", ErrorKind.BRANCH_NOT_MERGED),
            ("fatal: tag 'v1' already exists", ErrorKind.TAG_EXISTS),
            ("error: tag 'v9' not found.", ErrorKind.TAG_NOT_FOUND),
            ("error: remote origin already exists.", ErrorKind.REMOTE_EXISTS),
            ("error: No such remote: 'upstream'", ErrorKind.REMOTE_NOT_FOUND),
            ("fatal: Authentication failed for 'https://x/'", ErrorKind.AUTH_FAILED),
            ("git@github.com: Permission denied (publickey).", ErrorKind.AUTH_FAILED),
            ("error: cannot open .git/FETCH_HEAD: Permission denied", ErrorKind.PERMISSION_DENIED),
            ("fatal: unable to access 'https://x/': Could not resolve host: x", ErrorKind.REMOTE_UNREACHABLE),
            ("error: RPC failed; curl 18 transfer closed", ErrorKind.NETWORK_ERROR),
            ("fatal: ambiguous argument 'nope': unknown revision or path not in the working tree.",
             ErrorKind.UNKNOWN_REVISION),
            ("warning: refname 'dev' is ambiguous.", ErrorKind.AMBIGUOUS_REFERENCE),
            ("fatal: invalid reference: nope", ErrorKind.INVALID_REFERENCE),
            ("error: No stash entries found.", ErrorKind.INVALID_REFERENCE),
        ],
    )
    def test_kind(self, classifier, stderr, kind):
        assert classifier.classify(failure(stderr), "op").kind is kind

    def test_nothing_to_commit_on_stdout(self, classifier):
        exc = failure("", stdout="On branch main\nnothing to commit, working tree clean\n", exit_code=1)
        err = classifier.classify(exc, "commit")
        assert err.kind is ErrorKind.NOTHING_TO_COMMIT
        assert err.details["exit_code"] == 1

    def test_merge_conflict_lists_files(self, classifier):
        stdout = (
            "Auto-merging a.py\n"
            "CONFLICT (content): Merge conflict in a.py\n"
            "Automatic merge failed; fix conflicts and then commit the result.\n"
        )
        err = classifier.classify(failure("", stdout=stdout, exit_code=1), "merge")
        assert err.kind is ErrorKind.MERGE_CONFLICT
        assert err.details["conflicted_files"] == ["a.py"]
        assert err.message.startswith("git merge failed: CONFLICT")

    def test_push_rejected_lists_refs(self, classifier):
        stderr = (
            "To https://x/y.git\n"
            " ! [rejected]        main -> main (fetch first)\n"
            "error: failed to push some refs to 'https://x/y.git'\n"
        )
        err = classifier.classify(failure(stderr, exit_code=1), "push")
        assert err.kind is ErrorKind.PUSH_REJECTED
        assert err.details["rejected_refs"] == ["main"]

    def test_push_rejected_porcelain(self, classifier):
        stdout = "To https://x/y.git\n!\trefs/heads/dev:refs/heads/dev\t[rejected] (non-fast-forward)\nDone\n"
        err = classifier.classify(failure("error: failed to push some refs", stdout=stdout, exit_code=1), "push")
        assert err.kind is ErrorKind.PUSH_REJECTED
        assert err.details["rejected_refs"] == ["dev"]

    def test_overwritten_files(self, classifier):
        stderr = (
            "error: Your local changes to the following files would be overwritten by checkout:\n"
            "\ta.py\n"
            "\tb.py\n"
            "Please commit your changes or stash them before you switch branches.\n"
        )
        err = classifier.classify(failure(stderr, exit_code=1), "checkout")
        assert err.kind is ErrorKind.PATH_CONFLICT
        assert err.details["files"] == ["a.py", "b.py"]

    def test_named_groups_become_details(self, classifier):
        err = classifier.classify(failure("fatal: a branch named 'dev' already exists"), "branch")
        assert err.details["branch"] == "dev"

    def test_message_uses_matched_line(self, classifier):
        err = classifier.classify(failure("hint: x\nfatal: tag 'v1' already exists\n"), "tag")
        assert err.message == "git tag failed: tag 'v1' already exists"


class TestFallbacks:
    def test_tool_not_installed(self, classifier):
        exc = GitCommandError("git: command not found (is git installed and on PATH?)", command="status")
        assert classifier.classify(exc, "status").kind is ErrorKind.TOOL_NOT_INSTALLED

    def test_enoent(self, classifier):
        assert classifier.classify("spawn git ENOENT", "status").kind is ErrorKind.TOOL_NOT_INSTALLED

    def test_unknown_is_internal(self, classifier):
        err = classifier.classify(failure("fatal: something new and strange"), "gc")
        assert err.kind is ErrorKind.INTERNAL
        assert err.severity is Severity.UNEXPECTED
        assert "something new and strange" in err.message

    def test_plain_exception(self, classifier):
        err = classifier.classify(RuntimeError("boom"), "status")
        assert err.kind is ErrorKind.INTERNAL
        assert err.message == "git status failed: boom"

    def test_local_timeout_is_internal(self, classifier):
        exc = GitCommandError("git log exceeded the 60s time limit and was killed", command="log", timed_out=True)
        assert classifier.classify(exc, "log").kind is ErrorKind.INTERNAL

    def test_network_timeout(self, classifier):
        exc = GitCommandError("git fetch timed out after 300s", command="fetch", timed_out=True)
        assert classifier.classify(exc, "fetch").kind is ErrorKind.NETWORK_ERROR

    def test_output_limit(self, classifier):
        exc = GitCommandError("git diff output exceeded the maximum buffer size of 10 bytes", command="diff")
        assert classifier.classify(exc, "diff").kind is ErrorKind.OUTPUT_LIMIT_EXCEEDED


class TestIdempotence:
    @pytest.mark.parametrize(
        "text",
        ["fatal: not a git repository", "error: tag 'v1' not found.", "weird", "fatal: Authentication failed"],
    )
    def test_same_kind_twice(self, classifier, text):
        assert classifier.classify(text, "op").kind is classifier.classify(text, "op").kind

    def test_structured_error_passes_through(self, classifier):
        original = validation_error("bad input", "commit")
        assert classifier.classify(original, "other") is original


class TestOrdering:
    TEXT = "fatal: not a git repository (or any of the parent directories): .git\nerror: no such file or directory"

    def test_first_match_wins(self):
        assert ErrorClassifier().classify(self.TEXT, "op").kind is ErrorKind.NOT_A_REPOSITORY

    def test_reordered_list_changes_result(self):
        generic = ErrorPattern(r"no such file or directory", ErrorKind.PATH_NOT_FOUND)
        specific = ErrorPattern(r"not a git repository", ErrorKind.NOT_A_REPOSITORY)
        assert ErrorClassifier([specific, generic]).classify(self.TEXT).kind is ErrorKind.NOT_A_REPOSITORY
        assert ErrorClassifier([generic, specific]).classify(self.TEXT).kind is ErrorKind.PATH_NOT_FOUND

    def test_default_list_starts_with_repository_check(self):
        assert DEFAULT_PATTERNS[0].kind is ErrorKind.NOT_A_REPOSITORY

    def test_patterns_first(self):
        extra = ErrorPattern(r"not a git repository", ErrorKind.PATH_NOT_FOUND)
        classifier = ErrorClassifier().with_patterns_first([extra])
        assert classifier.patterns[0] is extra
        assert classifier.classify(self.TEXT).kind is ErrorKind.PATH_NOT_FOUND


class TestStructuredError:
    def test_to_dict(self):
        err = StructuredError(ErrorKind.BRANCH_EXISTS, "exists", {"branch": "dev"}, "branch")
        assert err.to_dict() == {
            "kind": "branch-exists",
            "severity": "caller",
            "message": "exists",
            "details": {"branch": "dev"},
            "operation": "branch",
        }

    def test_is_exception(self):
        with pytest.raises(StructuredError) as info:
            raise validation_error("nope", "add", path="x")
        assert info.value.kind is ErrorKind.VALIDATION_ERROR
        assert info.value.details == {"path": "x"}
        assert str(info.value) == "nope"


class TestCustomPatterns:
    def test_load(self, tmp_path: Path):
        path = tmp_path / "patterns.yaml"
        path.write_text(
            "patterns:\n"
            "  - pattern: 'pre-receive hook declined'\n"
            "    kind: push-rejected\n"
        )
        (pattern,) = load_custom_patterns(path)
        assert pattern.kind is ErrorKind.PUSH_REJECTED
        classifier = ErrorClassifier().with_patterns_first([pattern])
        assert classifier.classify("remote: pre-receive hook declined").kind is ErrorKind.PUSH_REJECTED

    def test_unknown_kind(self, tmp_path: Path):
        path = tmp_path / "patterns.yaml"
        path.write_text("patterns:\n  - pattern: x\n    kind: exploded\n")
        with pytest.raises(ConfigError, match="unknown error kind"):
            load_custom_patterns(path)

    def test_bad_regex(self, tmp_path: Path):
        path = tmp_path / "patterns.yaml"
        path.write_text("patterns:\n  - pattern: '(['\n    kind: internal\n")
        with pytest.raises(ConfigError, match="invalid regex"):
            load_custom_patterns(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_custom_patterns(tmp_path / "nope.yaml")
