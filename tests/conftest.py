"""Shared test fixtures: sample git outputs, a recording executor and temp git repos."""

from __future__ import annotations

import logging
import subprocess
import textwrap
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pytest

import gitdriver.log
from gitdriver.config.schema import GitDriverConfig
from gitdriver.git.command import CommandSpec
from gitdriver.git.delimiters import FIELD_DELIMITER as F
from gitdriver.git.delimiters import RECORD_DELIMITER as R
from gitdriver.git.executor import GitCommandError
from gitdriver.git.models import OperationContext, RawExecutionResult
from gitdriver.operations.common import Runtime
from gitdriver.safety.protection import BranchProtection

HASH_A = "a" * 40
HASH_B = "b" * 40


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Leave the gitdriver logger unconfigured after every test."""
    monkeypatch.setattr(gitdriver.log, "_logger", None)
    yield
    stdlib_logger = logging.getLogger("gitdriver")
    stdlib_logger.handlers.clear()
    stdlib_logger.propagate = True
    stdlib_logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_diff_modified() -> str:
    """A two-file diff: one edit, one binary add."""
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        index 1234567..abcdef0 100644
        --- a/hello.py
        +++ b/hello.py
        @@ -1,2 +1,2 @@
        -print("hi")
        +print("hello")
         x = 1
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..e69de29
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A diff with a renamed file."""
    return textwrap.dedent("""\
        diff --git a/old_name.py b/new_name.py
        similarity index 97%
        rename from old_name.py
        rename to new_name.py
        index abc1234..def5678 100644
        --- a/old_name.py
        +++ b/new_name.py
        @@ -1,0 +2,1 @@
        +# New line added after rename
    """)


@pytest.fixture
def sample_diff_mode_only() -> str:
    """A diff with only file mode change."""
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    return textwrap.dedent("""\
        diff --git a/gone.txt b/gone.txt
        deleted file mode 100644
        index abc1234..0000000
        --- a/gone.txt
        +++ /dev/null
        @@ -1 +0,0 @@
        -bye
    """)


@pytest.fixture
def sample_status_v2() -> str:
    """``git status --porcelain=v2 --branch`` with every entry type."""
    return (
        "# branch.oid " + HASH_A + "\n"
        "# branch.head main\n"
        "# branch.upstream origin/main\n"
        "# branch.ab +2 -1\n"
        "1 M. N... 100644 100644 100644 " + HASH_A + " " + HASH_B + " staged.py\n"
        "1 .M N... 100644 100644 100644 " + HASH_A + " " + HASH_A + " edited file.py\n"
        "2 R. N... 100644 100644 100644 " + HASH_A + " " + HASH_A + " R100 new.py\told.py\n"
        "u UU N... 100644 100644 100644 100644 " + HASH_A + " " + HASH_B + " " + HASH_A + " both.py\n"
        "? notes.txt\n"
    )


@pytest.fixture
def sample_blame_porcelain() -> str:
    """Two lines from one commit; metadata only on its first appearance."""
    return (
        f"{HASH_A} 1 1 2\n"
        "author Ada Lovelace\n"
        "author-mail <ada@example.com>\n"
        "author-time 1700000000\n"
        "author-tz +0000\n"
        "committer Ada Lovelace\n"
        "summary Add engine\n"
        "filename engine.py\n"
        "\tdef run():\n"
        f"{HASH_A} 2 2\n"
        "\t    return 42\n"
    )


@pytest.fixture
def sample_worktree_porcelain() -> str:
    return textwrap.dedent("""\
        worktree /repo
        HEAD %s
        branch refs/heads/main

        worktree /repo-feature
        HEAD %s
        branch refs/heads/feature
        locked being reviewed

        worktree /repo-detached
        HEAD %s
        detached
        prunable gitdir file points to non-existent location
    """) % (HASH_A, HASH_B, HASH_A)


def log_record(
    commit_hash: str = HASH_A,
    subject: str = "Add engine",
    body: str = "",
    parents: str = "",
    author: str = "Ada Lovelace",
) -> str:
    """One delimited commit record as COMMIT_FORMAT renders it."""
    fields = [commit_hash, commit_hash[:7], author, "ada@example.com", "1700000000", subject, body, parents]
    return F.join(fields) + R


# ---- recording executor ----

Response = Union[RawExecutionResult, GitCommandError, str]


class RecordingExecutor:
    """Stand-in for GitExecutor: records every CommandSpec and replays canned output.

    Responses are looked up by subcommand; a ``str`` response is stdout, a
    GitCommandError is raised. Unlisted commands return empty output.
    """

    def __init__(self, responses: Optional[Dict[str, Union[Response, List[Response]]]] = None) -> None:
        self.responses = dict(responses or {})
        self.calls: List[Tuple[CommandSpec, str]] = []

    @property
    def specs(self) -> List[CommandSpec]:
        return [spec for spec, _ in self.calls]

    def commands(self) -> List[str]:
        return [spec.command for spec in self.specs]

    async def run(self, spec, cwd, ctx=None, *, network=None, timeout=None, max_output_bytes=None):
        self.calls.append((spec, cwd))
        response = self.responses.get(spec.command, "")
        if isinstance(response, list):
            response = response.pop(0) if response else ""
        if isinstance(response, GitCommandError):
            raise response
        if isinstance(response, str):
            return RawExecutionResult(stdout=response)
        return response


@pytest.fixture
def make_runtime(tmp_path: Path):
    """Build a Runtime around a RecordingExecutor."""

    def _make(executor: RecordingExecutor, operation: str = "test", config: Optional[GitDriverConfig] = None) -> Runtime:
        cfg = config or GitDriverConfig()
        return Runtime(
            executor=executor,  # type: ignore[arg-type]
            ctx=OperationContext(working_directory=str(tmp_path)),
            config=cfg,
            protection=BranchProtection(cfg.protection.protected_branches, enforce=cfg.protection.enforce),
            operation=operation,
        )

    return _make


# ---- real repositories ----


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository on branch main with one commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", str(repo)], capture_output=True, check=True)
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    # Initial commit
    (repo / "README.md").write_text("# Test\n")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "init")
    return repo
