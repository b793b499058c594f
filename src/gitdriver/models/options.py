"""Typed operation requests.

Options arrive already shape-validated; the engine only checks domain
safety constraints (paths, ref names, protected branches) before building
a command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

MergeStrategy = Literal["ort", "recursive", "octopus", "ours", "subtree", "resolve"]


@dataclass(frozen=True)
class InitOptions:
    path: str
    initial_branch: Optional[str] = None
    bare: bool = False


@dataclass(frozen=True)
class CloneOptions:
    remote_url: str
    local_path: str
    branch: Optional[str] = None
    depth: Optional[int] = None
    bare: bool = False
    mirror: bool = False
    recurse_submodules: bool = False


@dataclass(frozen=True)
class StatusOptions:
    include_untracked: bool = True
    ignore_submodules: bool = False


@dataclass(frozen=True)
class AddOptions:
    paths: List[str] = field(default_factory=list)
    all: bool = False
    update: bool = False
    force: bool = False


@dataclass(frozen=True)
class Author:
    name: str
    email: str


@dataclass(frozen=True)
class CommitOptions:
    message: str
    author: Optional[Author] = None
    amend: bool = False
    allow_empty: bool = False
    sign: Optional[bool] = None  # None defers to config.git.sign_commits
    no_verify: bool = False
    files_to_stage: List[str] = field(default_factory=list)
    confirmed: bool = False  # required to amend a protected branch


@dataclass(frozen=True)
class LogOptions:
    max_count: Optional[int] = None
    skip: Optional[int] = None
    since: Optional[str] = None
    until: Optional[str] = None
    author: Optional[str] = None
    grep: Optional[str] = None
    branch: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class ShowOptions:
    object: str = "HEAD"
    stat: bool = False
    file_path: Optional[str] = None


@dataclass(frozen=True)
class DiffOptions:
    commit1: Optional[str] = None
    commit2: Optional[str] = None
    staged: bool = False
    path: Optional[str] = None
    unified: Optional[int] = None


@dataclass(frozen=True)
class BranchOptions:
    mode: Literal["list", "create", "delete", "rename"] = "list"
    branch_name: Optional[str] = None
    new_branch_name: Optional[str] = None
    start_point: Optional[str] = None
    force: bool = False
    remote: bool = False  # list: remote-tracking branches only
    all: bool = False  # list: local and remote-tracking branches
    confirmed: bool = False


@dataclass(frozen=True)
class CheckoutOptions:
    target: str
    create_branch: bool = False
    force: bool = False
    paths: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MergeOptions:
    branch: Optional[str] = None
    strategy: Optional[MergeStrategy] = None
    no_fast_forward: bool = False
    fast_forward_only: bool = False
    squash: bool = False
    message: Optional[str] = None
    abort: bool = False


@dataclass(frozen=True)
class RebaseOptions:
    mode: Literal["start", "continue", "abort", "skip"] = "start"
    upstream: Optional[str] = None
    branch: Optional[str] = None
    onto: Optional[str] = None
    confirmed: bool = False


@dataclass(frozen=True)
class CherryPickOptions:
    commits: List[str] = field(default_factory=list)
    no_commit: bool = False
    continue_operation: bool = False
    abort: bool = False
    mainline: Optional[int] = None
    strategy: Optional[MergeStrategy] = None
    signoff: bool = False


@dataclass(frozen=True)
class StashOptions:
    mode: Literal["list", "push", "pop", "apply", "drop", "clear"] = "list"
    message: Optional[str] = None
    stash_ref: Optional[str] = None
    include_untracked: bool = False
    keep_index: bool = False


@dataclass(frozen=True)
class TagOptions:
    mode: Literal["list", "create", "delete"] = "list"
    tag_name: Optional[str] = None
    commit: Optional[str] = None
    message: Optional[str] = None
    annotated: bool = False
    force: bool = False
    pattern: Optional[str] = None  # list: glob passed to for-each-ref


@dataclass(frozen=True)
class WorktreeOptions:
    mode: Literal["list", "add", "remove", "move", "prune"] = "list"
    path: Optional[str] = None
    new_path: Optional[str] = None
    commitish: Optional[str] = None
    branch: Optional[str] = None
    force: bool = False
    detach: bool = False
    dry_run: bool = False


@dataclass(frozen=True)
class RemoteOptions:
    mode: Literal["list", "add", "remove", "rename", "get-url", "set-url"] = "list"
    name: Optional[str] = None
    url: Optional[str] = None
    new_name: Optional[str] = None
    push: bool = False


@dataclass(frozen=True)
class FetchOptions:
    remote: str = "origin"
    refspec: Optional[str] = None
    prune: bool = False
    tags: bool = False
    depth: Optional[int] = None


@dataclass(frozen=True)
class PullOptions:
    remote: str = "origin"
    branch: Optional[str] = None
    rebase: bool = False
    fast_forward_only: bool = False


@dataclass(frozen=True)
class PushOptions:
    remote: str = "origin"
    branch: Optional[str] = None
    remote_branch: Optional[str] = None
    force: bool = False
    force_with_lease: bool = False
    set_upstream: bool = False
    tags: bool = False
    dry_run: bool = False
    delete: bool = False
    confirmed: bool = False


@dataclass(frozen=True)
class ResetOptions:
    mode: Literal["soft", "mixed", "hard", "merge", "keep"] = "mixed"
    commit: str = "HEAD"
    paths: List[str] = field(default_factory=list)
    confirmed: bool = False


@dataclass(frozen=True)
class CleanOptions:
    force: bool = False
    dry_run: bool = False
    directories: bool = False
    ignored: bool = False


@dataclass(frozen=True)
class BlameOptions:
    file: str
    start_line: Optional[int] = None
    end_line: Optional[int] = None
    ignore_whitespace: bool = False
    revision: Optional[str] = None


@dataclass(frozen=True)
class ReflogOptions:
    ref: str = "HEAD"
    max_count: Optional[int] = None
