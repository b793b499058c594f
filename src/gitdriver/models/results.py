"""Typed operation results.

Every result is a frozen dataclass. Operations with several modes return one
variant per mode, each carrying a ``mode`` discriminator, so a result's shape
is fully determined by its type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional, Union


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    TYPE_CHANGED = "type_changed"
    MODE_CHANGED = "mode_changed"
    UNMERGED = "unmerged"


@dataclass(frozen=True)
class RenamedRef:
    from_name: str
    to_name: str


# ---- commits ----


@dataclass(frozen=True)
class CommitRecord:
    """One commit as reported by the delimited log format."""

    hash: str
    short_hash: str
    author: str
    author_email: str
    timestamp: int  # epoch seconds
    subject: str
    body: Optional[str] = None
    parent_hashes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommitResult:
    commit: CommitRecord
    files_changed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LogResult:
    commits: List[CommitRecord] = field(default_factory=list)
    total_count: int = 0


@dataclass(frozen=True)
class ShowResult:
    object: str
    type: Literal["commit", "tree", "blob", "tag"]
    content: str
    commit: Optional[CommitRecord] = None


# ---- repository ----


@dataclass(frozen=True)
class InitResult:
    path: str
    initial_branch: Optional[str]
    bare: bool = False


@dataclass(frozen=True)
class CloneResult:
    local_path: str
    remote_url: str
    branch: Optional[str]


@dataclass(frozen=True)
class FileChange:
    path: str
    status: FileStatus
    old_path: Optional[str] = None  # set on renames and copies


@dataclass(frozen=True)
class StatusResult:
    current_branch: Optional[str]  # None when HEAD is detached
    head: Optional[str] = None  # None before the first commit
    upstream: Optional[str] = None
    ahead: Optional[int] = None
    behind: Optional[int] = None
    staged: List[FileChange] = field(default_factory=list)
    unstaged: List[FileChange] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)
    conflicted: List[str] = field(default_factory=list)
    is_clean: bool = True


@dataclass(frozen=True)
class AddResult:
    staged_files: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResetResult:
    mode: str
    commit: str
    files_reset: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CleanResult:
    files_removed: List[str] = field(default_factory=list)
    directories_removed: List[str] = field(default_factory=list)
    dry_run: bool = False


# ---- diff ----


@dataclass(frozen=True)
class DiffFile:
    """Metadata about a file appearing in a diff."""

    path: str
    old_path: Optional[str] = None  # set on renames
    status: FileStatus = FileStatus.MODIFIED
    binary: bool = False


@dataclass(frozen=True)
class DiffStat:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class DiffResult:
    diff: str
    files: List[DiffFile] = field(default_factory=list)
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    binary: bool = False


# ---- branches ----


@dataclass(frozen=True)
class BranchInfo:
    name: str
    current: bool
    commit_hash: str
    remote: bool = False
    upstream: Optional[str] = None
    ahead: Optional[int] = None
    behind: Optional[int] = None
    upstream_gone: bool = False
    worktree_path: Optional[str] = None  # checked out in another worktree
    subject: str = ""


@dataclass(frozen=True)
class BranchListResult:
    branches: List[BranchInfo] = field(default_factory=list)
    mode: Literal["list"] = "list"


@dataclass(frozen=True)
class BranchCreateResult:
    created: str
    mode: Literal["create"] = "create"


@dataclass(frozen=True)
class BranchDeleteResult:
    deleted: str
    mode: Literal["delete"] = "delete"


@dataclass(frozen=True)
class BranchRenameResult:
    renamed: RenamedRef
    mode: Literal["rename"] = "rename"


BranchResult = Union[BranchListResult, BranchCreateResult, BranchDeleteResult, BranchRenameResult]


@dataclass(frozen=True)
class CheckoutResult:
    target: str
    branch_created: bool = False
    current_branch: Optional[str] = None
    paths_restored: List[str] = field(default_factory=list)


# ---- merge / rebase / cherry-pick ----


@dataclass(frozen=True)
class AbortResult:
    """Result of ``--abort`` for merge, rebase or cherry-pick."""

    operation: str
    mode: Literal["abort"] = "abort"


@dataclass(frozen=True)
class MergeResult:
    branch: str
    head: str
    fast_forward: bool = False
    already_up_to_date: bool = False
    squashed: bool = False
    strategy: Optional[str] = None
    files_changed: List[str] = field(default_factory=list)
    mode: Literal["merge"] = "merge"


@dataclass(frozen=True)
class RebaseResult:
    head: str
    current_branch: Optional[str] = None
    up_to_date: bool = False
    mode: Literal["start", "continue", "skip"] = "start"


@dataclass(frozen=True)
class CherryPickResult:
    head: str
    picked_commits: List[str] = field(default_factory=list)
    mode: Literal["pick", "continue"] = "pick"


# ---- stash ----


@dataclass(frozen=True)
class StashInfo:
    ref: str
    index: int
    branch: Optional[str]
    description: str
    timestamp: int


@dataclass(frozen=True)
class StashListResult:
    stashes: List[StashInfo] = field(default_factory=list)
    mode: Literal["list"] = "list"


@dataclass(frozen=True)
class StashPushResult:
    created: Optional[str]  # None when there was nothing to stash
    mode: Literal["push"] = "push"


@dataclass(frozen=True)
class StashApplyResult:
    applied: str
    mode: Literal["apply", "pop"] = "apply"


@dataclass(frozen=True)
class StashDropResult:
    dropped: str
    mode: Literal["drop"] = "drop"


@dataclass(frozen=True)
class StashClearResult:
    cleared: int
    mode: Literal["clear"] = "clear"


StashResult = Union[StashListResult, StashPushResult, StashApplyResult, StashDropResult, StashClearResult]


# ---- tags ----


@dataclass(frozen=True)
class TagInfo:
    name: str
    commit: str  # peeled commit for annotated tags
    annotated: bool = False
    message: Optional[str] = None
    tagger: Optional[str] = None
    timestamp: Optional[int] = None


@dataclass(frozen=True)
class TagListResult:
    tags: List[TagInfo] = field(default_factory=list)
    mode: Literal["list"] = "list"


@dataclass(frozen=True)
class TagCreateResult:
    created: str
    mode: Literal["create"] = "create"


@dataclass(frozen=True)
class TagDeleteResult:
    deleted: str
    mode: Literal["delete"] = "delete"


TagResult = Union[TagListResult, TagCreateResult, TagDeleteResult]


# ---- worktrees ----


@dataclass(frozen=True)
class WorktreeInfo:
    path: str
    head: Optional[str] = None
    branch: Optional[str] = None
    bare: bool = False
    detached: bool = False
    locked: bool = False
    locked_reason: Optional[str] = None
    prunable: bool = False
    prunable_reason: Optional[str] = None


@dataclass(frozen=True)
class WorktreeListResult:
    worktrees: List[WorktreeInfo] = field(default_factory=list)
    mode: Literal["list"] = "list"


@dataclass(frozen=True)
class WorktreeAddResult:
    added: str
    branch: Optional[str] = None
    mode: Literal["add"] = "add"


@dataclass(frozen=True)
class WorktreeRemoveResult:
    removed: str
    mode: Literal["remove"] = "remove"


@dataclass(frozen=True)
class WorktreeMoveResult:
    moved: RenamedRef
    mode: Literal["move"] = "move"


@dataclass(frozen=True)
class WorktreePruneResult:
    pruned: List[str] = field(default_factory=list)
    dry_run: bool = False
    mode: Literal["prune"] = "prune"


WorktreeResult = Union[
    WorktreeListResult, WorktreeAddResult, WorktreeRemoveResult, WorktreeMoveResult, WorktreePruneResult
]


# ---- remotes ----


@dataclass(frozen=True)
class RemoteInfo:
    name: str
    fetch_url: str
    push_url: str


@dataclass(frozen=True)
class RemoteListResult:
    remotes: List[RemoteInfo] = field(default_factory=list)
    mode: Literal["list"] = "list"


@dataclass(frozen=True)
class RemoteAddResult:
    added: RemoteInfo
    mode: Literal["add"] = "add"


@dataclass(frozen=True)
class RemoteRemoveResult:
    removed: str
    mode: Literal["remove"] = "remove"


@dataclass(frozen=True)
class RemoteRenameResult:
    renamed: RenamedRef
    mode: Literal["rename"] = "rename"


@dataclass(frozen=True)
class RemoteUrlResult:
    name: str
    url: str
    push: bool = False
    mode: Literal["get-url", "set-url"] = "get-url"


RemoteResult = Union[RemoteListResult, RemoteAddResult, RemoteRemoveResult, RemoteRenameResult, RemoteUrlResult]


@dataclass(frozen=True)
class RefUpdate:
    """One ref-update line from fetch, pull or push."""

    flag: str  # ' ' fast-forward, '+' forced, '-' deleted, '*' new, '!' rejected, '=' up to date, 't' tag
    summary: str
    source: str
    destination: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class FetchResult:
    remote: str
    updates: List[RefUpdate] = field(default_factory=list)
    fetched_refs: List[str] = field(default_factory=list)
    pruned_refs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PullResult:
    remote: str
    branch: Optional[str]
    strategy: Literal["merge", "rebase", "fast-forward"]
    already_up_to_date: bool = False
    updates: List[RefUpdate] = field(default_factory=list)
    files_changed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PushResult:
    remote: str
    branch: Optional[str]
    upstream_set: bool = False
    pushed_refs: List[str] = field(default_factory=list)
    updates: List[RefUpdate] = field(default_factory=list)


# ---- history ----


@dataclass(frozen=True)
class BlameLine:
    line_number: int
    commit_hash: str
    author: str
    author_email: str
    timestamp: int
    summary: str
    content: str


@dataclass(frozen=True)
class BlameResult:
    file: str
    lines: List[BlameLine] = field(default_factory=list)
    total_lines: int = 0


@dataclass(frozen=True)
class ReflogEntry:
    hash: str
    selector: str  # e.g. HEAD@{0}
    action: str  # bracket content of the selector, e.g. "0"
    kind: str  # subject prefix, e.g. "commit", "checkout"
    message: str
    timestamp: int


@dataclass(frozen=True)
class ReflogResult:
    ref: str
    entries: List[ReflogEntry] = field(default_factory=list)
    total_entries: int = 0
