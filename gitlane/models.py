"""Plain data records exchanged with the git collaborator.

Commits, references, and working-tree file status entries are immutable
snapshots; the UI rebuilds derived structures from them on every refresh.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

SHORT_ID_LENGTH = 7

_REF_PREFIXES: tuple[str, ...] = ("refs/heads/", "refs/remotes/", "refs/tags/")


class RefKind(Enum):
    HEAD = "head"
    BRANCH = "branch"
    TAG = "tag"
    REMOTE = "remote"


@dataclass(frozen=True)
class Reference:
    """Named pointer decorating a commit."""

    name: str
    kind: RefKind

    @property
    def display_name(self) -> str:
        """Return the reference name without its ``refs/...`` namespace."""
        for prefix in _REF_PREFIXES:
            if self.name.startswith(prefix):
                return self.name[len(prefix):]
        return self.name


@dataclass(frozen=True)
class Commit:
    id: str
    short_id: str
    message: str
    summary: str
    author: str
    email: str
    timestamp: datetime
    parent_ids: tuple[str, ...] = ()
    refs: tuple[Reference, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id.startswith(self.short_id):
            raise ValueError(f"short id {self.short_id!r} is not a prefix of {self.id!r}")

    @classmethod
    def create(
        cls,
        commit_id: str,
        message: str,
        author: str,
        email: str,
        timestamp: datetime,
        parent_ids: tuple[str, ...] | list[str] = (),
        refs: tuple[Reference, ...] | list[Reference] = (),
    ) -> Commit:
        """Build a commit deriving short id and one-line summary."""
        summary = message.split("\n", 1)[0].strip() if message else ""
        return cls(
            id=commit_id,
            short_id=commit_id[:SHORT_ID_LENGTH],
            message=message,
            summary=summary,
            author=author,
            email=email,
            timestamp=timestamp,
            parent_ids=tuple(parent_ids),
            refs=tuple(refs),
        )

    def has_ref_kind(self, kind: RefKind) -> bool:
        return any(ref.kind is kind for ref in self.refs)


class StatusKind(Enum):
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    UNTRACKED = "untracked"
    MODIFIED_STAGED = "modified_staged"
    ADDED_STAGED = "added_staged"
    DELETED_STAGED = "deleted_staged"
    RENAMED = "renamed"
    CONFLICTED = "conflicted"


_STAGED_KINDS = frozenset(
    {
        StatusKind.MODIFIED_STAGED,
        StatusKind.ADDED_STAGED,
        StatusKind.DELETED_STAGED,
        StatusKind.RENAMED,
    }
)

STATUS_BADGES: dict[StatusKind, str] = {
    StatusKind.MODIFIED: " M",
    StatusKind.ADDED: "AM",
    StatusKind.DELETED: " D",
    StatusKind.UNTRACKED: "??",
    StatusKind.MODIFIED_STAGED: "M ",
    StatusKind.ADDED_STAGED: "A ",
    StatusKind.DELETED_STAGED: "D ",
    StatusKind.RENAMED: "R ",
    StatusKind.CONFLICTED: "UU",
}


@dataclass(frozen=True)
class FileStatus:
    """One working-tree status entry."""

    path: str
    status: StatusKind

    @property
    def is_staged(self) -> bool:
        return self.status in _STAGED_KINDS

    @property
    def badge(self) -> str:
        return STATUS_BADGES[self.status]


__all__ = [
    "SHORT_ID_LENGTH",
    "RefKind",
    "Reference",
    "Commit",
    "StatusKind",
    "FileStatus",
    "STATUS_BADGES",
]
