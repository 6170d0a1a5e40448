"""Graph node and lane datatypes shared by the builder and row renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..models import Commit

LANE_PALETTE_SIZE = 8


class CommitType(Enum):
    INITIAL = "initial"
    BRANCH = "branch"
    MERGE = "merge"
    TAG = "tag"
    REVERT = "revert"
    SQUASH = "squash"
    REGULAR = "regular"


@dataclass(frozen=True)
class Lane:
    """One column of the graph at one row."""

    continuing: bool
    is_branch_point: bool = False
    is_merge: bool = False
    is_active: bool = False
    color: int = 0


@dataclass(frozen=True)
class GraphNode:
    """A commit plus the layout derived for its row."""

    commit: Commit
    is_primary: bool
    lanes: tuple[Lane, ...]
    lane_index: int
    commit_type: CommitType
