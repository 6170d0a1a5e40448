"""Lay out a flat commit list as a lane-annotated DAG.

Walks forward from root commits (children after parents) with an explicit work
stack so deep histories never hit the recursion limit. Every stack item owns
its own lane-vector snapshot; branching clones the vector, nothing is shared.
The final node order is strictly newest-first by timestamp.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import Commit, RefKind
from .types import LANE_PALETTE_SIZE, CommitType, GraphNode, Lane


@dataclass(frozen=True)
class _WorkItem:
    index: int
    lanes: tuple[bool, ...]
    lane_index: int


def classify_commit(commit: Commit, child_count: int) -> CommitType:
    """Return the commit type by fixed priority.

    TAG > MERGE > REVERT > SQUASH > INITIAL > BRANCH > REGULAR.
    """
    summary = commit.summary.lower()
    if commit.has_ref_kind(RefKind.TAG):
        return CommitType.TAG
    if len(commit.parent_ids) > 1 or child_count > 1 or summary.startswith("merge"):
        return CommitType.MERGE
    if summary.startswith("revert"):
        return CommitType.REVERT
    if summary.startswith("squash"):
        return CommitType.SQUASH
    if not commit.parent_ids:
        return CommitType.INITIAL
    if child_count > 1:
        return CommitType.BRANCH
    return CommitType.REGULAR


def _primary_chain(
    commits: Sequence[Commit],
    index_by_id: dict[str, int],
    head_id: str | None,
) -> set[int]:
    """Return indices on the first-parent chain starting at HEAD."""
    start: int | None = None
    if head_id is not None:
        start = index_by_id.get(head_id)
    if start is None:
        for idx, commit in enumerate(commits):
            if commit.has_ref_kind(RefKind.HEAD):
                start = idx
                break

    chain: set[int] = set()
    current = start
    while current is not None and current not in chain:
        chain.add(current)
        parents = commits[current].parent_ids
        current = index_by_id.get(parents[0]) if parents else None
    return chain


def _row_lanes(
    lanes: tuple[bool, ...],
    lane_index: int,
    *,
    owning_continues: bool,
    is_branch_point: bool,
    is_merge: bool,
) -> tuple[Lane, ...]:
    row: list[Lane] = []
    for column, continuing in enumerate(lanes):
        active = column == lane_index
        row.append(
            Lane(
                continuing=(continuing and owning_continues) if active else continuing,
                is_branch_point=active and is_branch_point,
                is_merge=active and is_merge,
                is_active=active,
                color=column % LANE_PALETTE_SIZE,
            )
        )
    return tuple(row)


def build_commit_graph(commits: Sequence[Commit], head_id: str | None = None) -> list[GraphNode]:
    """Build one render-ready ``GraphNode`` per commit, newest first.

    Parent ids outside ``commits`` are treated as absent. Duplicate commit ids
    are not supported.
    """
    if not commits:
        return []

    index_by_id = {commit.id: idx for idx, commit in enumerate(commits)}
    children: list[list[int]] = [[] for _ in commits]
    for idx, commit in enumerate(commits):
        for parent_id in commit.parent_ids:
            parent_idx = index_by_id.get(parent_id)
            if parent_idx is not None:
                children[parent_idx].append(idx)

    primary = _primary_chain(commits, index_by_id, head_id)

    roots = [
        idx
        for idx, commit in enumerate(commits)
        if not any(parent_id in index_by_id for parent_id in commit.parent_ids)
    ]

    visited = [False] * len(commits)
    laid_out: list[GraphNode] = []

    def walk(root: int) -> None:
        stack = [_WorkItem(index=root, lanes=(True,), lane_index=0)]
        while stack:
            item = stack.pop()
            if visited[item.index]:
                continue
            visited[item.index] = True

            commit = commits[item.index]
            child_indices = children[item.index]
            known_parent = any(parent_id in index_by_id for parent_id in commit.parent_ids)
            laid_out.append(
                GraphNode(
                    commit=commit,
                    is_primary=item.index in primary,
                    lanes=_row_lanes(
                        item.lanes,
                        item.lane_index,
                        owning_continues=known_parent or not commit.parent_ids,
                        is_branch_point=len(child_indices) > 1,
                        is_merge=len(commit.parent_ids) > 1,
                    ),
                    lane_index=item.lane_index,
                    commit_type=classify_commit(commit, len(child_indices)),
                )
            )

            pending: list[_WorkItem] = []
            branched = item.lanes
            for position, child in enumerate(child_indices):
                if position == 0:
                    pending.append(_WorkItem(child, item.lanes, item.lane_index))
                else:
                    # Siblings each open one more slot, so no two share a column.
                    branched = branched + (True,)
                    pending.append(_WorkItem(child, branched, len(branched) - 1))
            # Reverse so the first child is walked first.
            stack.extend(reversed(pending))

    for root in roots:
        walk(root)
    # Only reachable with cyclic parent links; keeps output length == input length.
    for idx in range(len(commits)):
        if not visited[idx]:
            walk(idx)

    return sorted(laid_out, key=lambda node: node.commit.timestamp, reverse=True)
