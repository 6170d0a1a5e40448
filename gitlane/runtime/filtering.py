"""Case-insensitive filter predicates and search matching over graph rows."""

from __future__ import annotations

from collections.abc import Sequence

from ..graph import GraphNode
from ..models import Commit
from .state import FilterMode


def commit_matches_filter(commit: Commit, mode: FilterMode, query: str) -> bool:
    needle = query.lower()
    if mode is FilterMode.AUTHOR:
        return needle in commit.author.lower() or needle in commit.email.lower()
    if mode is FilterMode.MESSAGE:
        return needle in commit.summary.lower() or needle in commit.message.lower()
    return needle in commit.timestamp.strftime("%Y-%m-%d")


def filter_nodes(nodes: Sequence[GraphNode], mode: FilterMode, query: str) -> list[GraphNode]:
    """Return the rows matching ``query``; an empty query keeps every row."""
    if not query:
        return list(nodes)
    return [node for node in nodes if commit_matches_filter(node.commit, mode, query)]


def commit_matches_search(commit: Commit, query: str) -> bool:
    needle = query.lower()
    return (
        needle in commit.summary.lower()
        or needle in commit.message.lower()
        or needle in commit.author.lower()
        or needle in commit.short_id.lower()
    )


def search_matches(nodes: Sequence[GraphNode], query: str) -> list[int]:
    """Return ordered row indices whose commit matches ``query``."""
    if not query:
        return []
    return [idx for idx, node in enumerate(nodes) if commit_matches_search(node.commit, query)]
