"""Commit graph layout and row rendering."""

from .build import build_commit_graph, classify_commit
from .rendering import format_graph_row, format_relative_time
from .types import LANE_PALETTE_SIZE, CommitType, GraphNode, Lane

__all__ = [
    "LANE_PALETTE_SIZE",
    "CommitType",
    "GraphNode",
    "Lane",
    "build_commit_graph",
    "classify_commit",
    "format_graph_row",
    "format_relative_time",
]
