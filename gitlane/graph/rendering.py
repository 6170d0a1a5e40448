"""Pure row formatting for graph nodes."""

from __future__ import annotations

from datetime import datetime, timezone

from ..models import RefKind
from ..ui_theme import UITheme, lane_color
from .types import CommitType, GraphNode, Lane

LANE_PASS_THROUGH = "│"
LANE_MERGE_TEE = "┤"
LANE_BLANK = " "
PRIMARY_SYMBOL = "●"
SECONDARY_SYMBOL = "○"

COMMIT_TYPE_GLYPHS: dict[CommitType, str] = {
    CommitType.INITIAL: "◇",
    CommitType.BRANCH: "⑂",
    CommitType.MERGE: "⊕",
    CommitType.TAG: "⚑",
    CommitType.REVERT: "↺",
    CommitType.SQUASH: "≡",
    CommitType.REGULAR: "",
}


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """Render ``timestamp`` as a coarse age relative to ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    total_seconds = int((now - timestamp).total_seconds())
    if total_seconds < 60:
        return "just now"
    minutes = total_seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    if days < 365:
        return f"{days // 30}mo ago"
    return f"{days // 365}y ago"


def lane_glyph(lane: Lane) -> str:
    if not lane.continuing:
        return LANE_BLANK
    if lane.is_merge:
        return LANE_MERGE_TEE
    return LANE_PASS_THROUGH


def branch_names(node: GraphNode) -> list[str]:
    """Local branch and remote names decorating the node's commit."""
    names: list[str] = []
    for ref in node.commit.refs:
        if ref.kind not in {RefKind.BRANCH, RefKind.REMOTE}:
            continue
        name = ref.display_name
        if name and not name.endswith("/HEAD"):
            names.append(name)
    return names


def tag_names(node: GraphNode) -> list[str]:
    return [ref.display_name for ref in node.commit.refs if ref.kind is RefKind.TAG]


def format_graph_row(
    node: GraphNode,
    row_index: int,
    selected_index: int,
    theme: UITheme,
    now: datetime | None = None,
) -> str:
    """Render one graph row as an ANSI string.

    Layout: lane glyphs, selection marker, type symbol, short id, summary,
    relative time, then optional branch and tag decorations.
    """
    reset = theme.reset
    out: list[str] = []
    for lane in node.lanes:
        color = lane_color(theme, lane.color)
        glyph = lane_glyph(lane)
        out.append(f"{color}{glyph}{reset}" if color and glyph != LANE_BLANK else glyph)

    out.append(">" if row_index == selected_index else " ")

    symbol = PRIMARY_SYMBOL if node.is_primary else SECONDARY_SYMBOL
    glyph = COMMIT_TYPE_GLYPHS[node.commit_type]
    symbol_color = theme.primary_marker if node.is_primary else lane_color(theme, node.lane_index)
    out.append(f" {symbol_color}{symbol}{glyph}{reset} ")

    short_id = f"{node.commit.short_id}*" if node.is_primary else node.commit.short_id
    out.append(f"{theme.commit_id}{short_id}{reset}")
    out.append(f" {theme.text}{node.commit.summary}{reset}")
    out.append(f" {theme.commit_date}({format_relative_time(node.commit.timestamp, now)}){reset}")

    branches = branch_names(node)
    if branches:
        out.append(f" {theme.branch_name}[{', '.join(branches)}]{reset}")
    tags = tag_names(node)
    if tags:
        out.append(f" {theme.tag_name}(tags: {', '.join(tags)}){reset}")
    return "".join(out)
