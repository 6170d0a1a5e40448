"""Pure frame rendering.

``render_frame`` maps the current ``AppState`` to exactly ``height`` styled
lines. It performs no I/O; the terminal driver writes the result.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..diff import file_for_line, render_diff_row
from ..graph import format_graph_row, format_relative_time
from ..models import FileStatus, StatusKind
from ..runtime.layout import body_rows, sidebar_band_rows, sidebar_width
from ..runtime.state import AppState, Panel, ViewMode
from ..ui_theme import UITheme, resolve_theme
from .ansi import clip_ansi_line, pad_ansi_line
from .help import render_help_lines

SIDEBAR_MODES = frozenset({ViewMode.LIST, ViewMode.SEARCH, ViewMode.FILTER, ViewMode.BRANCH_INPUT})
STATS_BAR_WIDTH = 20

FOOTER_HINTS: dict[ViewMode, str] = {
    ViewMode.LIST: (
        "Enter details  D diff  c checkout  / search  f filter  b branch  Ctrl+P commands  ? help  q quit"
    ),
    ViewMode.DETAILS: "j/k move  D diff  c checkout  b branch  Esc back",
    ViewMode.DIFF: "j/k scroll  PageUp/PageDown page  g/G top/bottom  ? help  Esc back",
    ViewMode.HELP: "Esc/q/? close help",
    ViewMode.BRANCH_INPUT: "Enter create  Esc cancel",
    ViewMode.SEARCH: "type to search  Up/Down match  Enter keep  Esc clear",
    ViewMode.FILTER: "Tab mode  Enter apply  Esc clear filter",
    ViewMode.STATS: "Esc/q back",
    ViewMode.COMMAND_PALETTE: "type to filter  Up/Down rotate  Enter run  Esc close",
}


def _status_color(file_status: FileStatus, theme: UITheme) -> str:
    if file_status.status in {StatusKind.ADDED, StatusKind.ADDED_STAGED}:
        return theme.file_added
    if file_status.status in {StatusKind.DELETED, StatusKind.DELETED_STAGED, StatusKind.CONFLICTED}:
        return theme.file_deleted
    if file_status.status is StatusKind.UNTRACKED:
        return theme.file_untracked
    return theme.file_modified


def _panel_header(title: str, panel: Panel, state: AppState, theme: UITheme) -> str:
    style = theme.panel_active if state.active_panel is panel else theme.panel_inactive
    return f"{style}{title}{theme.reset}"


def _window(items: list[str], selected: int, rows: int) -> list[str]:
    """Return at most ``rows`` items keeping ``selected`` in view."""
    if rows <= 0:
        return []
    start = max(0, min(selected - rows + 1, len(items) - rows)) if selected >= rows else 0
    return items[start:start + rows]


def render_sidebar(state: AppState, theme: UITheme, rows: int) -> list[str]:
    """Files, Branches and Commits panels stacked in three bands."""
    files_rows, branch_rows, commit_rows = sidebar_band_rows(rows)

    file_lines = []
    for idx, file_status in enumerate(state.files):
        marker = ">" if idx == state.file_selected and state.active_panel is Panel.FILES else " "
        color = _status_color(file_status, theme)
        file_lines.append(f"{marker}{color}{file_status.badge}{theme.reset} {file_status.path}")
    if not file_lines:
        file_lines = [f" {theme.dim}clean{theme.reset}"]
    files = [_panel_header(f"Files ({len(state.files)})", Panel.FILES, state, theme)]
    files += _window(file_lines, state.file_selected, files_rows - 1)

    branch_lines = []
    for idx, name in enumerate(state.branches):
        marker = ">" if idx == state.branch_selected and state.active_panel is Panel.BRANCHES else " "
        current = "*" if name == state.current_branch else " "
        branch_lines.append(f"{marker}{current}{theme.branch_name}{name}{theme.reset}")
    branches = [_panel_header(f"Branches ({len(state.branches)})", Panel.BRANCHES, state, theme)]
    branches += _window(branch_lines, state.branch_selected, branch_rows - 1)

    commits = [_panel_header(f"Commits ({len(state.visible_nodes)})", Panel.COMMITS, state, theme)]
    commit = state.selected_commit()
    if commit is not None:
        commits.append(f" {theme.commit_id}{commit.short_id}{theme.reset} {commit.summary}")
        commits.append(f" {theme.author}{commit.author}{theme.reset}")
    if state.active_filter is not None:
        mode, query = state.active_filter
        commits.append(f" {theme.dim}filter {mode.value}: {query}{theme.reset}")
    if state.search_query:
        commits.append(f" {theme.dim}search: {state.search_query} ({len(state.search_matches)}){theme.reset}")

    out: list[str] = []
    for band, size in ((files, files_rows), (branches, branch_rows), (commits, commit_rows)):
        band = band[:size]
        out.extend(band + [""] * (size - len(band)))
    return out[:rows]


def render_commit_list(state: AppState, theme: UITheme, rows: int, now: datetime) -> list[str]:
    if not state.visible_nodes:
        message = "No commits match the filter" if state.active_filter else "No commits"
        return [f"{theme.dim}{message}{theme.reset}"]
    end = min(len(state.visible_nodes), state.scroll + rows)
    return [
        format_graph_row(state.visible_nodes[idx], idx, state.selected, theme, now)
        for idx in range(state.scroll, end)
    ]


def render_details(state: AppState, theme: UITheme, now: datetime) -> list[str]:
    commit = state.selected_commit()
    if commit is None:
        return [f"{theme.dim}No commit selected{theme.reset}"]
    stamp = commit.timestamp.strftime("%Y-%m-%d %H:%M:%S %z")
    refs = ", ".join(ref.display_name for ref in commit.refs)
    parents = ", ".join(commit.parent_ids) if commit.parent_ids else "None (initial commit)"
    lines = [
        f"{theme.title}Commit:{theme.reset}  {theme.commit_id}{commit.id}{theme.reset}",
        f"{theme.title}Short:{theme.reset}   {commit.short_id}",
        f"{theme.title}Author:{theme.reset}  {theme.author}{commit.author} <{commit.email}>{theme.reset}",
        f"{theme.title}Date:{theme.reset}    {stamp} ({format_relative_time(commit.timestamp, now)})",
    ]
    if refs:
        lines.append(f"{theme.title}Refs:{theme.reset}    {theme.branch_name}{refs}{theme.reset}")
    lines.append("")
    lines.extend(f"    {line}" for line in commit.message.splitlines())
    lines.append("")
    lines.append(f"{theme.title}Parents:{theme.reset} {parents}")
    return lines


def render_diff(state: AppState, theme: UITheme, rows: int) -> list[str]:
    lines = [f"{theme.title}{state.diff_title}{theme.reset}"]
    if state.diff_stats is not None:
        lines[0] += f"  {theme.dim}{state.diff_stats.format_file_info()}{theme.reset}"
    end = min(len(state.diff_lines), state.diff_scroll + max(0, rows - 1))
    for idx in range(state.diff_scroll, end):
        path = file_for_line(state.diff_lines, idx) or state.diff_path
        lines.append(render_diff_row(state.diff_lines[idx], theme, path))
    return lines


def render_stats(state: AppState, theme: UITheme) -> list[str]:
    stats = state.repo_stats
    lines = [
        f"{theme.title}Repository statistics{theme.reset}",
        "",
        f"Total commits:  {stats.total_commits}",
        f"Authors:        {stats.unique_authors}",
        f"Last 24 hours:  {stats.commits_today}",
        f"Last 7 days:    {stats.commits_this_week}",
        f"Last 30 days:   {stats.commits_this_month}",
        "",
        f"{theme.help_heading}Top authors{theme.reset}",
    ]
    top = stats.top_authors()
    most = top[0][1] if top else 0
    for author, count in top:
        bar = "█" * max(1, round(STATS_BAR_WIDTH * count / most)) if most else ""
        lines.append(f"  {theme.author}{author:<24}{theme.reset} {count:>5} {theme.branch_name}{bar}{theme.reset}")
    return lines


def render_palette(state: AppState, theme: UITheme) -> list[str]:
    lines = [f"{theme.title}Command palette{theme.reset}"]
    if not state.palette_items:
        lines.append(f"  {theme.dim}no matching commands{theme.reset}")
    for position, item in enumerate(state.palette_items):
        text = f"{item.name:<20} {item.description}  [{item.keys}]"
        if position == 0:
            lines.append(f"{theme.reverse}> {text}{theme.reset}")
        else:
            lines.append(f"  {text}")
    return lines


def render_status_line(state: AppState, theme: UITheme) -> str:
    mode = state.mode
    if mode is ViewMode.SEARCH or (mode is ViewMode.LIST and state.search_typing):
        position = f"{state.search_match_index + 1}/{len(state.search_matches)}" if state.search_matches else "0/0"
        return f"{theme.search_match}/{theme.reset}{state.search_query}  {theme.dim}[{position}]{theme.reset}"
    if mode is ViewMode.FILTER:
        return f"Filter [{state.filter_mode.value}]: {state.filter_input}"
    if mode is ViewMode.BRANCH_INPUT:
        return f"New branch: {state.branch_input}"
    if mode is ViewMode.COMMAND_PALETTE:
        return f"> {state.palette_query}"
    if state.status_message:
        return f"{theme.status_message}>> {state.status_message}{theme.reset}"
    if mode is ViewMode.DIFF and state.diff_stats is not None:
        return f"{theme.dim}{state.diff_stats.format_summary()}{theme.reset}"
    return ""


def render_title(state: AppState, theme: UITheme) -> str:
    branch = state.current_branch or "detached"
    parts = [
        f"{theme.title} gitlane{theme.reset}",
        state.repo_name,
        f"on {theme.branch_name}{branch}{theme.reset}",
    ]
    parts.append(f"{len(state.visible_nodes)}/{len(state.commits)} commits")
    if state.active_filter is not None:
        mode, query = state.active_filter
        parts.append(f"filter {mode.value}: {query}")
    return "  ".join(part for part in parts if part)


def render_body(state: AppState, theme: UITheme, width: int, rows: int, now: datetime) -> list[str]:
    mode = state.mode
    if mode is ViewMode.DETAILS:
        return render_details(state, theme, now)
    if mode is ViewMode.DIFF:
        return render_diff(state, theme, rows)
    if mode is ViewMode.HELP:
        return render_help_lines(theme)
    if mode is ViewMode.STATS:
        return render_stats(state, theme)
    if mode is ViewMode.COMMAND_PALETTE:
        return render_palette(state, theme)

    side = sidebar_width(width, state.show_sidebar and mode in SIDEBAR_MODES)
    list_rows = min(rows, state.page_size)
    main = render_commit_list(state, theme, list_rows, now)
    if side == 0:
        return main
    sidebar = render_sidebar(state, theme, list_rows)
    divider = f"{theme.border}│{theme.reset}"
    out: list[str] = []
    for row in range(max(len(sidebar), len(main))):
        left = sidebar[row] if row < len(sidebar) else ""
        right = main[row] if row < len(main) else ""
        out.append(f"{pad_ansi_line(left, side - 1)}{divider}{clip_ansi_line(right, width - side)}")
    return out


def render_frame(state: AppState, width: int, height: int, now: datetime | None = None) -> list[str]:
    """Render the whole screen as exactly ``height`` lines of at most ``width`` columns."""
    if now is None:
        now = datetime.now(timezone.utc)
    theme = resolve_theme(state.theme_name, no_color=state.no_color)
    rows = body_rows(height)
    body = render_body(state, theme, width, rows, now)[:rows]
    body += [""] * (rows - len(body))
    footer = f"{theme.dim}{FOOTER_HINTS[state.mode]}{theme.reset}"
    lines = [render_title(state, theme), *body, render_status_line(state, theme), footer]
    return [clip_ansi_line(line, width) for line in lines[:max(1, height)]]


__all__ = ["render_frame"]
