"""UI theme definitions and selection helpers.

Themes are ANSI palettes for graph rows, diff lines, panels, and chrome.
The ``plain`` theme backs ``--no-color`` and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    bold: str
    title: str
    text: str
    dim: str
    border: str
    commit_id: str
    commit_date: str
    author: str
    branch_name: str
    tag_name: str
    primary_marker: str
    status_message: str
    panel_active: str
    panel_inactive: str
    file_added: str
    file_modified: str
    file_deleted: str
    file_untracked: str
    search_match: str
    diff_addition: str
    diff_deletion: str
    diff_header: str
    diff_meta: str
    diff_hunk_header: str
    diff_context: str
    diff_line_number: str
    syntax_keyword: str
    syntax_type: str
    syntax_string: str
    syntax_number: str
    syntax_comment: str
    help_heading: str
    help_key: str
    lane_colors: tuple[str, ...]


DARK_THEME = UITheme(
    name="dark",
    reset="\033[0m",
    reverse="\033[7m",
    bold="\033[1m",
    title="\033[1;38;2;0;191;255m",
    text="\033[38;2;200;200;200m",
    dim="\033[2;38;5;250m",
    border="\033[38;2;255;215;0m",
    commit_id="\033[38;2;170;170;170m",
    commit_date="\033[38;2;150;150;150m",
    author="\033[38;2;120;120;255m",
    branch_name="\033[38;2;0;255;127m",
    tag_name="\033[1;38;2;255;215;0m",
    primary_marker="\033[1;38;2;255;0;128m",
    status_message="\033[33m",
    panel_active="\033[1;7;38;2;0;191;255m",
    panel_inactive="\033[38;2;255;215;0m",
    file_added="\033[38;2;0;255;127m",
    file_modified="\033[38;2;255;215;0m",
    file_deleted="\033[38;2;255;69;0m",
    file_untracked="\033[38;2;255;165;0m",
    search_match="\033[30;43m",
    diff_addition="\033[1;38;2;0;255;127m",
    diff_deletion="\033[2;38;2;255;69;0m",
    diff_header="\033[1;38;2;255;215;0m",
    diff_meta="\033[38;2;136;192;208m",
    diff_hunk_header="\033[1;38;2;189;147;249m",
    diff_context="\033[38;2;200;200;200m",
    diff_line_number="\033[38;2;100;100;100m",
    syntax_keyword="\033[1;38;5;81m",
    syntax_type="\033[38;5;229m",
    syntax_string="\033[38;5;114m",
    syntax_number="\033[38;5;141m",
    syntax_comment="\033[2;38;5;245m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    lane_colors=(
        "\033[38;5;42m",
        "\033[38;5;33m",
        "\033[38;5;214m",
        "\033[38;5;135m",
        "\033[38;5;203m",
        "\033[38;5;44m",
        "\033[38;5;205m",
        "\033[38;5;137m",
    ),
)

LIGHT_THEME = UITheme(
    name="light",
    reset="\033[0m",
    reverse="\033[7m",
    bold="\033[1m",
    title="\033[1;34m",
    text="\033[90m",
    dim="\033[2m",
    border="\033[30m",
    commit_id="\033[38;5;240m",
    commit_date="\033[38;5;244m",
    author="\033[34m",
    branch_name="\033[32m",
    tag_name="\033[1;38;5;136m",
    primary_marker="\033[1;35m",
    status_message="\033[38;5;130m",
    panel_active="\033[1;7;34m",
    panel_inactive="\033[30m",
    file_added="\033[32m",
    file_modified="\033[38;5;136m",
    file_deleted="\033[31m",
    file_untracked="\033[38;5;166m",
    search_match="\033[30;103m",
    diff_addition="\033[1;32m",
    diff_deletion="\033[2;31m",
    diff_header="\033[1;38;5;136m",
    diff_meta="\033[34m",
    diff_hunk_header="\033[1;35m",
    diff_context="\033[90m",
    diff_line_number="\033[37m",
    syntax_keyword="\033[1;34m",
    syntax_type="\033[38;5;130m",
    syntax_string="\033[32m",
    syntax_number="\033[35m",
    syntax_comment="\033[2;37m",
    help_heading="\033[1;34m",
    help_key="\033[38;5;130m",
    lane_colors=(
        "\033[32m",
        "\033[34m",
        "\033[38;5;166m",
        "\033[35m",
        "\033[31m",
        "\033[36m",
        "\033[38;5;162m",
        "\033[38;5;94m",
    ),
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    bold="",
    title="",
    text="",
    dim="",
    border="",
    commit_id="",
    commit_date="",
    author="",
    branch_name="",
    tag_name="",
    primary_marker="",
    status_message="",
    panel_active="",
    panel_inactive="",
    file_added="",
    file_modified="",
    file_deleted="",
    file_untracked="",
    search_match="",
    diff_addition="",
    diff_deletion="",
    diff_header="",
    diff_meta="",
    diff_hunk_header="",
    diff_context="",
    diff_line_number="",
    syntax_keyword="",
    syntax_type="",
    syntax_string="",
    syntax_number="",
    syntax_comment="",
    help_heading="",
    help_key="",
    lane_colors=("",),
)

_THEMES: dict[str, UITheme] = {
    DARK_THEME.name: DARK_THEME,
    LIGHT_THEME.name: LIGHT_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to dark."""
    if not name:
        return DARK_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DARK_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def next_theme_name(name: str | None) -> str:
    """Return the theme that follows ``name`` in toggle order."""
    names = available_theme_names()
    current = normalize_theme_name(name)
    return names[(names.index(current) + 1) % len(names)]


def lane_color(theme: UITheme, slot: int) -> str:
    return theme.lane_colors[slot % len(theme.lane_colors)]


__all__ = [
    "UITheme",
    "DARK_THEME",
    "LIGHT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "next_theme_name",
    "lane_color",
]
