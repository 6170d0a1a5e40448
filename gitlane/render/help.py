"""Key binding reference shown in help mode."""

from __future__ import annotations

from ..ui_theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "COMMITS",
        (
            ("j/k  Up/Down", "move selection"),
            ("PageUp/PageDown", "move one page"),
            ("Home/End  g/G", "first / last commit"),
            ("Enter", "commit details"),
            ("D", "commit diff"),
            ("b", "create branch at commit"),
            ("c", "check out commit"),
        ),
    ),
    (
        "SEARCH + FILTER",
        (
            ("/", "incremental search"),
            ("n/N", "next / previous match"),
            ("f", "filter (Tab cycles author, message, date)"),
            ("Esc", "clear search"),
        ),
    ),
    (
        "PANELS",
        (
            ("Tab/Shift+Tab", "next / previous panel"),
            ("v", "toggle sidebar"),
            ("Space", "stage or unstage file (Files panel)"),
            ("a/u", "stage all / unstage all (Files panel)"),
            ("Enter", "working tree diff (Files panel)"),
        ),
    ),
    (
        "GENERAL",
        (
            ("Ctrl+P", "command palette"),
            ("s", "repository stats"),
            ("t", "toggle theme"),
            ("r", "refresh"),
            ("?", "help"),
            ("q", "quit"),
        ),
    ),
)

KEY_COLUMN_WIDTH = 18


def render_help_lines(theme: UITheme) -> list[str]:
    lines: list[str] = []
    for heading, bindings in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{heading}{theme.reset}")
        for keys, description in bindings:
            lines.append(f"  {theme.help_key}{keys:<{KEY_COLUMN_WIDTH}}{theme.reset} {description}")
    return lines
