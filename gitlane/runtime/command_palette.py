"""Command palette catalog and query helpers.

The palette has no cursor: the filtered list is rotated and its first entry
is the one Enter executes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class PaletteCommand:
    id: str
    name: str
    description: str
    keys: str


COMMAND_PALETTE_ITEMS: tuple[PaletteCommand, ...] = (
    PaletteCommand("move_down", "Move down", "Select the next commit", "j / Down"),
    PaletteCommand("move_up", "Move up", "Select the previous commit", "k / Up"),
    PaletteCommand("page_down", "Page down", "Move one page down", "PageDown"),
    PaletteCommand("page_up", "Page up", "Move one page up", "PageUp"),
    PaletteCommand("go_to_start", "Go to first", "Jump to the newest commit", "Home / g"),
    PaletteCommand("go_to_end", "Go to last", "Jump to the oldest commit", "End / G"),
    PaletteCommand("next_panel", "Next panel", "Focus the next sidebar panel", "Tab"),
    PaletteCommand("prev_panel", "Previous panel", "Focus the previous sidebar panel", "Shift+Tab"),
    PaletteCommand("toggle_sidebar", "Toggle sidebar", "Show or hide the sidebar", "v"),
    PaletteCommand("toggle_stage", "Stage/unstage file", "Toggle staging of the selected file", "Space"),
    PaletteCommand("stage_all", "Stage all", "Stage every changed file", "a"),
    PaletteCommand("unstage_all", "Unstage all", "Unstage every staged file", "u"),
    PaletteCommand("toggle_theme", "Toggle theme", "Switch between color themes", "t"),
    PaletteCommand("search", "Search commits", "Search summaries, authors and ids", "/"),
    PaletteCommand("filter", "Filter commits", "Filter by author, message or date", "f"),
    PaletteCommand("stats", "Repository stats", "Show commit and author statistics", "s"),
    PaletteCommand("view_diff", "View diff", "Show the diff of the selected commit", "D"),
    PaletteCommand("view_details", "View details", "Show details of the selected commit", "Enter"),
    PaletteCommand("create_branch", "Create branch", "Create a branch at the selected commit", "b"),
    PaletteCommand("checkout", "Checkout commit", "Check out the selected commit", "c"),
    PaletteCommand("refresh", "Refresh", "Reload commits, branches and status", "r"),
    PaletteCommand("help", "Help", "Show key bindings", "?"),
    PaletteCommand("quit", "Quit", "Exit gitlane", "q"),
)


def filter_commands(query: str, items: Sequence[PaletteCommand] = COMMAND_PALETTE_ITEMS) -> list[PaletteCommand]:
    """Return catalog entries whose name, description or id contains ``query``."""
    needle = query.strip().lower()
    if not needle:
        return list(items)
    return [
        item
        for item in items
        if needle in item.name.lower() or needle in item.description.lower() or needle in item.id.lower()
    ]


def rotate(items: list[PaletteCommand], delta: int) -> list[PaletteCommand]:
    """Rotate left by ``delta`` (negative rotates right), wrapping around."""
    if not items:
        return items
    shift = delta % len(items)
    return items[shift:] + items[:shift]
