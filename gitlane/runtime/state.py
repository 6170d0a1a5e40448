from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..diff import DiffLine, DiffStats
from ..graph import GraphNode
from ..models import Commit, FileStatus
from .command_palette import PaletteCommand
from .stats import RepoStats

DEFAULT_PAGE_SIZE = 20
STATUS_MESSAGE_SECONDS = 3.0


class ViewMode(Enum):
    LIST = "list"
    DETAILS = "details"
    DIFF = "diff"
    HELP = "help"
    BRANCH_INPUT = "branch_input"
    SEARCH = "search"
    FILTER = "filter"
    STATS = "stats"
    COMMAND_PALETTE = "command_palette"


class Panel(Enum):
    FILES = "files"
    BRANCHES = "branches"
    COMMITS = "commits"


PANEL_ORDER: tuple[Panel, ...] = (Panel.FILES, Panel.BRANCHES, Panel.COMMITS)


class FilterMode(Enum):
    AUTHOR = "author"
    MESSAGE = "message"
    DATE = "date"


FILTER_MODE_ORDER: tuple[FilterMode, ...] = (FilterMode.AUTHOR, FilterMode.MESSAGE, FilterMode.DATE)


@dataclass
class AppState:
    mode: ViewMode = ViewMode.LIST
    repo_name: str = ""
    commits: list[Commit] = field(default_factory=list)
    nodes: list[GraphNode] = field(default_factory=list)
    visible_nodes: list[GraphNode] = field(default_factory=list)
    selected: int = 0
    scroll: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_limit: int = DEFAULT_PAGE_SIZE
    screen_width: int = 80

    current_branch: str | None = None
    branches: list[str] = field(default_factory=list)
    branch_selected: int = 0
    files: list[FileStatus] = field(default_factory=list)
    file_selected: int = 0
    active_panel: Panel = Panel.COMMITS
    show_sidebar: bool = True

    search_query: str = ""
    search_typing: bool = False
    search_matches: list[int] = field(default_factory=list)
    search_match_index: int = 0

    filter_mode: FilterMode = FilterMode.AUTHOR
    filter_input: str = ""
    active_filter: tuple[FilterMode, str] | None = None

    branch_input: str = ""

    palette_query: str = ""
    palette_items: list[PaletteCommand] = field(default_factory=list)

    status_message: str = ""
    status_message_until: float = 0.0

    diff_title: str = ""
    diff_path: str = ""
    diff_lines: list[DiffLine] = field(default_factory=list)
    diff_stats: DiffStats | None = None
    diff_scroll: int = 0

    repo_stats: RepoStats = field(default_factory=RepoStats)
    theme_name: str = "dark"
    no_color: bool = False

    last_click_position: tuple[int, int] | None = None
    last_click_time: float = 0.0

    def selected_node(self) -> GraphNode | None:
        if 0 <= self.selected < len(self.visible_nodes):
            return self.visible_nodes[self.selected]
        return None

    def selected_commit(self) -> Commit | None:
        node = self.selected_node()
        return node.commit if node is not None else None

    def selected_file(self) -> FileStatus | None:
        if 0 <= self.file_selected < len(self.files):
            return self.files[self.file_selected]
        return None
