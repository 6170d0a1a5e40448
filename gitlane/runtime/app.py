"""Interactive state machine: one key handler per view mode.

``App`` owns the single ``AppState`` and is the only thing that mutates it.
Git side effects are synchronous; a ``GitError`` never escapes
``handle_event`` and is reported on the status line instead.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from ..diff import count_stats, parse_diff
from ..git import GitError
from ..graph import build_commit_graph
from ..input import ENTER_KEYS, KeyComboRegistry
from ..models import Commit, RefKind
from ..ui_theme import next_theme_name
from .command_palette import COMMAND_PALETTE_ITEMS, filter_commands, rotate
from .filtering import filter_nodes, search_matches
from .layout import LIST_TOP_ROW, SIDEBAR_WIDTH, panel_at_row, sidebar_width
from .mouse import (
    LEFT_DOWN,
    WHEEL_DOWN,
    WHEEL_UP,
    MouseEvent,
    is_double_click,
    parse_mouse_token,
    row_to_index,
)
from .navigation import (
    clamp_index,
    follow_selection,
    jump_to_end,
    jump_to_start,
    max_scroll,
    move_selection,
    scroll_by,
)
from .state import (
    FILTER_MODE_ORDER,
    PANEL_ORDER,
    STATUS_MESSAGE_SECONDS,
    AppState,
    Panel,
    ViewMode,
)
from .stats import compute_repo_stats

logger = logging.getLogger(__name__)

BRANCH_NAME_EXTRA_CHARS = frozenset("-_/.")


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class App:
    """Dispatch decoded key tokens to the handler of the current mode.

    ``repository`` is any object with the ``GitRepository`` methods.
    ``persist_setting`` receives ``(key, value)`` when the theme or sidebar
    preference changes.
    """

    def __init__(
        self,
        state: AppState,
        repository,
        *,
        max_commits: int | None = None,
        monotonic: Callable[[], float] = time.monotonic,
        persist_setting: Callable[[str, object], None] | None = None,
    ) -> None:
        self.state = state
        self.repository = repository
        self.max_commits = max_commits
        self._monotonic = monotonic
        self._persist_setting = persist_setting
        self._mode_handlers: dict[ViewMode, Callable[[str], bool]] = {
            ViewMode.LIST: self._handle_list_key,
            ViewMode.DETAILS: self._handle_details_key,
            ViewMode.DIFF: self._handle_diff_key,
            ViewMode.HELP: self._handle_help_key,
            ViewMode.BRANCH_INPUT: self._handle_branch_input_key,
            ViewMode.SEARCH: self._handle_search_key,
            ViewMode.FILTER: self._handle_filter_key,
            ViewMode.STATS: self._handle_stats_key,
            ViewMode.COMMAND_PALETTE: self._handle_palette_key,
        }
        self._commands: dict[str, Callable[[], bool | None]] = {
            "move_down": lambda: self.move_selection(1),
            "move_up": lambda: self.move_selection(-1),
            "page_down": lambda: self.move_selection(self.state.page_size),
            "page_up": lambda: self.move_selection(-self.state.page_size),
            "go_to_start": self.go_to_start,
            "go_to_end": self.go_to_end,
            "next_panel": lambda: self.cycle_panel(1),
            "prev_panel": lambda: self.cycle_panel(-1),
            "toggle_sidebar": self.toggle_sidebar,
            "toggle_stage": self.toggle_selected_file_stage,
            "stage_all": self.stage_all,
            "unstage_all": self.unstage_all,
            "toggle_theme": self.toggle_theme,
            "search": self.open_search,
            "filter": self.open_filter,
            "stats": lambda: self._enter(ViewMode.STATS),
            "view_diff": self.show_commit_diff,
            "view_details": self.show_details,
            "create_branch": self.start_branch_input,
            "checkout": self.checkout_selected,
            "refresh": self.refresh_and_report,
            "help": lambda: self._enter(ViewMode.HELP),
            "quit": lambda: True,
        }
        self._list_keys = KeyComboRegistry().bind(["q"], self._commands["quit"])
        for combos, command_id in (
            (("j", "DOWN"), "move_down"),
            (("k", "UP"), "move_up"),
            (("PAGE_DOWN",), "page_down"),
            (("PAGE_UP",), "page_up"),
            (("HOME", "g"), "go_to_start"),
            (("END", "G"), "go_to_end"),
            (("ENTER_CR", "ENTER_LF"), "view_details"),
            (("D",), "view_diff"),
            (("f",), "filter"),
            (("s",), "stats"),
            (("b",), "create_branch"),
            (("c",), "checkout"),
            (("?",), "help"),
            (("t",), "toggle_theme"),
            (("v",), "toggle_sidebar"),
            (("TAB",), "next_panel"),
            (("SHIFT_TAB",), "prev_panel"),
            (("r",), "refresh"),
        ):
            self._list_keys.bind(combos, self._commands[command_id])
        self._list_keys.bind(["/"], self.start_search_typing)
        self._list_keys.bind(["n"], lambda: self.jump_to_match(1))
        self._list_keys.bind(["N"], lambda: self.jump_to_match(-1))
        self._list_keys.bind(["CTRL_P"], self.open_palette)
        self._list_keys.bind(["ESC"], self.clear_search)

        self._files_keys = (
            KeyComboRegistry()
            .bind(["j", "DOWN"], lambda: self.move_file_selection(1))
            .bind(["k", "UP"], lambda: self.move_file_selection(-1))
            .bind([" "], self.toggle_selected_file_stage)
            .bind(["a"], self.stage_all)
            .bind(["u"], self.unstage_all)
            .bind(["ENTER_CR", "ENTER_LF"], self.show_working_tree_diff)
        )
        self._branches_keys = (
            KeyComboRegistry()
            .bind(["j", "DOWN"], lambda: self.move_branch_selection(1))
            .bind(["k", "UP"], lambda: self.move_branch_selection(-1))
        )
        self._details_keys = (
            KeyComboRegistry()
            .bind(["j", "DOWN"], lambda: self.move_selection(1))
            .bind(["k", "UP"], lambda: self.move_selection(-1))
            .bind(["D"], self.show_commit_diff)
            .bind(["c"], self.checkout_selected)
            .bind(["b"], self.start_branch_input)
            .bind(["ESC", "q"], self.return_to_list)
        )
        self._diff_keys = (
            KeyComboRegistry()
            .bind(["j", "DOWN"], lambda: self.scroll_diff(1))
            .bind(["k", "UP"], lambda: self.scroll_diff(-1))
            .bind(["PAGE_DOWN", " "], lambda: self.scroll_diff(self.state.page_size))
            .bind(["PAGE_UP"], lambda: self.scroll_diff(-self.state.page_size))
            .bind(["HOME", "g"], lambda: self.scroll_diff(-len(self.state.diff_lines)))
            .bind(["END", "G"], lambda: self.scroll_diff(len(self.state.diff_lines)))
            .bind(["?"], lambda: self._enter(ViewMode.HELP))
            .bind(["ESC", "q"], self.return_to_list)
        )
        self._help_keys = KeyComboRegistry().bind(["ESC", "q", "?"], self.return_to_list)
        self._stats_keys = KeyComboRegistry().bind(["ESC", "q"], self.return_to_list)

    # ------------------------------------------------------------------
    # driver entry points

    def handle_event(self, key: str) -> bool:
        """Handle one key or mouse token; return ``True`` to stop the loop."""
        if not key:
            return False
        mouse = parse_mouse_token(key)
        if mouse is not None:
            self._handle_mouse(mouse)
            return False
        return self._mode_handlers[self.state.mode](key)

    def tick(self) -> None:
        """Expire the status message once its display time is over."""
        state = self.state
        if state.status_message and self._monotonic() >= state.status_message_until:
            state.status_message = ""
            state.status_message_until = 0.0

    def set_status(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self._monotonic() + STATUS_MESSAGE_SECONDS

    # ------------------------------------------------------------------
    # data loading

    def set_commits(self, commits: Sequence[Commit], head_id: str | None = None) -> None:
        """Replace the commit list and rebuild every derived structure."""
        state = self.state
        state.commits = list(commits)
        state.nodes = build_commit_graph(state.commits, head_id)
        state.repo_stats = compute_repo_stats(state.commits)
        self._apply_view()

    def refresh(self) -> None:
        """Reload commits, branches and file status from the repository."""
        repo = self.repository
        try:
            commits = repo.commits(self.max_commits)
            current_branch = repo.current_branch()
            references = repo.references()
        except GitError as exc:
            logger.warning("refresh failed: %s", exc)
            self.set_status(f"Refresh failed: {exc}")
            return
        self.state.current_branch = current_branch
        self.state.branches = [
            ref.display_name
            for ref in references
            if ref.kind in {RefKind.BRANCH, RefKind.REMOTE} and not ref.display_name.endswith("/HEAD")
        ]
        self.state.branch_selected = clamp_index(self.state.branch_selected, len(self.state.branches))
        self.set_commits(commits)
        self.refresh_files()

    def refresh_files(self) -> None:
        try:
            files = self.repository.file_statuses()
        except GitError as exc:
            logger.warning("status failed: %s", exc)
            self.set_status(f"Status failed: {exc}")
            return
        self.state.files = files
        self.state.file_selected = clamp_index(self.state.file_selected, len(files))

    def refresh_and_report(self) -> None:
        self.refresh()
        if not self.state.status_message:
            self.set_status(f"Loaded {len(self.state.commits)} commits")

    def _apply_view(self) -> None:
        state = self.state
        if state.active_filter is None:
            state.visible_nodes = list(state.nodes)
        else:
            mode, query = state.active_filter
            state.visible_nodes = filter_nodes(state.nodes, mode, query)
        count = len(state.visible_nodes)
        state.selected = clamp_index(state.selected, count)
        scroll = follow_selection(state.selected, state.scroll, state.page_size)
        state.scroll = max(0, min(scroll, max_scroll(count, state.page_size)))
        state.search_matches = search_matches(state.visible_nodes, state.search_query)
        state.search_match_index = clamp_index(state.search_match_index, len(state.search_matches))

    # ------------------------------------------------------------------
    # navigation

    def _enter(self, mode: ViewMode) -> None:
        self.state.mode = mode

    def return_to_list(self) -> None:
        self.state.mode = ViewMode.LIST

    def select_index(self, index: int) -> None:
        state = self.state
        state.selected, state.scroll = move_selection(
            index, state.scroll, 0, len(state.visible_nodes), state.page_size
        )

    def move_selection(self, delta: int) -> None:
        state = self.state
        state.selected, state.scroll = move_selection(
            state.selected, state.scroll, delta, len(state.visible_nodes), state.page_size
        )

    def go_to_start(self) -> None:
        self.state.selected, self.state.scroll = jump_to_start()

    def go_to_end(self) -> None:
        self.state.selected, self.state.scroll = jump_to_end(len(self.state.visible_nodes), self.state.page_size)

    def move_file_selection(self, delta: int) -> None:
        self.state.file_selected = clamp_index(self.state.file_selected + delta, len(self.state.files))

    def move_branch_selection(self, delta: int) -> None:
        self.state.branch_selected = clamp_index(self.state.branch_selected + delta, len(self.state.branches))

    def scroll_diff(self, delta: int) -> None:
        state = self.state
        state.diff_scroll = scroll_by(state.diff_scroll, delta, len(state.diff_lines), state.page_size)

    def set_page_size(self, page_size: int) -> None:
        """Resize the viewport and pull both scroll offsets back into range."""
        state = self.state
        state.page_size = max(1, page_size)
        scroll = follow_selection(state.selected, state.scroll, state.page_size)
        state.scroll = max(0, min(scroll, max_scroll(len(state.visible_nodes), state.page_size)))
        state.diff_scroll = scroll_by(state.diff_scroll, 0, len(state.diff_lines), state.page_size)

    def cycle_panel(self, step: int) -> None:
        state = self.state
        position = PANEL_ORDER.index(state.active_panel)
        state.active_panel = PANEL_ORDER[(position + step) % len(PANEL_ORDER)]
        if state.active_panel is not Panel.COMMITS:
            state.show_sidebar = True

    def toggle_sidebar(self) -> None:
        state = self.state
        state.show_sidebar = not state.show_sidebar
        if not state.show_sidebar:
            state.active_panel = Panel.COMMITS
        self._persist("show_sidebar", state.show_sidebar)

    def toggle_theme(self) -> None:
        state = self.state
        if state.no_color:
            self.set_status("Colors are disabled")
            return
        state.theme_name = next_theme_name(state.theme_name)
        self._persist("theme", state.theme_name)
        self.set_status(f"Theme: {state.theme_name}")

    def _persist(self, key: str, value: object) -> None:
        if self._persist_setting is not None:
            self._persist_setting(key, value)

    # ------------------------------------------------------------------
    # views with side effects

    def show_details(self) -> None:
        if self.state.selected_commit() is None:
            self.set_status("No commit selected")
            return
        self._enter(ViewMode.DETAILS)

    def show_commit_diff(self) -> None:
        """Fetch the selected commit's diff, then switch to the diff view."""
        commit = self.state.selected_commit()
        if commit is None:
            self.set_status("No commit selected")
            return
        try:
            text = self.repository.commit_diff(commit)
        except GitError as exc:
            logger.warning("diff of %s failed: %s", commit.short_id, exc)
            text = f"Error fetching diff: {exc}"
        self._load_diff(f"{commit.short_id} {commit.summary}", text)

    def show_working_tree_diff(self) -> None:
        file_status = self.state.selected_file()
        if file_status is None:
            self.set_status("No file selected")
            return
        try:
            text = self.repository.working_tree_diff(file_status.path)
        except GitError as exc:
            logger.warning("working tree diff of %s failed: %s", file_status.path, exc)
            text = f"Error fetching diff: {exc}"
        if not text.strip():
            text = f"No diff against HEAD for {file_status.path}"
        self._load_diff(f"Working tree: {file_status.path}", text)

    def _load_diff(self, title: str, text: str) -> None:
        state = self.state
        state.diff_title = title
        state.diff_lines = parse_diff(text)
        state.diff_stats = count_stats(state.diff_lines)
        state.diff_path = state.diff_stats.current_file
        state.diff_scroll = 0
        state.mode = ViewMode.DIFF

    # ------------------------------------------------------------------
    # staging

    def toggle_selected_file_stage(self) -> None:
        file_status = self.state.selected_file()
        if file_status is None:
            self.set_status("No file selected")
            return
        try:
            if file_status.is_staged:
                self.repository.unstage_file(file_status.path)
                message = f"Unstaged {file_status.path}"
            else:
                self.repository.stage_file(file_status.path)
                message = f"Staged {file_status.path}"
        except GitError as exc:
            logger.warning("staging %s failed: %s", file_status.path, exc)
            self.set_status(f"Staging failed: {exc}")
            return
        self.refresh_files()
        self.set_status(message)

    def stage_all(self) -> None:
        try:
            self.repository.stage_all()
        except GitError as exc:
            logger.warning("stage all failed: %s", exc)
            self.set_status(f"Stage all failed: {exc}")
            return
        self.refresh_files()
        self.set_status("Staged all changes")

    def unstage_all(self) -> None:
        try:
            self.repository.unstage_all()
        except GitError as exc:
            logger.warning("unstage all failed: %s", exc)
            self.set_status(f"Unstage all failed: {exc}")
            return
        self.refresh_files()
        self.set_status("Unstaged all changes")

    # ------------------------------------------------------------------
    # search

    def start_search_typing(self) -> None:
        state = self.state
        state.search_typing = True
        state.search_query = ""
        state.search_matches = []
        state.search_match_index = 0

    def open_search(self) -> None:
        self.start_search_typing()
        self.state.search_typing = False
        self._enter(ViewMode.SEARCH)

    def clear_search(self) -> None:
        state = self.state
        state.search_typing = False
        state.search_query = ""
        state.search_matches = []
        state.search_match_index = 0

    def update_search(self) -> None:
        """Recompute matches for the current query and jump to the first one."""
        state = self.state
        state.search_matches = search_matches(state.visible_nodes, state.search_query)
        state.search_match_index = 0
        if state.search_matches:
            self.select_index(state.search_matches[0])

    def jump_to_match(self, step: int) -> None:
        state = self.state
        if not state.search_matches:
            return
        state.search_match_index = clamp_index(state.search_match_index + step, len(state.search_matches))
        self.select_index(state.search_matches[state.search_match_index])

    def _edit_search_query(self, key: str) -> bool:
        state = self.state
        if key == "BACKSPACE":
            state.search_query = state.search_query[:-1]
        elif _is_text_key(key):
            state.search_query += key
        else:
            return False
        self.update_search()
        return True

    def _handle_search_typing(self, key: str) -> bool:
        if key in ENTER_KEYS:
            self.state.search_typing = False
        elif key == "ESC":
            self.clear_search()
        else:
            self._edit_search_query(key)
        return False

    # ------------------------------------------------------------------
    # filter

    def open_filter(self) -> None:
        state = self.state
        if state.active_filter is not None:
            state.filter_mode, state.filter_input = state.active_filter
        else:
            state.filter_input = ""
        self._enter(ViewMode.FILTER)

    def apply_filter(self) -> None:
        state = self.state
        query = state.filter_input
        state.active_filter = (state.filter_mode, query) if query else None
        state.selected = 0
        state.scroll = 0
        self._apply_view()
        if state.active_filter is None:
            self.set_status("Filter cleared")
        else:
            self.set_status(
                f"Filter {state.filter_mode.value} '{query}': {len(state.visible_nodes)} commits"
            )

    def clear_filter(self) -> None:
        state = self.state
        state.filter_input = ""
        state.active_filter = None
        self._apply_view()

    # ------------------------------------------------------------------
    # branch creation

    def start_branch_input(self) -> None:
        self.state.branch_input = ""
        self._enter(ViewMode.BRANCH_INPUT)
        self.set_status("Enter branch name (or Esc to cancel):")

    def create_branch(self) -> None:
        state = self.state
        name = state.branch_input
        commit = state.selected_commit()
        state.branch_input = ""
        state.mode = ViewMode.LIST
        if commit is None:
            self.set_status("No commit selected")
            return
        try:
            self.repository.create_branch(name, commit.id)
        except GitError as exc:
            logger.warning("creating branch %s failed: %s", name, exc)
            self.set_status(f"Branch creation failed: {exc}")
            return
        self.refresh()
        self.set_status(f"Created branch '{name}' from {commit.short_id}")

    def checkout_selected(self) -> None:
        """Check out the selected commit as a detached HEAD."""
        commit = self.state.selected_commit()
        if commit is None:
            self.set_status("No commit selected")
            return
        try:
            self.repository.checkout(commit.id)
        except GitError as exc:
            logger.warning("checkout of %s failed: %s", commit.short_id, exc)
            self.set_status(f"Checkout failed: {exc}")
            return
        self.refresh()
        self.set_status(f"Checked out {commit.short_id}")

    # ------------------------------------------------------------------
    # command palette

    def open_palette(self) -> None:
        self.state.palette_query = ""
        self.state.palette_items = filter_commands("")
        self._enter(ViewMode.COMMAND_PALETTE)

    def run_command(self, command_id: str) -> bool:
        action = self._commands.get(command_id)
        if action is None:
            logger.debug("unknown palette command %s", command_id)
            return False
        return bool(action())

    # ------------------------------------------------------------------
    # mode handlers

    def _handle_list_key(self, key: str) -> bool:
        state = self.state
        if state.search_typing:
            return self._handle_search_typing(key)
        if state.active_panel is Panel.FILES:
            handled = self._files_keys.dispatch(key)
            if handled is not None:
                return handled
        elif state.active_panel is Panel.BRANCHES:
            handled = self._branches_keys.dispatch(key)
            if handled is not None:
                return handled
        return bool(self._list_keys.dispatch(key))

    def _handle_details_key(self, key: str) -> bool:
        self._details_keys.dispatch(key)
        return False

    def _handle_diff_key(self, key: str) -> bool:
        self._diff_keys.dispatch(key)
        return False

    def _handle_help_key(self, key: str) -> bool:
        self._help_keys.dispatch(key)
        return False

    def _handle_stats_key(self, key: str) -> bool:
        self._stats_keys.dispatch(key)
        return False

    def _handle_branch_input_key(self, key: str) -> bool:
        state = self.state
        if key == "ESC":
            state.branch_input = ""
            state.status_message = ""
            self.return_to_list()
        elif key in ENTER_KEYS:
            if state.branch_input:
                self.create_branch()
        elif key == "BACKSPACE":
            state.branch_input = state.branch_input[:-1]
        elif len(key) == 1 and key.isascii() and (key.isalnum() or key in BRANCH_NAME_EXTRA_CHARS):
            state.branch_input += key
        return False

    def _handle_search_key(self, key: str) -> bool:
        if key in ENTER_KEYS:
            self.return_to_list()
        elif key == "ESC":
            self.clear_search()
            self.return_to_list()
        elif key in {"DOWN", "CTRL_N"}:
            self.jump_to_match(1)
        elif key in {"UP", "CTRL_P"}:
            self.jump_to_match(-1)
        else:
            self._edit_search_query(key)
        return False

    def _handle_filter_key(self, key: str) -> bool:
        state = self.state
        if key == "TAB":
            position = FILTER_MODE_ORDER.index(state.filter_mode)
            state.filter_mode = FILTER_MODE_ORDER[(position + 1) % len(FILTER_MODE_ORDER)]
        elif key in ENTER_KEYS:
            self.apply_filter()
            self.return_to_list()
        elif key == "ESC":
            self.clear_filter()
            self.return_to_list()
        elif key == "BACKSPACE":
            state.filter_input = state.filter_input[:-1]
        elif _is_text_key(key):
            state.filter_input += key
        return False

    def _handle_palette_key(self, key: str) -> bool:
        state = self.state
        if key == "ESC":
            state.palette_query = ""
            state.palette_items = []
            self.return_to_list()
            return False
        if key in ENTER_KEYS:
            top = state.palette_items[0] if state.palette_items else None
            state.palette_query = ""
            state.palette_items = []
            self.return_to_list()
            if top is None:
                return False
            return self.run_command(top.id)
        if key in {"DOWN", "CTRL_N"}:
            state.palette_items = rotate(state.palette_items, 1)
        elif key in {"UP", "CTRL_P"}:
            state.palette_items = rotate(state.palette_items, -1)
        elif key == "BACKSPACE":
            state.palette_query = state.palette_query[:-1]
            state.palette_items = filter_commands(state.palette_query, COMMAND_PALETTE_ITEMS)
        elif _is_text_key(key):
            state.palette_query += key
            state.palette_items = filter_commands(state.palette_query, COMMAND_PALETTE_ITEMS)
        return False

    # ------------------------------------------------------------------
    # mouse

    def _in_sidebar(self, col: int) -> bool:
        state = self.state
        return sidebar_width(state.screen_width, state.show_sidebar) > 0 and col <= SIDEBAR_WIDTH

    def _handle_mouse(self, event: MouseEvent) -> None:
        state = self.state
        if event.kind in {WHEEL_UP, WHEEL_DOWN}:
            delta = -1 if event.kind == WHEEL_UP else 1
            if state.mode is ViewMode.DIFF:
                self.scroll_diff(delta)
            elif state.mode in {ViewMode.LIST, ViewMode.DETAILS}:
                self.move_selection(delta)
            return
        if event.kind != LEFT_DOWN or state.mode is not ViewMode.LIST:
            return
        if event.row < LIST_TOP_ROW or event.row >= LIST_TOP_ROW + state.page_size:
            return

        if self._in_sidebar(event.col):
            state.active_panel = panel_at_row(event.row, state.page_size)
            state.last_click_position = None
            return

        index = row_to_index(event.row, LIST_TOP_ROW, state.scroll, len(state.visible_nodes))
        if index is None:
            return
        now = self._monotonic()
        double = is_double_click(event.position, now, state.last_click_position, state.last_click_time)
        self.select_index(index)
        state.active_panel = Panel.COMMITS
        if double:
            state.last_click_position = None
            state.last_click_time = 0.0
            state.mode = ViewMode.DETAILS
            return
        state.last_click_position = event.position
        state.last_click_time = now
