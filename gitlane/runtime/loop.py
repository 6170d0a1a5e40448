"""Main interactive event loop for the terminal UI.

Each iteration sizes the viewport, draws one full frame, and handles at most
one input event. Feature logic lives in ``App``; this module is wiring only.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from ..input import read_key
from ..render import render_frame
from .app import App
from .layout import body_rows
from .terminal import TerminalController

logger = logging.getLogger(__name__)

POLL_TIMEOUT_MS = 50


def sync_viewport(app: App, columns: int, lines: int) -> None:
    """Fit the page size to the terminal, capped by the configured page size."""
    state = app.state
    state.screen_width = columns
    app.set_page_size(min(state.page_size_limit, body_rows(lines)))


def run_main_loop(
    app: App,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    read: Callable[[int, int | None], str] = read_key,
) -> None:
    """Run until a handler asks to quit."""
    state = app.state
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            sync_viewport(app, term.columns, term.lines)
            app.tick()
            terminal.write_frame(render_frame(state, term.columns, term.lines))

            key = read(stdin_fd, POLL_TIMEOUT_MS)
            if not key:
                continue
            logger.debug("key %s in mode %s", key, state.mode.value)
            if app.handle_event(key):
                break
