"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse reporting.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

_ENABLE_MOUSE = b"\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_DISABLE_MOUSE = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l"


class TerminalController:
    """Switch the controlling terminal in and out of full-screen TUI mode."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._mouse_reporting_enabled = False

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Alternate screen, hidden cursor, SGR mouse reporting.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l" + _ENABLE_MOUSE)
        self._mouse_reporting_enabled = True

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, _DISABLE_MOUSE + b"\x1b[?25h\x1b[?1049l")
        self._mouse_reporting_enabled = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def set_mouse_reporting(self, enabled: bool) -> None:
        desired = bool(enabled)
        if desired == self._mouse_reporting_enabled:
            return
        os.write(self.stdout_fd, _ENABLE_MOUSE if desired else _DISABLE_MOUSE)
        self._mouse_reporting_enabled = desired

    def write_frame(self, lines: list[str]) -> None:
        """Home the cursor and paint ``lines`` top to bottom, clearing each row."""
        payload = "\x1b[H" + "\r\n".join(f"{line}\x1b[K" for line in lines) + "\x1b[J"
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
