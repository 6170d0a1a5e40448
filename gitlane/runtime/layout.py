"""Screen geometry shared by the renderer and mouse hit-testing.

Row and column numbers are 1-based, matching SGR mouse reports. The frame is
a title row, ``page_size`` body rows, a status row and a key-hint row.
"""

from __future__ import annotations

from .state import PANEL_ORDER, Panel

TITLE_ROWS = 1
FOOTER_ROWS = 2
LIST_TOP_ROW = TITLE_ROWS + 1
SIDEBAR_WIDTH = 30
MIN_MAIN_WIDTH = 20


def body_rows(height: int) -> int:
    return max(1, height - TITLE_ROWS - FOOTER_ROWS)


def sidebar_width(total_width: int, show_sidebar: bool) -> int:
    """Return the sidebar width including its divider, ``0`` when hidden."""
    if not show_sidebar or total_width < SIDEBAR_WIDTH + 1 + MIN_MAIN_WIDTH:
        return 0
    return SIDEBAR_WIDTH


def sidebar_band_rows(rows: int) -> tuple[int, int, int]:
    """Split ``rows`` into three near-equal bands; the last takes the remainder."""
    band = max(1, rows // len(PANEL_ORDER))
    return band, band, max(1, rows - 2 * band)


def panel_at_row(row: int, rows: int) -> Panel:
    offset = max(0, row - LIST_TOP_ROW)
    first, second, _ = sidebar_band_rows(rows)
    if offset < first:
        return PANEL_ORDER[0]
    if offset < first + second:
        return PANEL_ORDER[1]
    return PANEL_ORDER[2]
