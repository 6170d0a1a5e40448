"""Mouse token parsing and hit-testing helpers."""

from __future__ import annotations

from dataclasses import dataclass

DOUBLE_CLICK_SECONDS = 0.3

LEFT_DOWN = "MOUSE_LEFT_DOWN"
LEFT_UP = "MOUSE_LEFT_UP"
WHEEL_UP = "MOUSE_WHEEL_UP"
WHEEL_DOWN = "MOUSE_WHEEL_DOWN"


@dataclass(frozen=True)
class MouseEvent:
    kind: str
    col: int
    row: int

    @property
    def position(self) -> tuple[int, int]:
        return self.col, self.row


def parse_mouse_token(key: str) -> MouseEvent | None:
    """Decode ``"MOUSE_<KIND>:<col>:<row>"``; anything else yields ``None``."""
    if not key.startswith("MOUSE_"):
        return None
    parts = key.split(":")
    if len(parts) != 3:
        return None
    try:
        col = int(parts[1])
        row = int(parts[2])
    except ValueError:
        return None
    return MouseEvent(parts[0], col, row)


def is_double_click(
    position: tuple[int, int],
    now: float,
    last_position: tuple[int, int] | None,
    last_time: float,
) -> bool:
    return last_position == position and 0.0 <= now - last_time <= DOUBLE_CLICK_SECONDS


def row_to_index(row: int, top_row: int, scroll: int, count: int) -> int | None:
    """Map a screen row to a clamped list index, ``None`` above the list."""
    if count <= 0 or row < top_row:
        return None
    return max(0, min(scroll + (row - top_row), count - 1))
