"""Selection and scroll arithmetic shared by the list, panels and diff view.

Every helper takes the current ``(selected, scroll)`` pair and returns the new
one. The selection is clamped to ``[0, count - 1]`` and the scroll offset moves
only as far as needed to keep the selection inside a ``page``-row viewport.
"""

from __future__ import annotations


def clamp_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


def max_scroll(count: int, page: int) -> int:
    return max(0, count - max(1, page))


def follow_selection(selected: int, scroll: int, page: int) -> int:
    """Return the smallest scroll change that keeps ``selected`` visible."""
    page = max(1, page)
    if selected < scroll:
        return selected
    if selected >= scroll + page:
        return selected - page + 1
    return scroll


def move_selection(selected: int, scroll: int, delta: int, count: int, page: int) -> tuple[int, int]:
    if count <= 0:
        return 0, 0
    new_selected = clamp_index(selected + delta, count)
    new_scroll = follow_selection(new_selected, scroll, page)
    return new_selected, max(0, min(new_scroll, max_scroll(count, page)))


def jump_to_start() -> tuple[int, int]:
    return 0, 0


def jump_to_end(count: int, page: int) -> tuple[int, int]:
    if count <= 0:
        return 0, 0
    return count - 1, max_scroll(count, page)


def scroll_by(scroll: int, delta: int, count: int, page: int) -> int:
    """Scroll a selection-less view such as the diff pane."""
    return max(0, min(scroll + delta, max_scroll(count, page)))
