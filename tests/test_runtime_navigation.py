"""Selection and scroll arithmetic tests."""

from __future__ import annotations

import unittest

from gitlane.runtime.navigation import (
    clamp_index,
    follow_selection,
    jump_to_end,
    jump_to_start,
    max_scroll,
    move_selection,
    scroll_by,
)


class NavigationTests(unittest.TestCase):
    def test_clamp_index(self) -> None:
        self.assertEqual(clamp_index(-3, 5), 0)
        self.assertEqual(clamp_index(9, 5), 4)
        self.assertEqual(clamp_index(2, 0), 0)

    def test_max_scroll(self) -> None:
        self.assertEqual(max_scroll(30, 10), 20)
        self.assertEqual(max_scroll(5, 10), 0)

    def test_follow_selection_moves_minimally(self) -> None:
        self.assertEqual(follow_selection(3, 5, 10), 3)
        self.assertEqual(follow_selection(14, 0, 10), 5)
        self.assertEqual(follow_selection(7, 0, 10), 0)

    def test_move_selection_clamps_and_keeps_visible(self) -> None:
        self.assertEqual(move_selection(0, 0, -1, 5, 3), (0, 0))
        self.assertEqual(move_selection(4, 2, 1, 5, 3), (4, 2))
        self.assertEqual(move_selection(2, 0, 1, 5, 3), (3, 1))
        self.assertEqual(move_selection(0, 0, 100, 5, 3), (4, 2))
        self.assertEqual(move_selection(0, 0, 1, 0, 3), (0, 0))

    def test_scroll_invariant_holds_for_every_move(self) -> None:
        count, page = 17, 4
        selected, scroll = 0, 0
        for delta in (1, 5, -2, 30, -1, -30, 4, page, -page):
            selected, scroll = move_selection(selected, scroll, delta, count, page)
            with self.subTest(delta=delta):
                self.assertTrue(0 <= selected < count)
                self.assertTrue(scroll <= selected < scroll + page)
                self.assertTrue(0 <= scroll <= max_scroll(count, page))

    def test_jumps(self) -> None:
        self.assertEqual(jump_to_start(), (0, 0))
        self.assertEqual(jump_to_end(30, 10), (29, 20))
        self.assertEqual(jump_to_end(0, 10), (0, 0))

    def test_scroll_by_bounds(self) -> None:
        self.assertEqual(scroll_by(0, -1, 50, 10), 0)
        self.assertEqual(scroll_by(38, 5, 50, 10), 40)
        self.assertEqual(scroll_by(0, 3, 2, 10), 0)


if __name__ == "__main__":
    unittest.main()
