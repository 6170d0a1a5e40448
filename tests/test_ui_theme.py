"""Theme lookup, toggle order and lane palette tests."""

from __future__ import annotations

import unittest

from gitlane.graph import LANE_PALETTE_SIZE
from gitlane.ui_theme import (
    DARK_THEME,
    LIGHT_THEME,
    PLAIN_THEME,
    available_theme_names,
    lane_color,
    next_theme_name,
    normalize_theme_name,
    resolve_theme,
)


class ThemeTests(unittest.TestCase):
    def test_names_and_toggle_order(self) -> None:
        self.assertEqual(available_theme_names(), ("dark", "light"))
        self.assertEqual(next_theme_name("dark"), "light")
        self.assertEqual(next_theme_name("light"), "dark")
        self.assertEqual(next_theme_name("bogus"), "light")

    def test_normalize_and_resolve(self) -> None:
        self.assertEqual(normalize_theme_name(" LIGHT "), "light")
        self.assertEqual(normalize_theme_name(None), "dark")
        self.assertIs(resolve_theme("light"), LIGHT_THEME)
        self.assertIs(resolve_theme("light", no_color=True), PLAIN_THEME)

    def test_lane_palette_covers_graph_slots(self) -> None:
        for theme in (DARK_THEME, LIGHT_THEME):
            with self.subTest(theme=theme.name):
                self.assertEqual(len(theme.lane_colors), LANE_PALETTE_SIZE)
        self.assertEqual(lane_color(PLAIN_THEME, 5), "")


if __name__ == "__main__":
    unittest.main()
