"""Regression tests for ANSI-aware clipping and padding.

These keep the frame renderer from overflowing the terminal width when lines
carry color escapes, tabs or wide characters.
"""

import unittest

from gitlane.render import ansi as ansi_mod


class ClipAnsiLineTests(unittest.TestCase):
    def test_plain_text_is_cut_at_width(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abcdef", 3), "abc")

    def test_escapes_do_not_count_and_trailing_reset_is_kept(self) -> None:
        line = "\033[31mabcdef\033[0m"

        clipped = ansi_mod.clip_ansi_line(line, 2)

        self.assertEqual(clipped, "\033[31mab\033[0m")
        self.assertEqual(ansi_mod.display_width(clipped), 2)

    def test_wide_character_that_would_straddle_edge_is_dropped(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a界b", 2), "a")

    def test_tabs_expand_to_spaces(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 10), "a       b")

    def test_non_positive_width_is_empty(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")


class PadAnsiLineTests(unittest.TestCase):
    def test_pads_to_display_width(self) -> None:
        padded = ansi_mod.pad_ansi_line("\033[1mab\033[0m", 5)

        self.assertEqual(ansi_mod.strip_ansi(padded), "ab   ")
        self.assertEqual(ansi_mod.display_width(padded), 5)


if __name__ == "__main__":
    unittest.main()
