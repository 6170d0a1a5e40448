"""Command palette catalog and query tests."""

from __future__ import annotations

import unittest

from gitlane.runtime.command_palette import COMMAND_PALETTE_ITEMS, filter_commands, rotate


class CommandPaletteTests(unittest.TestCase):
    def test_catalog_ids_are_unique(self) -> None:
        ids = [item.id for item in COMMAND_PALETTE_ITEMS]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertIn("quit", ids)

    def test_empty_query_returns_full_catalog_in_order(self) -> None:
        self.assertEqual(filter_commands(""), list(COMMAND_PALETTE_ITEMS))

    def test_query_matches_name_description_or_id(self) -> None:
        self.assertEqual([item.id for item in filter_commands("THEME")], ["toggle_theme"])
        self.assertIn("stage_all", [item.id for item in filter_commands("every changed")])
        self.assertEqual([item.id for item in filter_commands("go_to_end")], ["go_to_end"])
        self.assertEqual(filter_commands("nothing-like-this"), [])

    def test_rotate_wraps_both_ways(self) -> None:
        items = list(COMMAND_PALETTE_ITEMS[:3])

        self.assertEqual(rotate(items, 1), [items[1], items[2], items[0]])
        self.assertEqual(rotate(items, -1), [items[2], items[0], items[1]])
        self.assertEqual(rotate(items, 3), items)
        self.assertEqual(rotate([], 1), [])


if __name__ == "__main__":
    unittest.main()
