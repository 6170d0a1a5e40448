"""Tests for commit, reference and file status records."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from gitlane.models import Commit, FileStatus, RefKind, Reference, StatusKind

STAMP = datetime(2024, 1, 2, tzinfo=timezone.utc)


class CommitTests(unittest.TestCase):
    def test_create_derives_short_id_and_summary(self) -> None:
        commit = Commit.create("f" * 40, "  Title line  \nbody", "A", "a@x", STAMP, parent_ids=["e" * 40])

        self.assertEqual(commit.short_id, "fffffff")
        self.assertEqual(commit.summary, "Title line")
        self.assertEqual(commit.parent_ids, ("e" * 40,))

    def test_empty_message_has_empty_summary(self) -> None:
        self.assertEqual(Commit.create("f" * 40, "", "A", "a@x", STAMP).summary, "")

    def test_short_id_must_prefix_id(self) -> None:
        with self.assertRaises(ValueError):
            Commit("a" * 40, "bbbbbbb", "", "", "A", "a@x", STAMP)

    def test_reference_display_name(self) -> None:
        self.assertEqual(Reference("refs/heads/feature/x", RefKind.BRANCH).display_name, "feature/x")
        self.assertEqual(Reference("refs/remotes/origin/main", RefKind.REMOTE).display_name, "origin/main")
        self.assertEqual(Reference("HEAD", RefKind.HEAD).display_name, "HEAD")

    def test_file_status_staging_and_badges(self) -> None:
        self.assertTrue(FileStatus("a", StatusKind.RENAMED).is_staged)
        self.assertFalse(FileStatus("a", StatusKind.UNTRACKED).is_staged)
        self.assertEqual(FileStatus("a", StatusKind.CONFLICTED).badge, "UU")
        self.assertEqual(FileStatus("a", StatusKind.ADDED_STAGED).badge, "A ")


if __name__ == "__main__":
    unittest.main()
