"""Repository statistics tests."""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from gitlane.models import Commit
from gitlane.runtime.stats import RepoStats, compute_repo_stats

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _commit(idx: int, author: str, age: timedelta) -> Commit:
    return Commit.create(f"{idx:040d}", f"change {idx}", author, f"{author.lower()}@example.com", NOW - age)


class ComputeRepoStatsTests(unittest.TestCase):
    def test_empty_history(self) -> None:
        self.assertEqual(compute_repo_stats([], NOW), RepoStats())

    def test_windows_are_inclusive_rolling_periods(self) -> None:
        commits = [
            _commit(1, "Ann", timedelta(hours=1)),
            _commit(2, "Ann", timedelta(days=3)),
            _commit(3, "Ben", timedelta(days=20)),
            _commit(4, "Ben", timedelta(days=90)),
        ]

        stats = compute_repo_stats(commits, NOW)

        self.assertEqual(stats.total_commits, 4)
        self.assertEqual(stats.unique_authors, 2)
        self.assertEqual(stats.commits_today, 1)
        self.assertEqual(stats.commits_this_week, 2)
        self.assertEqual(stats.commits_this_month, 3)

    def test_authors_ranked_by_count_with_stable_ties(self) -> None:
        commits = [
            _commit(1, "Zed", timedelta(days=1)),
            _commit(2, "Amy", timedelta(days=1)),
            _commit(3, "Amy", timedelta(days=1)),
            _commit(4, "Kim", timedelta(days=1)),
        ]

        stats = compute_repo_stats(commits, NOW)

        self.assertEqual(stats.author_counts, (("Amy", 2), ("Zed", 1), ("Kim", 1)))
        self.assertEqual(stats.top_authors(2), (("Amy", 2), ("Zed", 1)))

    def test_late_author_overtakes_earlier_ones(self) -> None:
        authors = ["Ann", "Ben", "Cat", "Ben", "Dev", "Dev", "Dev", "Ann"]
        commits = [_commit(idx, name, timedelta(days=idx)) for idx, name in enumerate(authors)]

        stats = compute_repo_stats(commits, NOW)

        self.assertEqual(stats.author_counts, (("Dev", 3), ("Ann", 2), ("Ben", 2), ("Cat", 1)))
        self.assertEqual(stats.unique_authors, 4)


if __name__ == "__main__":
    unittest.main()
