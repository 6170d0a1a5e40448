"""Aggregate repository statistics over the loaded commit list."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from ..models import Commit


@dataclass(frozen=True)
class RepoStats:
    total_commits: int = 0
    author_counts: tuple[tuple[str, int], ...] = field(default_factory=tuple)
    unique_authors: int = 0
    commits_today: int = 0
    commits_this_week: int = 0
    commits_this_month: int = 0

    def top_authors(self, limit: int = 10) -> tuple[tuple[str, int], ...]:
        return self.author_counts[:limit]


def compute_repo_stats(commits: Sequence[Commit], now: datetime | None = None) -> RepoStats:
    """Count commits per author and inside fixed 1/7/30-day windows.

    Authors are sorted by count descending; ties keep first-seen order.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    day_ago = now - timedelta(days=1)
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    counts: Counter[str] = Counter()
    today = week = month = 0
    for commit in commits:
        counts[commit.author] += 1
        if commit.timestamp >= day_ago:
            today += 1
        if commit.timestamp >= week_ago:
            week += 1
        if commit.timestamp >= month_ago:
            month += 1

    # most_common() keeps first-seen order among ties.
    ranked = tuple(counts.most_common())
    return RepoStats(
        total_commits=len(commits),
        author_counts=ranked,
        unique_authors=len(counts),
        commits_today=today,
        commits_this_week=week,
        commits_this_month=month,
    )
