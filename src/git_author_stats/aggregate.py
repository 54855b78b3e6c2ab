from __future__ import annotations

import dataclasses
import sys
from collections import defaultdict
from typing import Callable, Iterable, Protocol

from .errors import RecordError
from .identity import identity_key, matches_author_filter
from .models import (
    COUNTED,
    SKIP_AUTHOR_FILTER,
    SKIP_MERGE,
    SKIP_STATS_ERROR,
    AggregateResult,
    AuthorAggregate,
    CommitFilters,
    CommitOutcome,
    Totals,
)


class CommitLike(Protocol):
    sha: str
    author_name: str
    author_email: str
    parent_count: int

    def file_stats(self) -> dict[str, tuple[int, int]]: ...


def print_warning(msg: str) -> None:
    print(f"warn: {msg}", file=sys.stderr)


class AggregationContext:
    """Per-author running totals for a single pass over the commit history."""

    def __init__(self, filters: CommitFilters, *, warn: Callable[[str], None] = print_warning) -> None:
        self.filters = filters
        self.warn = warn
        self.authors: dict[str, AuthorAggregate] = {}
        self.totals = Totals()
        self.skipped: dict[str, int] = defaultdict(int)

    def add(self, commit: CommitLike) -> CommitOutcome:
        if not matches_author_filter(commit.author_name, commit.author_email, self.filters.author_substring):
            self.skipped[SKIP_AUTHOR_FILTER] += 1
            return CommitOutcome(SKIP_AUTHOR_FILTER)
        if not self.filters.include_merges and commit.parent_count > 1:
            self.skipped[SKIP_MERGE] += 1
            return CommitOutcome(SKIP_MERGE)

        try:
            stats = commit.file_stats()
        except RecordError as e:
            self.warn(str(e))
            self.skipped[SKIP_STATS_ERROR] += 1
            return CommitOutcome(SKIP_STATS_ERROR, detail=e.reason)

        added = 0
        deleted = 0
        for ins, dele in stats.values():
            added += ins
            deleted += dele

        key = identity_key(commit.author_name, commit.author_email)
        rec = self.authors.get(key)
        if rec is None:
            rec = AuthorAggregate()
            self.authors[key] = rec
        rec.author_name = commit.author_name
        rec.author_email = commit.author_email
        rec.commits += 1
        rec.added += added
        rec.deleted += deleted

        self.totals.commits += 1
        self.totals.added += added
        self.totals.deleted += deleted
        return CommitOutcome(COUNTED)

    def snapshot(self) -> AggregateResult:
        authors = {k: dataclasses.replace(a) for k, a in self.authors.items()}
        return AggregateResult(authors=authors, totals=dataclasses.replace(self.totals), skipped=dict(self.skipped))


def aggregate_commits(
    commits: Iterable[CommitLike],
    filters: CommitFilters,
    *,
    warn: Callable[[str], None] = print_warning,
) -> AggregateResult:
    ctx = AggregationContext(filters, warn=warn)
    for commit in commits:
        ctx.add(commit)
    return ctx.snapshot()
