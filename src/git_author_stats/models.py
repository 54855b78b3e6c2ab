from __future__ import annotations

import dataclasses
import datetime as dt
from zoneinfo import ZoneInfo

COUNTED = "counted"
SKIP_AUTHOR_FILTER = "author_filter"
SKIP_MERGE = "merge"
SKIP_STATS_ERROR = "stats_error"


@dataclasses.dataclass
class AuthorAggregate:
    author_name: str = ""
    author_email: str = ""
    commits: int = 0
    added: int = 0
    deleted: int = 0

    @property
    def net(self) -> int:
        return self.added - self.deleted


@dataclasses.dataclass
class Totals:
    commits: int = 0
    added: int = 0
    deleted: int = 0

    @property
    def net(self) -> int:
        return self.added - self.deleted


@dataclasses.dataclass(frozen=True)
class PeriodWindow:
    since: dt.datetime  # inclusive
    until: dt.datetime  # inclusive
    zone: ZoneInfo


@dataclasses.dataclass(frozen=True)
class CommitFilters:
    author_substring: str = ""
    include_merges: bool = False


@dataclasses.dataclass(frozen=True)
class CommitOutcome:
    status: str
    detail: str = ""

    @property
    def counted(self) -> bool:
        return self.status == COUNTED


@dataclasses.dataclass(frozen=True)
class AggregateResult:
    authors: dict[str, AuthorAggregate]  # identity key -> aggregate
    totals: Totals
    skipped: dict[str, int]  # skip reason -> commits

    @property
    def stats_errors(self) -> int:
        return int(self.skipped.get(SKIP_STATS_ERROR, 0))
