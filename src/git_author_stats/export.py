from __future__ import annotations

import csv
import json
from pathlib import Path

from .models import AggregateResult, AuthorAggregate, CommitFilters, PeriodWindow, Totals
from .periods import format_instant

CSV_HEADER = ["author_name", "author_email", "commits", "added", "deleted", "net"]
TOTAL_LABEL = "TOTAL"


def write_csv(path: Path, ranked: list[AuthorAggregate], totals: Totals) -> None:
    """Write ranked rows plus a trailing TOTAL row. OSError propagates; a partial file may remain."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for a in ranked:
            writer.writerow([a.author_name, a.author_email, a.commits, a.added, a.deleted, a.net])
        writer.writerow([TOTAL_LABEL, "", totals.commits, totals.added, totals.deleted, totals.net])


def author_row(a: AuthorAggregate) -> dict[str, object]:
    return {
        "author_name": a.author_name,
        "author_email": a.author_email,
        "commits": a.commits,
        "added": a.added,
        "deleted": a.deleted,
        "net": a.net,
    }


def write_json_report(
    path: Path,
    *,
    repo: Path | str,
    window: PeriodWindow,
    filters: CommitFilters,
    result: AggregateResult,
    ranked: list[AuthorAggregate],
) -> None:
    t = result.totals
    data = {
        "repo": str(repo),
        "since": format_instant(window.since, window.zone),
        "until": format_instant(window.until, window.zone),
        "timezone": window.zone.key,
        "author_filter": filters.author_substring,
        "include_merges": filters.include_merges,
        "authors": [author_row(a) for a in ranked],
        "totals": {"commits": t.commits, "added": t.added, "deleted": t.deleted, "net": t.net},
        "skipped": dict(sorted(result.skipped.items())),
    }
    path.write_text(json.dumps(data, indent=2, sort_keys=False) + "\n", encoding="utf-8")
