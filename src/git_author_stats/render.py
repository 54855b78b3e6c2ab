from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .identity import display_name
from .models import AggregateResult, AuthorAggregate, CommitFilters, PeriodWindow, Totals
from .periods import format_instant

AUTHOR_WIDTH = 28
COMMITS_WIDTH = 6
NUM_WIDTH = 8
TRUNC_MARKER = "..."
DIVIDER = "-" * (AUTHOR_WIDTH + 2 + COMMITS_WIDTH + 2 + NUM_WIDTH + 2 + NUM_WIDTH + 2 + NUM_WIDTH)


def rank_key(a: AuthorAggregate) -> tuple[int, int, str]:
    return (-a.net, -a.commits, a.author_email.lower())


def rank_authors(authors: Iterable[AuthorAggregate]) -> list[AuthorAggregate]:
    return sorted(authors, key=rank_key)


def trunc(s: str, max_len: int = AUTHOR_WIDTH) -> str:
    if len(s) <= max_len:
        return s
    return s[: max_len - len(TRUNC_MARKER)] + TRUNC_MARKER


def format_row(label: str, commits: int, added: int, deleted: int, net: int) -> str:
    return f"{label:<{AUTHOR_WIDTH}}  {commits:>{COMMITS_WIDTH}d}  {added:>{NUM_WIDTH}d}  {deleted:>{NUM_WIDTH}d}  {net:>{NUM_WIDTH}d}"


def render_header(*, repo: Path | str, window: PeriodWindow, filters: CommitFilters) -> list[str]:
    lines = [
        f"Repo: {repo}",
        f"Period: {format_instant(window.since, window.zone)} .. {format_instant(window.until, window.zone)} ({window.zone.key})",
    ]
    if filters.author_substring:
        lines.append(f'Author filter: "{filters.author_substring}"')
    lines.append(f"Merges: {'included' if filters.include_merges else 'excluded'}")
    lines.append("")
    return lines


def render_table(ranked: list[AuthorAggregate], totals: Totals) -> list[str]:
    lines = [
        f"{'Author':<{AUTHOR_WIDTH}}  {'Commits':<{COMMITS_WIDTH}}  {'Added':<{NUM_WIDTH}}  {'Deleted':<{NUM_WIDTH}}  {'Net':<{NUM_WIDTH}}",
        DIVIDER,
    ]
    for a in ranked:
        name = trunc(display_name(a.author_name, a.author_email))
        lines.append(format_row(name, a.commits, a.added, a.deleted, a.net))
    lines.append(DIVIDER)
    lines.append(format_row("TOTAL", totals.commits, totals.added, totals.deleted, totals.net))
    return lines


def render_report(
    *,
    repo: Path | str,
    window: PeriodWindow,
    filters: CommitFilters,
    result: AggregateResult,
    ranked: list[AuthorAggregate] | None = None,
) -> str:
    if ranked is None:
        ranked = rank_authors(result.authors.values())
    lines = render_header(repo=repo, window=window, filters=filters)
    lines.extend(render_table(ranked, result.totals))
    if result.stats_errors:
        lines.append(f"Skipped: {result.stats_errors} commit(s) with unreadable stats")
    return "\n".join(lines)
