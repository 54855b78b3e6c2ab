from __future__ import annotations

import datetime as dt

from git_author_stats.models import AggregateResult, AuthorAggregate, CommitFilters, PeriodWindow, Totals
from git_author_stats.periods import load_zone
from git_author_stats.render import DIVIDER, format_row, rank_authors, render_report, trunc

MSK = load_zone("Europe/Moscow")


def _window() -> PeriodWindow:
    return PeriodWindow(
        since=dt.datetime(2024, 1, 1, tzinfo=MSK),
        until=dt.datetime(2024, 1, 31, 23, 59, 59, tzinfo=MSK),
        zone=MSK,
    )


def test_rank_by_net_then_commits_then_email() -> None:
    a = AuthorAggregate("A", "zed@x.com", commits=1, added=10, deleted=0)
    b = AuthorAggregate("B", "amy@x.com", commits=3, added=12, deleted=2)
    c = AuthorAggregate("C", "Bea@x.com", commits=3, added=10, deleted=0)
    d = AuthorAggregate("D", "ann@x.com", commits=5, added=0, deleted=4)
    ranked = rank_authors([a, d, c, b])
    # net 10 for a, b, c: b and c have 3 commits, tie broken by lower-cased email
    assert [x.author_name for x in ranked] == ["B", "C", "A", "D"]


def test_rank_is_deterministic_regardless_of_input_order() -> None:
    rows = [
        AuthorAggregate("x", "b@x.com", commits=1, added=1),
        AuthorAggregate("y", "A@x.com", commits=1, added=1),
        AuthorAggregate("z", "c@x.com", commits=1, added=1),
    ]
    assert [r.author_email for r in rank_authors(rows)] == ["A@x.com", "b@x.com", "c@x.com"]
    assert [r.author_email for r in rank_authors(reversed(rows))] == ["A@x.com", "b@x.com", "c@x.com"]


def test_trunc() -> None:
    assert trunc("short") == "short"
    assert trunc("x" * 28) == "x" * 28
    long_name = "Bartholomew Montgomery-Featherstonehaugh"
    out = trunc(long_name)
    assert out == long_name[:25] + "..."
    assert len(out) == 28


def test_format_row_widths() -> None:
    row = format_row("bob", 2, 11, 3, 8)
    assert row == "bob" + " " * 25 + "       2        11         3         8"


def test_render_report_layout() -> None:
    bob = AuthorAggregate("Bob", "bob@x.com", commits=2, added=11, deleted=3)
    carol = AuthorAggregate("", "carol@y.com", commits=1, added=5, deleted=0)
    nobody = AuthorAggregate("", "", commits=1, added=0, deleted=1)
    result = AggregateResult(
        authors={"bob@x.com": bob, "carol@y.com": carol, "(unknown)": nobody},
        totals=Totals(commits=4, added=16, deleted=4),
        skipped={},
    )
    out = render_report(repo="/tmp/repo", window=_window(), filters=CommitFilters(), result=result)
    lines = out.splitlines()

    assert lines[0] == "Repo: /tmp/repo"
    assert lines[1] == "Period: 2024-01-01T00:00:00+03:00 .. 2024-01-31T23:59:59+03:00 (Europe/Moscow)"
    assert lines[2] == "Merges: excluded"
    assert lines[3] == ""
    assert lines[4].split() == ["Author", "Commits", "Added", "Deleted", "Net"]
    assert lines[5] == DIVIDER
    assert len(DIVIDER) == 66
    assert lines[6] == format_row("Bob", 2, 11, 3, 8)
    assert lines[7] == format_row("carol@y.com", 1, 5, 0, 5)
    assert lines[8] == format_row("(unknown)", 1, 0, 1, -1)
    assert lines[9] == DIVIDER
    assert lines[10] == format_row("TOTAL", 4, 16, 4, 12)
    assert "Author filter" not in out
    assert "Skipped" not in out


def test_render_report_filter_merges_and_skips() -> None:
    result = AggregateResult(authors={}, totals=Totals(), skipped={"stats_error": 2, "merge": 5})
    out = render_report(
        repo=".",
        window=_window(),
        filters=CommitFilters(author_substring="bob", include_merges=True),
        result=result,
    )
    assert 'Author filter: "bob"' in out
    assert "Merges: included" in out
    assert out.splitlines()[-1] == "Skipped: 2 commit(s) with unreadable stats"
