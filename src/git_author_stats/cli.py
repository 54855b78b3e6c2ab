from __future__ import annotations

import argparse
import contextlib
import sys
from pathlib import Path

from .aggregate import aggregate_commits
from .config import DEFAULT_CONFIG_PATH, config_bool, config_str, load_config
from .errors import ConfigError, TraversalError
from .export import write_csv, write_json_report
from .models import AggregateResult, CommitFilters, PeriodWindow
from .periods import DEFAULT_TIMEZONE, load_zone, resolve_period
from .render import rank_authors, render_report
from .repository import iter_commits, open_repository

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-author-stats",
        description="Per-author commit, added/deleted and net line stats for a git repository over a time window.",
    )
    parser.add_argument("--repo", type=str, default=None, help="Path to the git repository (default: .).")
    parser.add_argument(
        "--since",
        type=str,
        default="",
        help="Start of period: YYYY-MM-DD, 'YYYY-MM-DD HH:MM', RFC 3339 or RFC 1123 (default: 30 days ago, 00:00).",
    )
    parser.add_argument(
        "--until",
        type=str,
        default="",
        help="End of period, same formats; a bare date means 23:59:59 of that day (default: now).",
    )
    parser.add_argument("--author", type=str, default=None, help="Case-insensitive substring filter on author name/email.")
    parser.add_argument("--include-merges", action="store_true", default=None, help="Include merge commits in stats.")
    parser.add_argument("--csv", type=Path, default=None, help="Also write the table to this CSV file.")
    parser.add_argument("--json", type=Path, default=None, help="Also write the report to this JSON file.")
    parser.add_argument("--tz", type=str, default=None, help=f"IANA timezone for parsing and printing dates (default: {DEFAULT_TIMEZONE}).")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to an optional JSON config file.")
    return parser


def _error(msg: str) -> None:
    print(f"error: {msg}", file=sys.stderr)


def _resolve_inputs(args: argparse.Namespace) -> tuple[Path, PeriodWindow, CommitFilters]:
    config = load_config(args.config)

    repo_raw = args.repo if args.repo is not None else config_str(config, "repo", ".")
    if not repo_raw.strip():
        raise ConfigError("empty --repo value")

    zone = load_zone(args.tz if args.tz is not None else config_str(config, "timezone", DEFAULT_TIMEZONE))
    window = resolve_period(args.since, args.until, zone)

    author = args.author if args.author is not None else config_str(config, "author", "")
    include_merges = bool(args.include_merges) if args.include_merges is not None else config_bool(config, "include_merges", False)
    return Path(repo_raw), window, CommitFilters(author_substring=author, include_merges=include_merges)


def collect(repo_path: Path, window: PeriodWindow, filters: CommitFilters) -> AggregateResult:
    with open_repository(repo_path) as repo, contextlib.closing(iter_commits(repo, window)) as commits:
        return aggregate_commits(commits, filters)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(argv)

    try:
        repo_path, window, filters = _resolve_inputs(args)
        result = collect(repo_path, window, filters)
    except ConfigError as e:
        _error(str(e))
        return EXIT_CONFIG
    except TraversalError as e:
        _error(str(e))
        return EXIT_FAILURE

    ranked = rank_authors(result.authors.values())
    print(render_report(repo=repo_path, window=window, filters=filters, result=result, ranked=ranked))

    if args.csv is not None:
        try:
            write_csv(args.csv, ranked, result.totals)
        except OSError as e:
            _error(f"csv: {e}")
            return EXIT_FAILURE
        print(f"\nCSV saved: {args.csv}")

    if args.json is not None:
        try:
            write_json_report(args.json, repo=repo_path, window=window, filters=filters, result=result, ranked=ranked)
        except OSError as e:
            _error(f"json: {e}")
            return EXIT_FAILURE
        print(f"\nJSON saved: {args.json}")

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
