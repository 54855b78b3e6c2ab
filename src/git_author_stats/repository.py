from __future__ import annotations

import contextlib
from pathlib import Path
from typing import Iterator

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.objects.commit import Commit

from .errors import ConfigError, RecordError, TraversalError
from .models import PeriodWindow


class CommitRecord:
    """One commit as seen by the aggregator: author identity, parent count and per-path line stats."""

    def __init__(self, commit: Commit) -> None:
        self._commit = commit
        self.sha = commit.hexsha
        self.author_name = str(commit.author.name or "")
        self.author_email = str(commit.author.email or "")
        self.parent_count = len(commit.parents)

    def file_stats(self) -> dict[str, tuple[int, int]]:
        try:
            files = self._commit.stats.files
        except (GitCommandError, ValueError) as e:
            raise RecordError(self.sha, str(e).strip() or type(e).__name__) from e
        out: dict[str, tuple[int, int]] = {}
        for path, st in files.items():
            out[str(path)] = (int(st.get("insertions", 0)), int(st.get("deletions", 0)))
        return out


@contextlib.contextmanager
def open_repository(path: Path) -> Iterator[Repo]:
    if not path.exists():
        raise ConfigError(f"--repo path does not exist: {str(path)!r}")
    if not path.is_dir():
        raise ConfigError(f"--repo path is not a directory: {str(path)!r}")
    try:
        repo = Repo(path)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise TraversalError(f"not a git repository: {path}") from e
    except GitCommandError as e:
        raise TraversalError(f"cannot open repository {path}: {e}") from e
    try:
        yield repo
    finally:
        repo.close()


def iter_commits(repo: Repo, window: PeriodWindow) -> Iterator[CommitRecord]:
    """
    Lazily walk commits reachable from HEAD whose committer time lies in
    [window.since, window.until], newest committer time first.

    Both bounds are checked per commit; the walk is never cut short at an
    older commit.
    """
    if not repo.head.is_valid():
        raise TraversalError("repository has no commits (HEAD does not resolve)")
    since_ts = window.since.timestamp()
    until_ts = window.until.timestamp()
    try:
        for commit in repo.iter_commits(
            "HEAD",
            until=window.until.isoformat(timespec="seconds"),
            date_order=True,
        ):
            committed_at = commit.committed_date
            if committed_at < since_ts or committed_at > until_ts:
                continue
            yield CommitRecord(commit)
    except (GitCommandError, ValueError) as e:
        raise TraversalError(f"git log failed: {e}") from e
