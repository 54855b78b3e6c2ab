from __future__ import annotations


class GitAuthorStatsError(Exception):
    pass


class ConfigError(GitAuthorStatsError):
    """Bad command-line or config input. Fatal, exits with status 2."""


class PeriodParseError(ConfigError, ValueError):
    def __init__(self, field: str, raw: str) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"invalid --{field} value {raw!r} (expected YYYY-MM-DD, YYYY-MM-DD HH:MM, RFC 3339 or RFC 1123)")


class TraversalError(GitAuthorStatsError):
    """Repository could not be opened or its history could not be walked."""


class RecordError(GitAuthorStatsError):
    def __init__(self, sha: str, reason: str) -> None:
        self.sha = sha
        self.reason = reason
        super().__init__(f"stats for {sha}: {reason}")
