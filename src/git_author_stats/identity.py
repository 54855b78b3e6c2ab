from __future__ import annotations

UNKNOWN_AUTHOR = "(unknown)"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


def identity_key(author_name: str, author_email: str) -> str:
    """
    Stable dedup key for an author:
      - lower-cased trimmed email when present
      - else lower-cased trimmed name
      - else "(unknown)"
    """
    key = normalize_email(author_email)
    if key:
        return key
    key = normalize_name(author_name)
    if key:
        return key
    return UNKNOWN_AUTHOR


def matches_author_filter(author_name: str, author_email: str, substring: str) -> bool:
    needle = (substring or "").lower()
    if not needle:
        return True
    return needle in (author_name or "").lower() or needle in (author_email or "").lower()


def display_name(author_name: str, author_email: str) -> str:
    if author_name:
        return author_name
    if author_email:
        return author_email
    return UNKNOWN_AUTHOR
