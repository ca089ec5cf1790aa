"""Output file naming for posts and comments."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from .types import Entry


def slugify(text: str) -> str:
    """Convert a title to a path-safe slug.

    Trims and lowercases, turns spaces into hyphens, then drops every
    character that is not a letter, digit, ".", "_" or "-". Non-ASCII
    letters are kept.

    Examples:
        >>> slugify("Social Media")
        "social-media"
        >>> slugify(" Crème brûlée? ")
        "crème-brûlée"
    """
    lowered = text.strip().replace(" ", "-").lower()
    return "".join(ch for ch in lowered if ch.isalnum() or ch in "._-")


def to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str:
    """Format a timestamp the way frontmatter expects it: UTC with a Z suffix."""
    if value is None:
        return ""
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def post_filename(entry: Entry, extension: str = ".md") -> str:
    """Return ``<YYYY-MM-DD>-<slug><extension>`` using the UTC publication date."""
    if entry.published is None:
        raise ValueError(f"post {entry.id!r} has no publication date")
    date = to_utc(entry.published).strftime("%Y-%m-%d")
    return f"{date}-{slugify(entry.title)}{extension}"


def comment_filename(entry: Entry, extension: str = ".toml") -> str:
    return f"c{entry.key}{extension}"


def post_path(entry: Entry, output_dir: Path, extension: str = ".md") -> Path:
    return output_dir / post_filename(entry, extension)


def comment_path(
    entry: Entry, output_dir: Path, comments_dir: str = "comments", extension: str = ".toml"
) -> Path:
    return output_dir / comments_dir / comment_filename(entry, extension)
