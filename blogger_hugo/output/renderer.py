"""
Frontmatter rendering for posts and comments.

Each resolved entry becomes one text file: a frontmatter block (TOML
between ``+++`` fences, or YAML between ``---`` fences) followed by the
entry's content exactly as it appeared in the feed. Templates live in
``templates/`` next to this module.
"""

from __future__ import annotations

from functools import lru_cache
import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..core.classify import blog_tags
from ..core.errors import OutputError
from ..core.paths import comment_path, format_timestamp, post_path
from ..core.types import Entry

FORMATS = ("toml", "yaml")


def _quote(value: Any) -> str:
    """Render a double-quoted scalar valid in both TOML and YAML."""
    return json.dumps("" if value is None else str(value), ensure_ascii=False)


@lru_cache(maxsize=None)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["quote"] = _quote
    return env


def _template_name(fmt: str) -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported frontmatter format: {fmt!r}")
    return f"{fmt}.j2"


def _context(entry: Entry, *, is_comment: bool) -> dict[str, Any]:
    title = entry.title
    slug = entry.slug
    comments = entry.comment_ids
    if is_comment:
        title = title.replace("\n", "").replace("\r", "")
        slug = None
        comments = []
    elif slug == title:
        slug = None

    return {
        "title": title,
        "slug": slug,
        "date": format_timestamp(entry.published),
        "updated": format_timestamp(entry.updated),
        "tags": blog_tags(entry),
        "draft": entry.draft,
        "comments": comments,
        "extra": entry.extra,
        "author": entry.author,
        "content": entry.content,
    }


def render_post(entry: Entry, fmt: str = "toml") -> str:
    """Render a post's frontmatter and body as a string."""
    template = _environment().get_template(_template_name(fmt))
    return template.render(**_context(entry, is_comment=False))


def render_comment(entry: Entry, fmt: str = "toml") -> str:
    """Render a comment: no slug and no comment list, single-line title."""
    template = _environment().get_template(_template_name(fmt))
    return template.render(**_context(entry, is_comment=True))


def write_post(entry: Entry, output_dir: Path, fmt: str = "toml", extension: str = ".md") -> Path:
    """Write a post to ``<output_dir>/<date>-<slug><extension>``.

    Raises:
        OutputError: If the file cannot be written
    """
    try:
        path = post_path(entry, output_dir, extension)
    except ValueError as exc:
        raise OutputError(f"Failed writing post {entry.title!r} to disk: {exc}") from exc
    _write(path, render_post(entry, fmt), "post", entry.title)
    return path


def write_comment(
    entry: Entry,
    output_dir: Path,
    fmt: str = "toml",
    comments_dir: str = "comments",
    extension: str = ".toml",
) -> Path:
    """Write a comment to ``<output_dir>/<comments_dir>/c<id><extension>``.

    Raises:
        OutputError: If the file cannot be written
    """
    path = comment_path(entry, output_dir, comments_dir, extension)
    _write(path, render_comment(entry, fmt), "comment", entry.title)
    return path


def _write(path: Path, text: str, what: str, title: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Failed writing {what} {title!r} to disk: {exc}") from exc
