"""
Numeric identifier extraction for posts and comments.

Blogger links entries only through strings: a post id looks like
``tag:blogger.com,1999:blog-123.post-456`` and a comment points at its
parent through the last path segment of a "related" link or of the
``thr:in-reply-to`` source URL. Every lookup here returns an IdResult so
callers can tell "nothing there" from "something there that isn't a number".
"""

from __future__ import annotations

import logging
import posixpath
import re
from urllib.parse import urlparse

from .types import Entry, IdResult, Kind, POST_MARKER

logger = logging.getLogger(__name__)

UINT64_MAX = 2**64 - 1
_DIGITS_RE = re.compile(r"[0-9]+")
_TRAILING_DIGITS_RE = re.compile(r"([0-9]+)$")


def parse_numeric(text: str | None) -> IdResult:
    """Parse an unsigned base-10 integer that fits in 64 bits."""
    if not text:
        return IdResult.missing(text or "")
    if not _DIGITS_RE.fullmatch(text):
        return IdResult.unparsable(text)
    value = int(text)
    if value > UINT64_MAX:
        return IdResult.unparsable(text)
    return IdResult.found(value, text)


def trailing_segment(href: str | None) -> str:
    """Return the last path segment of a URL, ignoring query and fragment.

    Examples:
        >>> trailing_segment("https://www.blogger.com/feeds/1/posts/default/42")
        "42"
        >>> trailing_segment("https://example.blogspot.com/2020/01/hello.html#c5")
        "hello.html"
    """
    if not href:
        return ""
    path = urlparse(href).path.rstrip("/")
    return posixpath.basename(path)


def resolve_post_id(entry: Entry) -> IdResult:
    """Extract the identifier that keys a post in the post index."""
    index = entry.id.rfind(POST_MARKER)
    if index < 0:
        return IdResult.missing(entry.id)
    return parse_numeric(entry.id[index + len(POST_MARKER):])


def resolve_entry_id(entry: Entry) -> IdResult:
    """Extract the numeric identifier of any entry.

    Uses the ``post-`` suffix when present, otherwise the trailing run of
    digits (comment ids such as ``tag:blogger.com,1999:blog-1.c5``).
    """
    if POST_MARKER in entry.id:
        return resolve_post_id(entry)
    match = _TRAILING_DIGITS_RE.search(entry.id)
    if match is None:
        return IdResult.missing(entry.id)
    return parse_numeric(match.group(1))


def resolve_parent_id(entry: Entry) -> IdResult:
    """Resolve the identifier of the entry a comment replies to.

    The last "related" link wins when an entry carries several. The
    in-reply-to source URL is only consulted when there is no related link
    or it does not end in a number.
    """
    related = entry.links_with_rel("related")
    from_related = (
        parse_numeric(trailing_segment(related[-1].href)) if related else IdResult.missing()
    )
    from_source = (
        parse_numeric(trailing_segment(entry.source.source))
        if entry.source is not None
        else IdResult.missing()
    )

    if from_related.ok:
        if from_source.ok and from_source.value != from_related.value:
            logger.debug(
                "Entry %s: related link names %s but in-reply-to names %s; using related",
                entry.id,
                from_related.value,
                from_source.value,
            )
        return from_related
    if from_source.ok:
        return from_source
    if from_related.reason == "unparsable":
        return from_related
    return from_source


def resolve_slug(entry: Entry) -> str | None:
    """Derive a slug override from the entry's "replies" link.

    Prefers the HTML replies link (the post permalink); falls back to the
    last replies link in the entry.
    """
    replies = entry.links_with_rel("replies")
    if not replies:
        return None
    html_links = [link for link in replies if link.type.lower() == "text/html"]
    link = html_links[0] if html_links else replies[-1]
    segment = trailing_segment(link.href)
    stem, _ext = posixpath.splitext(segment)
    return stem or None


def build_post_index(entries: list[Entry]) -> dict[int, int]:
    """Map post identifiers to their index in ``entries``.

    Only entries classified as posts are indexed. Posts whose id cannot be
    keyed are logged and left out.
    """
    index: dict[int, int] = {}
    for position, entry in enumerate(entries):
        if entry.kind is not Kind.POST:
            continue
        result = resolve_post_id(entry)
        if not result.ok:
            logger.warning(
                "Can't parse post id %r (%s)",
                entry.id,
                result.reason,
                extra={"event": "post_id_skipped", "entry_id": entry.id, "reason": result.reason},
            )
            continue
        if result.value in index:
            logger.warning(
                "Duplicate post id %s at entries %d and %d; keeping the later one",
                result.value,
                index[result.value],
                position,
                extra={"event": "duplicate_post_id", "post_id": result.value},
            )
        index[result.value] = position
    return index


def build_reply_index(entries: list[Entry]) -> dict[int, int]:
    """Map comment identifiers to their index, for replies to comments."""
    index: dict[int, int] = {}
    for position, entry in enumerate(entries):
        if entry.kind is not Kind.COMMENT:
            continue
        result = resolve_entry_id(entry)
        if result.ok:
            index[result.value] = position
        else:
            logger.debug("Comment id %r is not numeric (%s)", entry.id, result.reason)
    return index
