"""
Core data types for the Blogger export converter.

This module defines the in-memory representation of a feed entry:
- Tag, Author, Link, ReplySource: raw Atom elements attached to an entry
- Entry: one feed item plus the fields derived during resolution
- Kind: the role an entry plays (post, comment, ignored)
- IdResult: a numeric identifier that may be missing or unparsable
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

POST_MARKER = "post-"


class Kind(str, Enum):
    """Classification of a feed entry.

    POST and COMMENT come from the kind tag. IGNORED covers every other
    kind (templates, settings, pages). NONE means the entry carried no
    kind tag at all.
    """

    POST = "post"
    COMMENT = "comment"
    IGNORED = "ignored"
    NONE = "none"


@dataclass
class Tag:
    """An Atom <category> element.

    Attributes:
        name: The term attribute
        scheme: The scheme attribute, used to tell kind tags from labels
    """

    name: str
    scheme: str = ""


@dataclass
class AuthorImage:
    source: str = ""
    width: int = 0
    height: int = 0


@dataclass
class Author:
    name: str = ""
    uri: str = ""
    image: AuthorImage = field(default_factory=AuthorImage)


@dataclass
class Link:
    """An Atom <link> element. Relation values compare case-insensitively."""

    rel: str
    href: str
    type: str = ""

    def is_rel(self, rel: str) -> bool:
        return self.rel.lower() == rel.lower()


@dataclass
class ReplySource:
    """The thr:in-reply-to element of a comment."""

    ref: str = ""
    href: str = ""
    source: str = ""


@dataclass
class Entry:
    """One item from the export feed.

    Fields above the divider are read from the feed; fields below it are
    derived by the classifier, resolver and tree builder.

    Attributes:
        id: Opaque id string from the feed
        published: Publication time, None when the feed omits it
        updated: Last update time, None when the feed omits it
        draft: Whether the entry is marked as a draft
        title: Entry title
        content: Pre-rendered HTML body, passed through untouched
        tags: Category tags in encounter order
        author: Author name, profile URI and avatar
        source: Reply target of a comment, if any
        links: Atom links in document order
        kind: Classification assigned by the runner
        reply_to: Resolved parent identifier, None when unresolved
        children: Flattened comment indices (posts only)
        comment_ids: Numeric ids matching ``children`` (posts only)
        slug: Slug override derived from the "replies" link
        extra: Caller-supplied frontmatter appended verbatim
    """

    id: str
    published: datetime | None = None
    updated: datetime | None = None
    draft: bool = False
    title: str = ""
    content: str = ""
    tags: list[Tag] = field(default_factory=list)
    author: Author = field(default_factory=Author)
    source: ReplySource | None = None
    links: list[Link] = field(default_factory=list)
    # ---- derived ----
    kind: Kind = Kind.NONE
    reply_to: int | None = None
    children: list[int] = field(default_factory=list)
    comment_ids: list[int] = field(default_factory=list)
    slug: str | None = None
    extra: str | None = None

    @property
    def key(self) -> str:
        """The id with everything up to the last ``post-`` marker removed."""
        index = self.id.rfind(POST_MARKER)
        if index < 0:
            return self.id
        return self.id[index + len(POST_MARKER):]

    def links_with_rel(self, rel: str) -> list[Link]:
        return [link for link in self.links if link.is_rel(rel)]


@dataclass(frozen=True)
class IdResult:
    """A numeric identifier lookup that can fail for a known reason.

    ``value`` is only meaningful when ``reason`` is "ok", so a literal
    identifier 0 is never confused with "unset".

    Attributes:
        value: The parsed unsigned identifier, or None
        reason: "ok", "missing" (nothing to parse) or "unparsable"
        raw: The text that was inspected, kept for log messages
    """

    value: int | None
    reason: str
    raw: str = ""

    @property
    def ok(self) -> bool:
        return self.reason == "ok"

    @classmethod
    def found(cls, value: int, raw: str = "") -> IdResult:
        return cls(value=value, reason="ok", raw=raw)

    @classmethod
    def missing(cls, raw: str = "") -> IdResult:
        return cls(value=None, reason="missing", raw=raw)

    @classmethod
    def unparsable(cls, raw: str) -> IdResult:
        return cls(value=None, reason="unparsable", raw=raw)
