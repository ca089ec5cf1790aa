"""Atom parser for Blogger export files.

This module parses a Blogger "Back up content" export into Entry objects.
The export is a single Atom feed whose entries mix posts, comments,
templates and settings:

    <feed xmlns="http://www.w3.org/2005/Atom">
      <entry>
        <id>tag:blogger.com,1999:blog-1.post-42</id>
        <published>2020-01-01T10:00:00.000-08:00</published>
        <updated>2020-01-02T10:00:00.000-08:00</updated>
        <app:control><app:draft>no</app:draft></app:control>
        <category scheme="http://schemas.google.com/g/2005#kind"
                  term="http://schemas.google.com/blogger/2008/kind#post"/>
        <title>Hello</title>
        <content type="html">...</content>
        <link rel="replies" type="text/html" href="https://x.blogspot.com/2020/01/hello.html"/>
        <author><name>Me</name><uri>...</uri><gd:image src="..." width="16" height="16"/></author>
        <thr:in-reply-to ref="..." href="..." source="..."/>
      </entry>
    </feed>

Elements are matched by local name so the namespace prefixes used by a
particular export do not matter.
"""

from __future__ import annotations

from datetime import datetime
import logging
import re
import xml.etree.ElementTree as ET

from ..core.errors import FeedFormatError
from ..core.types import Author, AuthorImage, Entry, Link, ReplySource, Tag

logger = logging.getLogger(__name__)

# Blogger always writes millisecond precision and a numeric offset.
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{2}:\d{2}$")
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def parse_blogger_xml(data: bytes | str) -> list[Entry]:
    """Parse a Blogger export document into a list of Entry objects.

    Args:
        data: The raw XML document

    Returns:
        Entries in document order. Nothing is classified yet.

    Raises:
        FeedFormatError: If the document is not well-formed XML, is not an
            Atom feed, or an entry carries a malformed date or draft flag
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise FeedFormatError(f"Input is not a well-formed feed: {exc}") from exc

    if _local(root.tag) != "feed":
        raise FeedFormatError(f"Expected a <feed> document, got <{_local(root.tag)}>")

    entries = [_parse_entry(element) for element in _children(root, "entry")]
    logger.debug("Parsed %d entries", len(entries))
    return entries


def parse_date(value: str, entry_id: str = "", field_name: str = "date") -> datetime:
    """Parse Blogger's ``2006-01-02T15:04:05.000-07:00`` timestamp format."""
    raw = value.strip()
    if not DATE_RE.match(raw):
        raise FeedFormatError(f"Entry {entry_id!r}: cannot parse {field_name} {value!r}")
    try:
        return datetime.strptime(raw, DATE_FORMAT)
    except ValueError as exc:
        raise FeedFormatError(f"Entry {entry_id!r}: cannot parse {field_name} {value!r}") from exc


def parse_draft(value: str, entry_id: str = "") -> bool:
    """Parse the app:draft flag, which must be the literal "yes" or "no"."""
    if value == "yes":
        return True
    if value == "no":
        return False
    raise FeedFormatError(f"Entry {entry_id!r}: unknown value for draft boolean: {value!r}")


def _parse_entry(element: ET.Element) -> Entry:
    entry_id = _text(element, "id")

    published = _child(element, "published")
    updated = _child(element, "updated")

    draft = False
    control = _child(element, "control")
    if control is not None:
        draft_el = _child(control, "draft")
        if draft_el is not None:
            draft = parse_draft((draft_el.text or "").strip(), entry_id)

    source = None
    reply = _child(element, "in-reply-to")
    if reply is not None:
        source = ReplySource(
            ref=reply.get("ref", ""),
            href=reply.get("href", ""),
            source=reply.get("source", ""),
        )

    return Entry(
        id=entry_id,
        published=parse_date(published.text or "", entry_id, "published") if published is not None else None,
        updated=parse_date(updated.text or "", entry_id, "updated") if updated is not None else None,
        draft=draft,
        title=_text(element, "title"),
        content=_content(_child(element, "content")),
        tags=[
            Tag(name=cat.get("term", ""), scheme=cat.get("scheme", ""))
            for cat in _children(element, "category")
        ],
        author=_parse_author(_child(element, "author")),
        source=source,
        links=[
            Link(rel=link.get("rel", ""), href=link.get("href", ""), type=link.get("type", ""))
            for link in _children(element, "link")
        ],
    )


def _parse_author(element: ET.Element | None) -> Author:
    if element is None:
        return Author()
    image = _child(element, "image")
    return Author(
        name=_text(element, "name"),
        uri=_text(element, "uri"),
        image=AuthorImage(
            source=image.get("src", ""),
            width=_int_attr(image, "width"),
            height=_int_attr(image, "height"),
        )
        if image is not None
        else AuthorImage(),
    )


def _content(element: ET.Element | None) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())


def _int_attr(element: ET.Element, name: str) -> int:
    value = element.get(name, "").strip()
    if not value:
        return 0
    try:
        return int(value)
    except ValueError as exc:
        raise FeedFormatError(f"Invalid {name} {value!r} on author image") from exc


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _text(element: ET.Element, name: str) -> str:
    child = _child(element, name)
    if child is None:
        return ""
    return child.text or ""
