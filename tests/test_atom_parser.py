"""Tests for the Blogger Atom parser."""

from datetime import datetime, timedelta, timezone

import pytest

from blogger_hugo.core.errors import FeedFormatError
from blogger_hugo.input.atom_parser import parse_blogger_xml, parse_date, parse_draft

from conftest import COMMENT, FEEDS, KIND, LABEL, POST, entry_xml, feed_xml


def test_parse_post_fields():
    xml = feed_xml(
        entry_xml(
            "tag:blogger.com,1999:blog-1.post-42",
            POST,
            title="Hello World",
            labels=("Travel",),
            draft="yes",
            replies_href="https://x.blogspot.com/2020/01/hello-world.html",
        )
    )
    [entry] = parse_blogger_xml(xml)

    assert entry.id == "tag:blogger.com,1999:blog-1.post-42"
    assert entry.title == "Hello World"
    assert entry.content == "<p>Body</p>"
    assert entry.draft is True
    assert entry.published == datetime(2020, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=-8)))
    assert [(tag.name, tag.scheme) for tag in entry.tags] == [(POST, KIND), ("Travel", LABEL)]
    assert entry.author.name == "Jane"
    assert entry.author.uri == "https://www.blogger.com/profile/1"
    assert entry.author.image.source == "https://img.example.com/jane.png"
    assert entry.author.image.width == 16
    assert entry.links[0].rel == "replies"
    assert entry.links[0].type == "text/html"
    assert entry.source is None


def test_parse_comment_reply_source():
    xml = feed_xml(
        entry_xml(
            "tag:blogger.com,1999:blog-1.c5",
            COMMENT,
            related=f"{FEEDS}/42",
            reply_source=f"{FEEDS}/42",
        )
    )
    [entry] = parse_blogger_xml(xml)

    assert entry.links[0].rel == "related"
    assert entry.source is not None
    assert entry.source.source == f"{FEEDS}/42"
    assert entry.draft is False


def test_malformed_xml_is_fatal():
    with pytest.raises(FeedFormatError):
        parse_blogger_xml("<feed><entry></feed>")


def test_non_feed_root_is_fatal():
    with pytest.raises(FeedFormatError, match="feed"):
        parse_blogger_xml("<rss></rss>")


def test_bad_date_is_fatal():
    xml = feed_xml(entry_xml("tag:blogger.com,1999:blog-1.post-1", POST, published="2020-01-01"))
    with pytest.raises(FeedFormatError, match="published"):
        parse_blogger_xml(xml)


def test_bad_draft_literal_is_fatal():
    xml = feed_xml(entry_xml("tag:blogger.com,1999:blog-1.post-1", POST, draft="maybe"))
    with pytest.raises(FeedFormatError, match="draft"):
        parse_blogger_xml(xml)


def test_parse_date_requires_milliseconds_and_offset():
    assert parse_date("2020-06-30T23:59:59.123+02:00").microsecond == 123000
    with pytest.raises(FeedFormatError):
        parse_date("2020-06-30T23:59:59+02:00")
    with pytest.raises(FeedFormatError):
        parse_date("2020-06-30T23:59:59.123Z")
    with pytest.raises(FeedFormatError):
        parse_date("2020-13-30T23:59:59.123+02:00")


def test_parse_draft_literals():
    assert parse_draft("yes") is True
    assert parse_draft("no") is False
    with pytest.raises(FeedFormatError):
        parse_draft("true")


def test_empty_feed_parses_to_no_entries():
    assert parse_blogger_xml(feed_xml()) == []
