"""Tests for identifier extraction and the post index."""

from blogger_hugo.core.identifiers import (
    build_post_index,
    build_reply_index,
    parse_numeric,
    resolve_entry_id,
    resolve_parent_id,
    resolve_post_id,
    resolve_slug,
    trailing_segment,
)
from blogger_hugo.core.types import Entry, Kind, Link, ReplySource


def test_parse_numeric_reasons():
    assert parse_numeric("42").value == 42
    assert parse_numeric("0").ok
    assert parse_numeric("0").value == 0
    assert parse_numeric("").reason == "missing"
    assert parse_numeric(None).reason == "missing"
    assert parse_numeric("12a").reason == "unparsable"
    assert parse_numeric("-3").reason == "unparsable"
    assert parse_numeric(str(2**64)).reason == "unparsable"
    assert parse_numeric(str(2**64 - 1)).value == 2**64 - 1


def test_trailing_segment_drops_query_and_fragment():
    assert trailing_segment("https://www.blogger.com/feeds/1/posts/default/42") == "42"
    assert trailing_segment("https://www.blogger.com/feeds/1/posts/default/42/") == "42"
    assert trailing_segment("https://x.blogspot.com/2020/01/hello.html#comment-form") == "hello.html"
    assert trailing_segment("https://x.blogspot.com/feeds/7?v=2") == "7"
    assert trailing_segment("") == ""


def test_resolve_post_id():
    entry = Entry(id="tag:blogger.com,1999:blog-1.post-42")
    assert resolve_post_id(entry).value == 42
    assert resolve_post_id(Entry(id="tag:blogger.com,1999:blog-1.layout")).reason == "missing"
    assert resolve_post_id(Entry(id="tag:blogger.com,1999:blog-1.post-abc")).reason == "unparsable"


def test_resolve_entry_id_uses_trailing_digits_without_marker():
    assert resolve_entry_id(Entry(id="tag:blogger.com,1999:blog-1.c5")).value == 5
    assert resolve_entry_id(Entry(id="tag:blogger.com,1999:blog-1.post-77")).value == 77
    assert resolve_entry_id(Entry(id="no-digits-here")).reason == "missing"


def test_parent_prefers_related_link():
    entry = Entry(
        id="c",
        links=[Link(rel="RELATED", href="https://www.blogger.com/feeds/1/posts/default/42")],
        source=ReplySource(source="https://www.blogger.com/feeds/1/posts/default/99"),
    )
    assert resolve_parent_id(entry).value == 42


def test_parent_uses_last_related_link():
    entry = Entry(
        id="c",
        links=[
            Link(rel="related", href="https://www.blogger.com/feeds/1/posts/default/42"),
            Link(rel="alternate", href="https://example.com/2020/01/hello.html"),
            Link(rel="related", href="https://www.blogger.com/feeds/1/posts/default/43"),
        ],
    )
    assert resolve_parent_id(entry).value == 43


def test_parent_falls_back_to_reply_source():
    entry = Entry(
        id="c",
        links=[Link(rel="related", href="https://example.com/not-a-number")],
        source=ReplySource(source="https://www.blogger.com/feeds/1/posts/default/99"),
    )
    assert resolve_parent_id(entry).value == 99

    entry = Entry(id="c", source=ReplySource(source="https://www.blogger.com/feeds/1/posts/default/7"))
    assert resolve_parent_id(entry).value == 7


def test_parent_unresolved():
    assert resolve_parent_id(Entry(id="c")).reason == "missing"
    entry = Entry(id="c", links=[Link(rel="related", href="https://example.com/abc")])
    assert resolve_parent_id(entry).reason == "unparsable"


def test_resolve_slug_prefers_html_replies_link():
    entry = Entry(
        id="p",
        links=[
            Link(rel="replies", href="https://x.blogspot.com/feeds/42/comments/default", type="application/atom+xml"),
            Link(rel="replies", href="https://x.blogspot.com/2020/01/my-first-post.html#comment-form", type="text/html"),
        ],
    )
    assert resolve_slug(entry) == "my-first-post"


def test_resolve_slug_without_replies_link():
    assert resolve_slug(Entry(id="p", links=[Link(rel="alternate", href="https://x/a.html")])) is None


def test_build_post_index_only_keys_posts():
    entries = [
        Entry(id="tag:blogger.com,1999:blog-1.post-42", kind=Kind.POST),
        Entry(id="tag:blogger.com,1999:blog-1.post-43", kind=Kind.COMMENT),
        Entry(id="tag:blogger.com,1999:blog-1.layout", kind=Kind.POST),
        Entry(id="tag:blogger.com,1999:blog-1.post-x1", kind=Kind.POST),
        Entry(id="tag:blogger.com,1999:blog-1.post-44", kind=Kind.IGNORED),
        Entry(id="tag:blogger.com,1999:blog-1.post-45", kind=Kind.POST),
    ]
    assert build_post_index(entries) == {42: 0, 45: 5}


def test_build_reply_index_only_keys_comments():
    entries = [
        Entry(id="tag:blogger.com,1999:blog-1.post-42", kind=Kind.POST),
        Entry(id="tag:blogger.com,1999:blog-1.c5", kind=Kind.COMMENT),
        Entry(id="tag:blogger.com,1999:blog-1.post-6", kind=Kind.COMMENT),
    ]
    assert build_reply_index(entries) == {5: 1, 6: 2}
