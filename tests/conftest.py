"""Shared fixtures: small Blogger export documents built in memory."""

from __future__ import annotations

from pathlib import Path

import pytest

KIND = "http://schemas.google.com/g/2005#kind"
POST = "http://schemas.google.com/blogger/2008/kind#post"
COMMENT = "http://schemas.google.com/blogger/2008/kind#comment"
TEMPLATE = "http://schemas.google.com/blogger/2008/kind#template"
LABEL = "http://www.blogger.com/atom/ns#"
FEEDS = "https://www.blogger.com/feeds/1/posts/default"


def entry_xml(
    entry_id: str,
    kind: str | None,
    *,
    title: str = "Hello World",
    published: str = "2020-01-01T10:00:00.000-08:00",
    updated: str = "2020-01-02T10:00:00.000-08:00",
    draft: str | None = None,
    content: str = "&lt;p&gt;Body&lt;/p&gt;",
    labels: tuple[str, ...] = (),
    related: str | None = None,
    reply_source: str | None = None,
    replies_href: str | None = None,
) -> str:
    parts = [
        "<entry>",
        f"<id>{entry_id}</id>",
        f"<published>{published}</published>",
        f"<updated>{updated}</updated>",
    ]
    if draft is not None:
        parts.append(
            "<app:control xmlns:app='http://purl.org/atom/app#'>"
            f"<app:draft>{draft}</app:draft></app:control>"
        )
    if kind is not None:
        parts.append(f"<category scheme='{KIND}' term='{kind}'/>")
    for label in labels:
        parts.append(f"<category scheme='{LABEL}' term='{label}'/>")
    parts.append(f"<title type='text'>{title}</title>")
    parts.append(f"<content type='html'>{content}</content>")
    if related is not None:
        parts.append(f"<link rel='related' href='{related}' type='application/atom+xml'/>")
    if replies_href is not None:
        parts.append(f"<link rel='replies' type='text/html' href='{replies_href}'/>")
    parts.append(
        "<author><name>Jane</name><uri>https://www.blogger.com/profile/1</uri>"
        "<gd:image rel='http://schemas.google.com/g/2005#thumbnail' width='16' height='16' "
        "src='https://img.example.com/jane.png'/></author>"
    )
    if reply_source is not None:
        parts.append(
            f"<thr:in-reply-to ref='x' href='https://x.blogspot.com/p.html' source='{reply_source}'/>"
        )
    parts.append("</entry>")
    return "".join(parts)


def feed_xml(*entries: str) -> str:
    return (
        "<?xml version='1.0' encoding='UTF-8'?>"
        "<feed xmlns='http://www.w3.org/2005/Atom' "
        "xmlns:gd='http://schemas.google.com/g/2005' "
        "xmlns:thr='http://purl.org/syndication/thread/1.0'>"
        + "".join(entries)
        + "</feed>"
    )


@pytest.fixture
def write_feed(tmp_path: Path):
    """Write a feed document built from entry snippets and return its path."""

    def _write(*entries: str) -> Path:
        path = tmp_path / "export.xml"
        path.write_text(feed_xml(*entries), encoding="utf-8")
        return path

    return _write
