"""Entry classification based on Blogger's kind tags."""

from __future__ import annotations

from .types import Entry, Kind

KIND_SCHEME = "http://schemas.google.com/g/2005#kind"
KIND_POST = "http://schemas.google.com/blogger/2008/kind#post"
KIND_COMMENT = "http://schemas.google.com/blogger/2008/kind#comment"
LABEL_SCHEME = "http://www.blogger.com/atom/ns#"


def classify(entry: Entry) -> Kind:
    """Decide whether an entry is a post, a comment, or something to skip.

    Only the first tag under the kind scheme counts. Any kind other than
    post or comment (templates, settings, pages) is ignored, whatever
    else the entry looks like.
    """
    for tag in entry.tags:
        if tag.scheme != KIND_SCHEME:
            continue
        if tag.name == KIND_POST:
            return Kind.POST
        if tag.name == KIND_COMMENT:
            return Kind.COMMENT
        return Kind.IGNORED
    return Kind.NONE


def blog_tags(entry: Entry) -> list[str]:
    """Return the user-facing labels of an entry, in feed order."""
    return [tag.name for tag in entry.tags if tag.scheme == LABEL_SCHEME]
