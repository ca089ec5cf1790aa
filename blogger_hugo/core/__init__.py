"""
Core domain models and business logic.

This package contains the entry model, classification, identifier
resolution and comment tree reconstruction. None of it touches the
filesystem.
"""

from .classify import blog_tags, classify
from .errors import ConfigError, ExportError, FeedFormatError, OutputError, TreeIntegrityError
from .identifiers import (
    build_post_index,
    build_reply_index,
    resolve_entry_id,
    resolve_parent_id,
    resolve_post_id,
    resolve_slug,
)
from .paths import slugify
from .tree import CommentTree, build_tree, flatten, resolve_comment_ids, resolve_tree
from .types import Author, AuthorImage, Entry, IdResult, Kind, Link, ReplySource, Tag

__all__ = [
    "Author",
    "AuthorImage",
    "Entry",
    "IdResult",
    "Kind",
    "Link",
    "ReplySource",
    "Tag",
    "classify",
    "blog_tags",
    "ConfigError",
    "ExportError",
    "FeedFormatError",
    "OutputError",
    "TreeIntegrityError",
    "build_post_index",
    "build_reply_index",
    "resolve_entry_id",
    "resolve_parent_id",
    "resolve_post_id",
    "resolve_slug",
    "slugify",
    "CommentTree",
    "build_tree",
    "flatten",
    "resolve_comment_ids",
    "resolve_tree",
]
