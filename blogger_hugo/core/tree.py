"""
Comment tree reconstruction and flattening.

The feed stores posts and comments as a flat list. ``build_tree`` attaches
every comment to its parent (a post, or another comment for threaded
replies) and ``flatten`` turns one post's subtree into a single
chronological, depth-first list of entry indices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping, Sequence

from .errors import TreeIntegrityError
from .identifiers import build_post_index, build_reply_index, resolve_entry_id, resolve_parent_id
from .types import Entry, Kind

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class CommentTree:
    """Adjacency built from the feed.

    Attributes:
        children: Parent entry index -> child entry indices, in feed order
        orphans: Indices of comments whose parent could not be resolved
        unreachable: Attached comments that no post leads to, such as
            replies to an orphan
        attached: Number of comments attached to a parent
    """

    children: dict[int, list[int]] = field(default_factory=dict)
    orphans: list[int] = field(default_factory=list)
    unreachable: list[int] = field(default_factory=list)
    attached: int = 0


def build_tree(
    entries: Sequence[Entry],
    post_index: Mapping[int, int],
    reply_index: Mapping[int, int] | None = None,
) -> CommentTree:
    """Attach every comment to its parent entry.

    A comment with no resolvable parent is an orphan: it is counted and
    logged, and stays out of the tree. A parent identifier that resolves
    but names no known entry means the feed is inconsistent and raises
    TreeIntegrityError.

    Args:
        entries: All entries, classified
        post_index: Post identifier -> entry index
        reply_index: Comment identifier -> entry index, for threaded replies

    Returns:
        The adjacency and orphan list
    """
    reply_index = reply_index or {}
    tree = CommentTree()
    for position, entry in enumerate(entries):
        if entry.kind is not Kind.COMMENT:
            continue

        parent = resolve_parent_id(entry)
        if not parent.ok:
            logger.info(
                "Skipping deleted comment %s (parent %s)",
                entry.id,
                parent.reason,
                extra={"event": "orphan_comment", "entry_id": entry.id, "reason": parent.reason},
            )
            tree.orphans.append(position)
            continue

        entry.reply_to = parent.value
        if parent.value in post_index:
            target = post_index[parent.value]
        elif reply_index.get(parent.value, position) != position:
            target = reply_index[parent.value]
        else:
            raise TreeIntegrityError(position, entry.id, parent.value)

        tree.children.setdefault(target, []).append(position)
        tree.attached += 1
    return tree


def flatten(
    root: int,
    children: Mapping[int, Sequence[int]],
    published: Mapping[int, datetime | None],
) -> list[int]:
    """Flatten the subtree under ``root`` into pre-order, oldest first.

    Siblings are ordered by publication time with a stable sort, so equal
    timestamps keep their insertion order. Entries without a timestamp sort
    first. Inputs are not modified.

    Args:
        root: Entry index whose descendants are flattened
        children: Adjacency, parent index -> child indices
        published: Entry index -> publication time

    Returns:
        Descendant indices, each followed by its own flattened descendants
    """
    order: list[int] = []
    visited = {root}

    def sort_key(index: int) -> datetime:
        return published.get(index) or _EARLIEST

    # Reversed so the oldest sibling is popped first.
    stack = list(reversed(sorted(children.get(root, ()), key=sort_key)))
    while stack:
        node = stack.pop()
        if node in visited:
            logger.warning("Comment %d already placed under %d; skipping cycle", node, root)
            continue
        visited.add(node)
        order.append(node)
        stack.extend(reversed(sorted(children.get(node, ()), key=sort_key)))
    return order


def resolve_comment_ids(order: Sequence[int], entries: Sequence[Entry]) -> list[int]:
    """Map flattened entry indices to numeric comment identifiers.

    Comments whose id is not numeric are left out of the list; they are
    still written to disk, just not referenced from the post.
    """
    ids: list[int] = []
    for index in order:
        result = resolve_entry_id(entries[index])
        if result.ok:
            ids.append(result.value)
        else:
            logger.debug("Comment id %r not referenced (%s)", entries[index].id, result.reason)
    return ids


def resolve_tree(entries: list[Entry]) -> CommentTree:
    """Build the comment tree and store the flattened order on every post.

    Entries must already be classified.
    """
    post_index = build_post_index(entries)
    reply_index = build_reply_index(entries)
    tree = build_tree(entries, post_index, reply_index)

    published = {position: entry.published for position, entry in enumerate(entries)}
    reached: set[int] = set()
    for position, entry in enumerate(entries):
        if entry.kind is not Kind.POST:
            continue
        entry.children = flatten(position, tree.children, published)
        entry.comment_ids = resolve_comment_ids(entry.children, entries)
        reached.update(entry.children)

    tree.unreachable = [
        child
        for parent in sorted(tree.children)
        for child in tree.children[parent]
        if child not in reached
    ]
    if tree.unreachable:
        logger.warning(
            "%d comments reply to deleted comments and are not listed on any post",
            len(tree.unreachable),
            extra={
                "event": "unreachable_comments",
                "count": len(tree.unreachable),
                "entry_ids": [entries[index].id for index in tree.unreachable],
            },
        )
    return tree
