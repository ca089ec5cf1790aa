"""Frontmatter rendering and file output."""

from .renderer import render_comment, render_post, write_comment, write_post

__all__ = [
    "render_comment",
    "render_post",
    "write_comment",
    "write_post",
]
