"""
Blogger to Hugo converter.

This package converts a Blogger Atom export into static-site content:
one Markdown file per post and one frontmatter file per comment, with
each post listing its comments in threaded, chronological order.

Main entry point is the CLI via the `blogger-hugo` command.

Example:
    $ blogger-hugo blog-export.xml content/posts --extra 'type = "post"'
"""

__all__ = ["__version__", "parse_blogger_xml", "resolve_tree", "run_pipeline", "slugify"]
__version__ = "0.1.0"

from .core.paths import slugify
from .core.tree import resolve_tree
from .input.atom_parser import parse_blogger_xml
from .runner import run_pipeline
