"""
Input parsing utilities.

This package contains code for reading Blogger export documents.
"""

from .atom_parser import parse_blogger_xml, parse_date, parse_draft

__all__ = ["parse_blogger_xml", "parse_date", "parse_draft"]
