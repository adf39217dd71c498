"""Markdown-to-Info conversion passes."""

from .headings import convert_headings
from .links import CrossReference, LinkTarget, escape_label, resolve_link_target
from .markup import convert_links, render

__all__ = [
    "CrossReference",
    "LinkTarget",
    "convert_headings",
    "convert_links",
    "escape_label",
    "render",
    "resolve_link_target",
]
