"""ATX heading conversion into underlined Info headings."""

from __future__ import annotations

import re
from typing import List

_HEADING_PATTERN = re.compile(r"^(#+) ([^\r\n]+)(\r?)$", re.MULTILINE)

_UNDERLINE_BY_DEPTH = {1: "*", 2: "=", 3: "-"}
_DEEP_UNDERLINE = "."


def underline_char(depth: int) -> str:
    return _UNDERLINE_BY_DEPTH.get(depth, _DEEP_UNDERLINE)


def format_heading(title: str, depth: int) -> str:
    """Return ``title`` followed by an underline of equal length."""
    return f"{title}\n{underline_char(depth) * len(title)}"


def convert_headings(text: str) -> str:
    """Rewrite every ``#``-prefixed heading line in ``text``."""
    pieces: List[str] = []
    position = 0
    for match in _HEADING_PATTERN.finditer(text):
        pieces.append(text[position : match.start()])
        heading = format_heading(match.group(2), len(match.group(1)))
        # CRLF input keeps CRLF on both emitted lines.
        line_end = match.group(3)
        pieces.append(heading.replace("\n", line_end + "\n") + line_end)
        position = match.end()
    pieces.append(text[position:])
    return "".join(pieces)


__all__ = ["convert_headings", "format_heading", "underline_char"]
