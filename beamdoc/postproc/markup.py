"""Two-pass rendering of markdown doc text into Info markup."""

from __future__ import annotations

import re
from typing import List, Optional

from .headings import convert_headings
from .links import DEFAULT_PUNCTUATION, CrossReference, resolve_link_target

# [label](`target`) or `target` with an optional trailing period or comma.
_LINK_PATTERN = re.compile(
    r"\[(?P<label>[^\]\n]*)\]\(`(?P<labelled>[^`\n]+)`\)"
    r"|`(?P<bare>[^`\n]+)`(?P<punct>[.,])?"
)


def _replacement(match: re.Match[str]) -> Optional[CrossReference]:
    labelled = match.group("labelled")
    if labelled is not None:
        target = resolve_link_target(labelled)
        if target is None:
            return None
        return CrossReference(target=target, label=match.group("label"))

    bare = match.group("bare")
    target = resolve_link_target(bare)
    if target is None:
        return None
    return CrossReference(
        target=target,
        label=bare,
        punctuation=match.group("punct") or DEFAULT_PUNCTUATION,
    )


def convert_links(text: str) -> str:
    """Replace resolvable inline links; leave everything else untouched."""
    pieces: List[str] = []
    position = 0
    for match in _LINK_PATTERN.finditer(text):
        reference = _replacement(match)
        if reference is None:
            continue
        pieces.append(text[position : match.start()])
        pieces.append(reference.render())
        position = match.end()
    pieces.append(text[position:])
    return "".join(pieces)


def render(text: str) -> str:
    """Convert headings, then links."""
    return convert_links(convert_headings(text))


__all__ = ["convert_links", "render"]
