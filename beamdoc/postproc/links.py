"""Cross-reference target resolution for documentation links."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

FULLWIDTH_COLON = "："
TOP_NODE = "Top"
DEFAULT_PUNCTUATION = ","


class LinkKind(str, Enum):
    """Shape of a resolved link target."""

    FUNCTION = "function"
    LOCAL = "local"
    REMOTE = "remote"
    MODULE = "module"


@dataclass(frozen=True)
class LinkTarget:
    """A node inside this module's unit, or inside ``unit`` when set."""

    kind: LinkKind
    node: str
    unit: Optional[str] = None

    @property
    def spec(self) -> str:
        if self.unit is None:
            return self.node
        return f"({self.unit}){self.node}"


# Order matters: the first matching rule wins.
_LOCAL_FUNCTION = re.compile(r"^[a-z][^:./]*/[0-9]+$")
_LOCAL_REFERENCE = re.compile(r"^(?:[ct]:)?([^:./]+/[0-9]+)$")
_REMOTE_REFERENCE = re.compile(r"^(?:[ct]:)?([^:/]+)[:.]([^:./]+/[0-9]+)$")
_MODULE_REFERENCE = re.compile(r"^m:([^:/]+)$")


def resolve_link_target(target: str) -> Optional[LinkTarget]:
    """Classify ``target``; return None when it is not a known link shape."""
    if _LOCAL_FUNCTION.match(target):
        return LinkTarget(LinkKind.FUNCTION, target)
    match = _LOCAL_REFERENCE.match(target)
    if match:
        return LinkTarget(LinkKind.LOCAL, match.group(1))
    match = _REMOTE_REFERENCE.match(target)
    if match:
        return LinkTarget(LinkKind.REMOTE, match.group(2), unit=match.group(1))
    match = _MODULE_REFERENCE.match(target)
    if match:
        return LinkTarget(LinkKind.MODULE, TOP_NODE, unit=match.group(1))
    return None


def escape_label(label: str) -> str:
    """Replace colons, which delimit fields in ``*note`` references."""
    return label.replace(":", FULLWIDTH_COLON)


@dataclass(frozen=True)
class CrossReference:
    """An Info ``*note`` reference."""

    target: LinkTarget
    label: str
    punctuation: str = ""

    def render(self) -> str:
        return f"*note {escape_label(self.label)}: {self.target.spec}{self.punctuation}"


__all__ = [
    "CrossReference",
    "DEFAULT_PUNCTUATION",
    "FULLWIDTH_COLON",
    "LinkKind",
    "LinkTarget",
    "TOP_NODE",
    "escape_label",
    "resolve_link_target",
]
