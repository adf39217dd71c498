"""Info hypertext output for projected documentation."""

from .renderer import InfoRenderer, NodeNotFound

__all__ = ["InfoRenderer", "NodeNotFound"]
