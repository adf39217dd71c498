"""Renders a documentation model as an Info unit with one node per entity."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader

from ..models import DocStatus, DocumentationModel, DocValue, EntityDoc
from ..postproc.headings import format_heading
from ..postproc.markup import render
from ..projector import SUMMARY_LIMIT, summarize

NODE_SEPARATOR = "\x1f"

_STATUS_TEXT: Dict[DocStatus, str] = {
    DocStatus.NONE: "No documentation.",
    DocStatus.HIDDEN: "Hidden from the documentation index.",
    DocStatus.NO_ENGLISH: "Documentation unavailable in English.",
}
_MISSING_TEXT = _STATUS_TEXT[DocStatus.NONE]


class NodeNotFound(KeyError):
    """Raised when a node key does not name any entity of the module."""


class InfoRenderer:
    """Builds Info text from :class:`DocumentationModel` values."""

    def __init__(
        self,
        *,
        summary_limit: int = SUMMARY_LIMIT,
        templates_dir: Path | None = None,
    ) -> None:
        self.summary_limit = summary_limit
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_unit(self, model: DocumentationModel) -> str:
        """Return the Top node followed by every visible entity node."""
        parts = [self.render_top(model)]
        parts.extend(self._render_entity(model, entity) for entity in model.visible())
        return "".join(parts)

    def render_top(self, model: DocumentationModel) -> str:
        template = self._env.get_template("top.j2")
        return template.render(
            separator=NODE_SEPARATOR,
            unit=model.module,
            title=format_heading(model.module, 1),
            body=self.doc_text(model.module_doc),
            menu=self.menu_lines(model),
        )

    def render_node(self, model: DocumentationModel, key: str) -> str:
        """Render one node; hidden entities are still addressable here."""
        if key == "Top":
            return self.render_top(model)
        entity = model.find(key)
        if entity is None:
            raise NodeNotFound(f"{model.module} has no node {key!r}")
        return self._render_entity(model, entity)

    def menu_lines(self, model: DocumentationModel) -> List[str]:
        lines = []
        for entity in model.visible():
            summary = summarize(entity.doc, self.summary_limit)
            line = f"* {entity.key}::"
            if summary:
                line = f"{line} {summary}"
            lines.append(line)
        return lines

    def doc_text(self, value: DocValue) -> str:
        if isinstance(value, DocStatus):
            return _STATUS_TEXT[value]
        if not value:
            return _MISSING_TEXT
        return render(value).rstrip()

    def _render_entity(self, model: DocumentationModel, entity: EntityDoc) -> str:
        template = self._env.get_template("node.j2")
        return template.render(
            separator=NODE_SEPARATOR,
            unit=model.module,
            key=entity.key,
            title=format_heading(entity.key, 2),
            kind=entity.kind.capitalize(),
            signatures=[signature.rstrip() for signature in entity.signatures],
            body=self.doc_text(entity.doc),
        )


__all__ = ["InfoRenderer", "NODE_SEPARATOR", "NodeNotFound"]
