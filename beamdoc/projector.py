"""Projection of a decoded ``docs_v1`` term into the documentation model."""

from __future__ import annotations

from typing import List, Optional

from .logging import get_logger
from .models import (
    DocStatus,
    DocumentationModel,
    DocValue,
    EntityDoc,
    Int32,
    ListWithTail,
    MapTerm,
    Term,
    TextBlob,
    TupleTerm,
    UInt8,
    binary,
)

# docs_v1 = {docs_v1, Anno, BeamLanguage, Format, ModuleDoc, Metadata, Docs}
_BEAM_LANGUAGE_INDEX = 2
_FORMAT_INDEX = 3
_MODULE_DOC_INDEX = 4
_DOCS_INDEX = 6

# {{Kind, Name, Arity}, Anno, Signatures, Doc, Metadata}
_ENTITY_KEY_INDEX = 0
_ENTITY_SIGNATURES_INDEX = 2
_ENTITY_DOC_INDEX = 3

SUMMARY_LIMIT = 100

_LOGGER = get_logger("projector")


def project(term: Term, module: str = "", *, language: str = "en") -> DocumentationModel:
    """Map a ``docs_v1`` term onto :class:`DocumentationModel`; never raises."""
    if not isinstance(term, TupleTerm):
        _LOGGER.debug("Docs term for %s is not a tuple", module or "<unknown>")
        return DocumentationModel(module=module)

    docs = _element(term, _DOCS_INDEX)
    entities: List[EntityDoc] = []
    if isinstance(docs, ListWithTail):
        for entry in docs.elements:
            entity = _project_entity(entry, language)
            if entity is None:
                _LOGGER.debug("Skipping malformed docs entry in %s", module or "<unknown>")
                continue
            entities.append(entity)

    return DocumentationModel(
        module=module,
        module_doc=pick_doc_language(_element(term, _MODULE_DOC_INDEX), language),
        entities=tuple(entities),
        beam_language=_text_or_empty(_element(term, _BEAM_LANGUAGE_INDEX)),
        format=_text_or_empty(_element(term, _FORMAT_INDEX)),
    )


def pick_doc_language(term: Optional[Term], language: str = "en") -> DocValue:
    """Select the text for ``language`` from a doc value.

    ``none`` and ``hidden`` atoms map onto their :class:`DocStatus`; a map
    without the language yields ``DocStatus.NO_ENGLISH``; other shapes give
    ``None``.
    """
    if isinstance(term, TextBlob):
        if term.data == b"none":
            return DocStatus.NONE
        if term.data == b"hidden":
            return DocStatus.HIDDEN
        return None
    if isinstance(term, MapTerm):
        value = term.get(binary(language))
        if isinstance(value, TextBlob):
            return value.text()
        return DocStatus.NO_ENGLISH
    return None


def summarize(text: DocValue, limit: int = SUMMARY_LIMIT) -> Optional[str]:
    """Return the newline-collapsed first paragraph when shorter than ``limit``."""
    if not isinstance(text, str) or isinstance(text, DocStatus):
        return None
    paragraph = text.split("\n\n", 1)[0].replace("\n", " ")
    if len(paragraph) >= limit:
        return None
    return paragraph


def _project_entity(entry: Term, language: str) -> Optional[EntityDoc]:
    if not isinstance(entry, TupleTerm):
        return None
    key = _element(entry, _ENTITY_KEY_INDEX)
    if not isinstance(key, TupleTerm) or len(key) != 3:
        return None
    kind, name, arity = key.elements
    if not isinstance(kind, TextBlob) or not isinstance(name, TextBlob):
        return None
    if not isinstance(arity, (UInt8, Int32)):
        return None

    signatures: List[str] = []
    raw_signatures = _element(entry, _ENTITY_SIGNATURES_INDEX)
    if isinstance(raw_signatures, ListWithTail):
        signatures = [
            item.text() for item in raw_signatures.elements if isinstance(item, TextBlob)
        ]

    return EntityDoc(
        kind=kind.text(),
        name=name.text(),
        arity=arity.value,
        signatures=tuple(signatures),
        doc=pick_doc_language(_element(entry, _ENTITY_DOC_INDEX), language),
    )


def _element(term: TupleTerm, index: int) -> Optional[Term]:
    if index < len(term.elements):
        return term.elements[index]
    return None


def _text_or_empty(term: Optional[Term]) -> str:
    return term.text() if isinstance(term, TextBlob) else ""


__all__ = ["SUMMARY_LIMIT", "pick_doc_language", "project", "summarize"]
