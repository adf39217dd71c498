"""Core data models shared across beamdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple, Union


# ----------------------------------------------------------------------
# Generic terms produced by the decoder


@dataclass(frozen=True)
class UInt8:
    """Small unsigned integer (tag 97)."""

    value: int


@dataclass(frozen=True)
class Int32:
    """Signed 32-bit integer (tag 98)."""

    value: int


@dataclass(frozen=True)
class TupleTerm:
    """Fixed-arity tuple."""

    elements: Tuple["Term", ...]

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(frozen=True)
class ListWithTail:
    """List elements plus tail; ``NIL`` is the empty list and the proper tail."""

    elements: Tuple["Term", ...]
    tail: Optional["Term"] = None

    @property
    def is_proper(self) -> bool:
        return self.tail is None or self.tail == NIL


@dataclass(frozen=True)
class TextBlob:
    """Raw bytes of an atom, string or binary.

    ``tag`` records the wire tag the bytes came from so the encoder can write
    them back; it does not take part in equality.
    """

    data: bytes
    tag: int = field(default=109, compare=False)

    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class MapTerm:
    """Key/value pairs in wire order, duplicates kept."""

    pairs: Tuple[Tuple["Term", "Term"], ...]

    def get(self, key: "Term") -> Optional["Term"]:
        for candidate, value in self.pairs:
            if candidate == key:
                return value
        return None


@dataclass(frozen=True)
class Opaque:
    """Unsupported tag (or ``MISSING`` when ``tag`` is None) with its raw bytes."""

    tag: Optional[int]
    data: bytes = b""


Term = Union[UInt8, Int32, TupleTerm, ListWithTail, TextBlob, MapTerm, Opaque]

NIL = ListWithTail(elements=())
MISSING = Opaque(tag=None)


def atom(name: str) -> TextBlob:
    return TextBlob(name.encode("utf-8"), tag=119)


def binary(text: str) -> TextBlob:
    return TextBlob(text.encode("utf-8"), tag=109)


# ----------------------------------------------------------------------
# Container chunks


@dataclass(frozen=True)
class ChunkRecord:
    """Chunk header position inside a container buffer."""

    identifier: bytes
    declared_length: int
    start: int

    @property
    def payload_start(self) -> int:
        return self.start + 8

    @property
    def payload_end(self) -> int:
        return self.payload_start + self.declared_length

    @property
    def end_offset(self) -> int:
        return self.payload_start + pad4(self.declared_length)


def pad4(length: int) -> int:
    """Round ``length`` up to the next multiple of four."""
    return (length + 3) & ~3


# ----------------------------------------------------------------------
# Documentation model


class DocStatus(str, Enum):
    """Sentinels for doc values that carry no renderable text."""

    NONE = "none"
    HIDDEN = "hidden"
    NO_ENGLISH = "no_english"


DocValue = Union[str, DocStatus, None]


@dataclass(frozen=True)
class EntityDoc:
    """A documented function, type or callback."""

    kind: str
    name: str
    arity: int
    signatures: Tuple[str, ...] = ()
    doc: DocValue = None

    @property
    def key(self) -> str:
        return f"{self.name}/{self.arity}"

    @property
    def hidden(self) -> bool:
        return self.doc is DocStatus.HIDDEN


@dataclass(frozen=True)
class DocumentationModel:
    """Projected documentation for one module."""

    module: str
    module_doc: DocValue = None
    entities: Tuple[EntityDoc, ...] = ()
    beam_language: str = ""
    format: str = ""

    def visible(self) -> Iterator[EntityDoc]:
        """Yield entities that belong in menus and listings."""
        return (entity for entity in self.entities if not entity.hidden)

    def find(self, key: str) -> Optional[EntityDoc]:
        """Return the entity addressed by ``name/arity``, hidden ones included."""
        for entity in self.entities:
            if entity.key == key:
                return entity
        return None


__all__ = [
    "ChunkRecord",
    "DocStatus",
    "DocValue",
    "DocumentationModel",
    "EntityDoc",
    "Int32",
    "ListWithTail",
    "MISSING",
    "MapTerm",
    "NIL",
    "Opaque",
    "Term",
    "TextBlob",
    "TupleTerm",
    "UInt8",
    "atom",
    "binary",
    "pad4",
]
