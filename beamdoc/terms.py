"""Decoder and encoder for the external term format used by Docs chunks.

Only the shapes that documentation payloads carry are understood. Anything
else degrades to an :class:`~beamdoc.models.Opaque` value instead of failing,
and collections that run out of bytes are padded with ``MISSING``.
"""

from __future__ import annotations

import struct
import zlib
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from .errors import UnsupportedVersion
from .logging import get_logger
from .models import (
    MISSING,
    NIL,
    Int32,
    ListWithTail,
    MapTerm,
    Opaque,
    Term,
    TextBlob,
    TupleTerm,
    UInt8,
)
from .reader import ByteSpan, TruncatedInput

VERSION_MARKER = 131

COMPRESSED = 80
SMALL_INTEGER = 97
INTEGER = 98
ATOM = 100
SMALL_TUPLE = 104
LARGE_TUPLE = 105
NIL_EXT = 106
STRING = 107
LIST = 108
BINARY = 109
SMALL_ATOM = 115
MAP = 116
ATOM_UTF8 = 118
SMALL_ATOM_UTF8 = 119

# Upper bound on placeholders appended for a single truncated collection.
MAX_PLACEHOLDERS = 1 << 16

# Nesting deeper than this is left opaque.
MAX_DEPTH = 128

_LOGGER = get_logger("terms")

_Handler = Callable[[ByteSpan, int, int], Term]


def decode_root(data: bytes, *, path: Path | str | None = None) -> Term:
    """Decode a complete term stream, checking the leading version marker."""
    if not data or data[0] != VERSION_MARKER:
        raise UnsupportedVersion(data[0] if data else None, path=path)
    term, _ = decode_one(data[1:])
    return term


def decode_one(data: bytes) -> Tuple[Term, int]:
    """Decode one term and report how many bytes it occupied."""
    span = ByteSpan(data)
    term = _decode(span)
    return term, span.offset


def _decode(span: ByteSpan, depth: int = 0) -> Term:
    if span.remaining == 0:
        return MISSING
    tag = span.read_u8()
    if depth >= MAX_DEPTH:
        _LOGGER.debug(
            "Term nested deeper than %d, %d bytes left opaque", MAX_DEPTH, span.remaining
        )
        return Opaque(tag, span.rest())
    handler = _HANDLERS.get(tag)
    if handler is None:
        _LOGGER.debug("Unsupported term tag %d, %d bytes left opaque", tag, span.remaining)
        return Opaque(tag, span.rest())
    payload_start = span.offset
    try:
        return handler(span, tag, depth)
    except TruncatedInput as exc:
        _LOGGER.debug("Truncated term with tag %d: %s", tag, exc)
        span.offset = payload_start
        return Opaque(tag, span.rest())


def _decode_items(span: ByteSpan, count: int, depth: int) -> List[Term]:
    items: List[Term] = []
    for _ in range(count):
        if span.remaining == 0:
            break
        items.append(_decode(span, depth + 1))
    missing = count - len(items)
    if missing:
        _LOGGER.debug("Collection short by %d of %d elements", missing, count)
        items.extend([MISSING] * min(missing, MAX_PLACEHOLDERS))
    return items


def _compressed(span: ByteSpan, tag: int, depth: int) -> Term:
    start = span.offset
    span.read_u32()  # uncompressed size, advisory only
    payload = span.rest()
    try:
        inflated = zlib.decompress(payload)
    except zlib.error as exc:
        _LOGGER.debug("Compressed term failed to inflate: %s", exc)
        return Opaque(tag, span.data[start:])
    return _decode(ByteSpan(inflated), depth)


def _small_integer(span: ByteSpan, tag: int, depth: int) -> Term:
    return UInt8(span.read_u8())


def _integer(span: ByteSpan, tag: int, depth: int) -> Term:
    return Int32(span.read_i32())


def _small_tuple(span: ByteSpan, tag: int, depth: int) -> Term:
    return TupleTerm(tuple(_decode_items(span, span.read_u8(), depth)))


def _large_tuple(span: ByteSpan, tag: int, depth: int) -> Term:
    return TupleTerm(tuple(_decode_items(span, span.read_u32(), depth)))


def _nil(span: ByteSpan, tag: int, depth: int) -> Term:
    return NIL


def _text16(span: ByteSpan, tag: int, depth: int) -> Term:
    return TextBlob(span.take(span.read_u16()), tag=tag)


def _text8(span: ByteSpan, tag: int, depth: int) -> Term:
    return TextBlob(span.take(span.read_u8()), tag=tag)


def _binary(span: ByteSpan, tag: int, depth: int) -> Term:
    return TextBlob(span.take(span.read_u32()), tag=tag)


def _list(span: ByteSpan, tag: int, depth: int) -> Term:
    elements = _decode_items(span, span.read_u32(), depth)
    return ListWithTail(tuple(elements), _decode(span, depth + 1))


def _map(span: ByteSpan, tag: int, depth: int) -> Term:
    count = span.read_u32()
    pairs: List[Tuple[Term, Term]] = []
    for _ in range(count):
        if span.remaining == 0:
            break
        key = _decode(span, depth + 1)
        pairs.append((key, _decode(span, depth + 1)))
    missing = count - len(pairs)
    if missing:
        _LOGGER.debug("Map short by %d of %d pairs", missing, count)
        pairs.extend([(MISSING, MISSING)] * min(missing, MAX_PLACEHOLDERS))
    return MapTerm(tuple(pairs))


_HANDLERS: Dict[int, _Handler] = {
    COMPRESSED: _compressed,
    SMALL_INTEGER: _small_integer,
    INTEGER: _integer,
    ATOM: _text16,
    SMALL_TUPLE: _small_tuple,
    LARGE_TUPLE: _large_tuple,
    NIL_EXT: _nil,
    STRING: _text16,
    LIST: _list,
    BINARY: _binary,
    SMALL_ATOM: _text8,
    MAP: _map,
    ATOM_UTF8: _text16,
    SMALL_ATOM_UTF8: _text8,
}


# ----------------------------------------------------------------------
# Encoding


def encode(term: Term, *, compress: bool = False) -> bytes:
    """Serialise ``term`` with the version marker, optionally zlib-wrapped."""
    payload = _encode(term)
    if compress:
        payload = (
            bytes([COMPRESSED]) + struct.pack(">I", len(payload)) + zlib.compress(payload)
        )
    return bytes([VERSION_MARKER]) + payload


def _encode(term: Term) -> bytes:
    if isinstance(term, UInt8):
        return struct.pack(">BB", SMALL_INTEGER, term.value)
    if isinstance(term, Int32):
        return struct.pack(">Bi", INTEGER, term.value)
    if isinstance(term, TupleTerm):
        if len(term.elements) < 256:
            header = struct.pack(">BB", SMALL_TUPLE, len(term.elements))
        else:
            header = struct.pack(">BI", LARGE_TUPLE, len(term.elements))
        return header + b"".join(_encode(element) for element in term.elements)
    if isinstance(term, ListWithTail):
        if not term.elements and term.tail is None:
            return bytes([NIL_EXT])
        tail = NIL if term.tail is None else term.tail
        return (
            struct.pack(">BI", LIST, len(term.elements))
            + b"".join(_encode(element) for element in term.elements)
            + _encode(tail)
        )
    if isinstance(term, TextBlob):
        return _encode_text(term)
    if isinstance(term, MapTerm):
        return struct.pack(">BI", MAP, len(term.pairs)) + b"".join(
            _encode(key) + _encode(value) for key, value in term.pairs
        )
    if isinstance(term, Opaque):
        if term.tag is None:
            raise ValueError("cannot encode a missing-element placeholder")
        return bytes([term.tag]) + term.data
    raise TypeError(f"not a term: {term!r}")


def _encode_text(term: TextBlob) -> bytes:
    size = len(term.data)
    if term.tag in (SMALL_ATOM, SMALL_ATOM_UTF8) and size < 256:
        return struct.pack(">BB", term.tag, size) + term.data
    if term.tag in (SMALL_ATOM, SMALL_ATOM_UTF8):
        return struct.pack(">BH", ATOM_UTF8, size) + term.data
    if term.tag in (ATOM, STRING, ATOM_UTF8) and size < 65536:
        return struct.pack(">BH", term.tag, size) + term.data
    return struct.pack(">BI", BINARY, size) + term.data


__all__ = [
    "MAX_DEPTH",
    "MAX_PLACEHOLDERS",
    "VERSION_MARKER",
    "decode_one",
    "decode_root",
    "encode",
]
