"""Tests for the external term decoder and encoder."""

from __future__ import annotations

import struct
import zlib

import pytest

from beamdoc.errors import UnsupportedVersion
from beamdoc.models import (
    MISSING,
    NIL,
    Int32,
    ListWithTail,
    MapTerm,
    Opaque,
    TextBlob,
    TupleTerm,
    UInt8,
    atom,
    binary,
)
from beamdoc.terms import MAX_DEPTH, MAX_PLACEHOLDERS, decode_one, decode_root, encode


@pytest.mark.parametrize(
    ("data", "expected", "consumed"),
    [
        (bytes([97, 5]), UInt8(5), 2),
        (bytes([98]) + struct.pack(">i", -2), Int32(-2), 5),
        (bytes([104, 2, 97, 1, 97, 2]), TupleTerm((UInt8(1), UInt8(2))), 6),
        (bytes([106]), NIL, 1),
        (bytes([107, 0, 3]) + b"abc", TextBlob(b"abc"), 6),
        (bytes([100, 0, 2]) + b"ok", TextBlob(b"ok"), 5),
        (
            bytes([108, 0, 0, 0, 2, 97, 1, 97, 2, 106]),
            ListWithTail((UInt8(1), UInt8(2)), NIL),
            10,
        ),
        (bytes([109, 0, 0, 0, 3]) + b"xyz", TextBlob(b"xyz"), 8),
        (
            bytes([116, 0, 0, 0, 1, 100, 0, 1]) + b"a" + bytes([97, 1]),
            MapTerm(((TextBlob(b"a"), UInt8(1)),)),
            11,
        ),
        (bytes([119, 2]) + b"hi", TextBlob(b"hi"), 4),
        (bytes([115, 2]) + b"ok", TextBlob(b"ok"), 4),
        (bytes([118, 0, 2]) + b"\xc3\xa9", TextBlob("\u00e9".encode("utf-8")), 5),
        (
            bytes([105, 0, 0, 0, 2, 97, 1, 106]),
            TupleTerm((UInt8(1), NIL)),
            8,
        ),
        (bytes([70, 1, 2, 3]), Opaque(70, b"\x01\x02\x03"), 4),
    ],
)
def test_decode_one_per_tag(data: bytes, expected: object, consumed: int) -> None:
    term, used = decode_one(data)
    assert term == expected
    assert used == consumed


def test_text_tags_are_recorded_for_callers() -> None:
    term, _ = decode_one(bytes([100, 0, 2]) + b"ok")
    assert isinstance(term, TextBlob)
    assert term.tag == 100
    assert term.text() == "ok"


def test_improper_list_keeps_tail() -> None:
    term, used = decode_one(bytes([108, 0, 0, 0, 1, 97, 1, 97, 2]))
    assert term == ListWithTail((UInt8(1),), UInt8(2))
    assert isinstance(term, ListWithTail)
    assert not term.is_proper
    assert used == 9


def test_compressed_term_reports_compressed_length() -> None:
    payload = bytes([104, 1, 97, 7])
    compressed = zlib.compress(payload)
    data = bytes([80]) + struct.pack(">I", len(payload)) + compressed
    term, used = decode_one(data)
    assert term == TupleTerm((UInt8(7),))
    assert used == len(data)


def test_corrupt_compressed_term_degrades_to_opaque() -> None:
    data = bytes([80, 0, 0, 0, 4, 1, 2, 3])
    term, used = decode_one(data)
    assert term == Opaque(80, data[1:])
    assert used == len(data)


def test_truncated_tuple_is_padded_with_placeholders() -> None:
    term, used = decode_one(bytes([104, 3, 97, 1]))
    assert term == TupleTerm((UInt8(1), MISSING, MISSING))
    assert used == 4


def test_truncated_primitive_becomes_opaque() -> None:
    term, used = decode_one(bytes([98, 0, 1]))
    assert term == Opaque(98, b"\x00\x01")
    assert used == 3


def test_list_missing_tail_gets_placeholder() -> None:
    term, used = decode_one(bytes([108, 0, 0, 0, 1, 97, 1]))
    assert term == ListWithTail((UInt8(1),), MISSING)
    assert used == 7


def test_truncated_map_pads_pairs() -> None:
    term, used = decode_one(bytes([116, 0, 0, 0, 2, 97, 1, 97, 2]))
    assert term == MapTerm(((UInt8(1), UInt8(2)), (MISSING, MISSING)))
    assert used == 9


def test_unknown_tag_inside_tuple_swallows_rest() -> None:
    term, used = decode_one(bytes([104, 2, 70, 9, 97, 1]))
    assert term == TupleTerm((Opaque(70, b"\x09\x61\x01"), MISSING))
    assert used == 6


def test_placeholders_are_capped_for_absurd_counts() -> None:
    term, used = decode_one(bytes([108, 0xFF, 0xFF, 0xFF, 0xFF]))
    assert isinstance(term, ListWithTail)
    assert len(term.elements) == MAX_PLACEHOLDERS
    assert term.tail == MISSING
    assert used == 5


def test_decode_root_requires_version_marker() -> None:
    with pytest.raises(UnsupportedVersion) as excinfo:
        decode_root(bytes([130, 97, 1]))
    assert excinfo.value.found == 130
    assert "130" in str(excinfo.value)

    with pytest.raises(UnsupportedVersion) as empty:
        decode_root(b"")
    assert empty.value.found is None


def test_decode_root_skips_marker() -> None:
    assert decode_root(bytes([131, 97, 42])) == UInt8(42)


def test_encode_round_trips_hand_built_bytes() -> None:
    data = bytes([131, 104, 3, 119, 2]) + b"ok" + bytes([98, 0xFF, 0xFF, 0xFF, 0xFF, 106])
    term = decode_root(data)
    assert term == TupleTerm((TextBlob(b"ok"), Int32(-1), NIL))
    assert encode(term) == data


def test_encode_then_decode_nested_docs_shape() -> None:
    term = TupleTerm(
        (
            atom("docs_v1"),
            MapTerm(((binary("en"), binary("Hello")),)),
            ListWithTail((UInt8(3), Int32(70000)), NIL),
        )
    )
    assert decode_root(encode(term)) == term
    assert decode_root(encode(term, compress=True)) == term


def test_encode_rejects_placeholder() -> None:
    with pytest.raises(ValueError):
        encode(MISSING)


def test_deeply_nested_terms_degrade_instead_of_overflowing() -> None:
    data = bytes([104, 1]) * 400 + bytes([97, 1])
    term, used = decode_one(data)
    assert used == len(data)

    depth = 0
    while isinstance(term, TupleTerm):
        (term,) = term.elements
        depth += 1
    assert depth == MAX_DEPTH
    assert isinstance(term, Opaque)
    assert term.tag == 104


def test_deep_nesting_inside_compressed_term_is_bounded() -> None:
    payload = bytes([104, 1]) * 400 + bytes([97, 1])
    data = bytes([80]) + struct.pack(">I", len(payload)) + zlib.compress(payload)
    term, used = decode_one(data)
    assert used == len(data)
    assert isinstance(term, TupleTerm)
