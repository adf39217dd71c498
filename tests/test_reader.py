"""Tests for the big-endian byte cursor."""

from __future__ import annotations

import pytest

from beamdoc.reader import ByteSpan, TruncatedInput


def test_reads_big_endian_primitives() -> None:
    span = ByteSpan(b"\x07\x01\x02\x00\x00\x01\x00\xff\xff\xff\xfe")
    assert span.read_u8() == 7
    assert span.read_u16() == 0x0102
    assert span.read_u32() == 0x100
    assert span.read_i32() == -2
    assert span.remaining == 0


def test_failed_read_leaves_offset_untouched() -> None:
    span = ByteSpan(b"\x00\x01\x02", offset=1)
    with pytest.raises(TruncatedInput):
        span.read_u32()
    assert span.offset == 1
    assert span.take(2) == b"\x01\x02"


def test_rest_consumes_everything() -> None:
    span = ByteSpan(b"abcdef")
    span.skip(2)
    assert span.rest() == b"cdef"
    assert span.rest() == b""
    assert span.offset == 6


def test_truncated_input_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        ByteSpan(b"").read_u8()
