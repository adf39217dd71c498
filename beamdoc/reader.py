"""Big-endian cursor over an in-memory byte buffer."""

from __future__ import annotations

import struct


class TruncatedInput(IndexError):
    """Raised when a read would run past the end of the buffer."""


_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")


class ByteSpan:
    """Reads primitives from ``data`` starting at ``offset``.

    Failed reads leave the offset untouched so callers can rewind cleanly.
    """

    __slots__ = ("data", "offset")

    def __init__(self, data: bytes, offset: int = 0) -> None:
        if offset < 0 or offset > len(data):
            raise ValueError(f"offset {offset} outside buffer of {len(data)} bytes")
        self.data = data
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _require(self, size: int) -> None:
        if size < 0 or size > self.remaining:
            raise TruncatedInput(
                f"need {size} bytes at offset {self.offset}, {self.remaining} available"
            )

    def read_u8(self) -> int:
        self._require(1)
        value = self.data[self.offset]
        self.offset += 1
        return value

    def _unpack(self, packer: struct.Struct) -> int:
        self._require(packer.size)
        (value,) = packer.unpack_from(self.data, self.offset)
        self.offset += packer.size
        return value

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def take(self, size: int) -> bytes:
        """Return the next ``size`` bytes and advance past them."""
        self._require(size)
        chunk = bytes(self.data[self.offset : self.offset + size])
        self.offset += size
        return chunk

    def skip(self, size: int) -> None:
        self._require(size)
        self.offset += size

    def rest(self) -> bytes:
        """Return everything left and move to the end."""
        return self.take(self.remaining)


__all__ = ["ByteSpan", "TruncatedInput"]
