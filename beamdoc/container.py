"""Chunk table walking for FOR1/BEAM container files."""

from __future__ import annotations

import gzip
import zlib
from pathlib import Path
from typing import Iterator, List

from .errors import ChunkNotFound, CorruptContainer, NotAContainer
from .logging import get_logger
from .models import ChunkRecord
from .reader import ByteSpan

GZIP_MAGIC = b"\x1f\x8b"
FORM_TAG = b"FOR1"
DOCS_CHUNK = b"Docs"

# FOR1, form length, BEAM
_FIRST_RECORD_OFFSET = 12
_RECORD_HEADER_SIZE = 8

_LOGGER = get_logger("container")


def unwrap(data: bytes, *, path: Path | str | None = None) -> bytes:
    """Inflate a gzip-wrapped container and check the form tag."""
    if data[:2] == GZIP_MAGIC:
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as exc:
            raise CorruptContainer(f"gzip decompression failed: {exc}", path=path) from exc
        _LOGGER.debug("Inflated gzip container to %d bytes", len(data))
    if data[:4] != FORM_TAG:
        raise NotAContainer(
            f"expected {FORM_TAG.decode()} header, found {data[:4]!r}", path=path
        )
    return data


def iter_chunks(data: bytes, *, path: Path | str | None = None) -> Iterator[ChunkRecord]:
    """Yield every chunk record that fits inside the container."""
    data = unwrap(data, path=path)
    offset = _FIRST_RECORD_OFFSET
    while offset + _RECORD_HEADER_SIZE <= len(data):
        span = ByteSpan(data, offset)
        record = ChunkRecord(
            identifier=span.take(4),
            declared_length=span.read_u32(),
            start=offset,
        )
        if record.payload_end > len(data):
            _LOGGER.debug(
                "Chunk %r at %d overruns buffer (%d > %d)",
                record.identifier,
                offset,
                record.payload_end,
                len(data),
            )
            return
        yield record
        offset = record.end_offset


def list_chunks(data: bytes, *, path: Path | str | None = None) -> List[ChunkRecord]:
    return list(iter_chunks(data, path=path))


def locate_chunk(
    data: bytes, chunk_id: bytes | str, *, path: Path | str | None = None
) -> bytes:
    """Return the unpadded payload of the chunk named ``chunk_id``."""
    if isinstance(chunk_id, str):
        chunk_id = chunk_id.encode("latin-1")
    data = unwrap(data, path=path)
    for record in iter_chunks(data, path=path):
        if record.identifier == chunk_id:
            return data[record.payload_start : record.payload_end]
    raise ChunkNotFound(chunk_id, path=path)


def read_chunk(path: Path | str, chunk_id: bytes | str = DOCS_CHUNK) -> bytes:
    """Read ``path`` whole and return the requested chunk payload."""
    file_path = Path(path)
    data = file_path.read_bytes()
    return locate_chunk(data, chunk_id, path=file_path)


__all__ = [
    "DOCS_CHUNK",
    "FORM_TAG",
    "GZIP_MAGIC",
    "iter_chunks",
    "list_chunks",
    "locate_chunk",
    "read_chunk",
    "unwrap",
]
