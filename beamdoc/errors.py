"""Fatal error types raised while reading documentation from BEAM files."""

from __future__ import annotations

from pathlib import Path


class BeamDocError(RuntimeError):
    """Base class for failures that stop processing of a single file."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.detail = message
        super().__init__(f"{self.path}: {message}" if self.path else message)


class CorruptContainer(BeamDocError):
    """Raised when the gzip wrapper around a container cannot be inflated."""


class NotAContainer(BeamDocError):
    """Raised when the buffer does not start with the FOR1 form tag."""


class ChunkNotFound(BeamDocError):
    """Raised when the container has no chunk with the requested identifier."""

    def __init__(self, chunk_id: bytes, *, path: Path | str | None = None) -> None:
        self.chunk_id = chunk_id
        name = chunk_id.decode("latin-1")
        super().__init__(f"no {name!r} chunk in container", path=path)


class UnsupportedVersion(BeamDocError):
    """Raised when a term stream does not start with the version marker."""

    def __init__(self, found: int | None, *, path: Path | str | None = None) -> None:
        self.found = found
        if found is None:
            message = "empty term stream, expected version marker 131"
        else:
            message = f"unsupported term format version {found}, expected 131"
        super().__init__(message, path=path)


__all__ = [
    "BeamDocError",
    "ChunkNotFound",
    "CorruptContainer",
    "NotAContainer",
    "UnsupportedVersion",
]
