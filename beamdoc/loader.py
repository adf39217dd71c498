"""Locate, decode and project the Docs chunk of a BEAM file."""

from __future__ import annotations

import time
from pathlib import Path

from .container import DOCS_CHUNK, locate_chunk
from .logging import get_logger
from .models import DocumentationModel
from .projector import project
from .terms import decode_root

_LOGGER = get_logger("loader")


def decode_documentation(
    data: bytes,
    module: str = "",
    *,
    language: str = "en",
    path: Path | str | None = None,
) -> DocumentationModel:
    """Run the container, term and projection stages over raw file bytes."""
    chunk = locate_chunk(data, DOCS_CHUNK, path=path)
    term = decode_root(chunk, path=path)
    return project(term, module, language=language)


def load_documentation(path: Path | str, *, language: str = "en") -> DocumentationModel:
    """Read ``path`` whole and return its documentation model."""
    file_path = Path(path)
    started = time.perf_counter()
    data = file_path.read_bytes()
    model = decode_documentation(data, file_path.stem, language=language, path=file_path)
    _LOGGER.debug(
        "Decoded %s (%d bytes, %d entities) in %.1f ms",
        file_path,
        len(data),
        len(model.entities),
        (time.perf_counter() - started) * 1000,
    )
    return model


__all__ = ["decode_documentation", "load_documentation"]
