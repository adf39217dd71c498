"""Memoizes decoded documentation keyed by file path and stat fingerprint."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Tuple

from ..loader import load_documentation
from ..logging import get_logger
from ..models import DocumentationModel

Fingerprint = Tuple[int, int]


@dataclass(frozen=True)
class CacheEntry:
    """Decoded model together with the fingerprint it was decoded from."""

    fingerprint: Fingerprint
    model: DocumentationModel


def file_fingerprint(path: Path) -> Fingerprint:
    stat_result = path.stat()
    return stat_result.st_mtime_ns, stat_result.st_size


class DecodeCache:
    """Runs the decode pipeline at most once per unmodified file.

    Entries are never evicted on their own; :meth:`clear` drops them all.
    """

    def __init__(
        self,
        decoder: Callable[[Path], DocumentationModel] = load_documentation,
        fingerprinter: Callable[[Path], Fingerprint] = file_fingerprint,
    ) -> None:
        self._decoder = decoder
        self._fingerprinter = fingerprinter
        self._entries: Dict[Path, CacheEntry] = {}
        self._lock = threading.Lock()
        self.decode_count = 0
        self.logger = get_logger("cache")

    def get_or_decode(self, path: Path | str) -> DocumentationModel:
        key = Path(path).expanduser().resolve()
        with self._lock:
            fingerprint = self._fingerprinter(key)
            entry = self._entries.get(key)
            if entry is not None and entry.fingerprint == fingerprint:
                self.logger.debug("Cache hit for %s", key)
                return entry.model
            if entry is not None:
                self.logger.debug("Cache entry for %s is stale", key)
            model = self._decoder(key)
            self.decode_count += 1
            self._entries[key] = CacheEntry(fingerprint=fingerprint, model=model)
            return model

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        self.logger.debug("Decode cache cleared")

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return Path(path).expanduser().resolve() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CacheEntry", "DecodeCache", "Fingerprint", "file_fingerprint"]
