"""In-memory stores used by beamdoc."""

from .decode_cache import CacheEntry, DecodeCache, file_fingerprint

__all__ = ["CacheEntry", "DecodeCache", "file_fingerprint"]
