"""Hash registry and file digests."""

from bagforge.hashing.registry import (
    DEFAULT_CHUNK_SIZE,
    HashFactory,
    HashRegistry,
    default_registry,
    file_checksum,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "HashFactory",
    "HashRegistry",
    "default_registry",
    "file_checksum",
]
