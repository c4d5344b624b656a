"""
Hash function registry.

Maps algorithm names to hash factories and computes file digests.
Manifests receive a registry explicitly so tests can supply their own.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Callable, Protocol

import xxhash

from bagforge.core.errors import AlgorithmError

DEFAULT_CHUNK_SIZE = 65536


class Hasher(Protocol):
    """Streaming hash object (hashlib and xxhash both satisfy this)."""

    def update(self, data: bytes, /) -> Any:
        ...

    def hexdigest(self) -> str:
        ...


HashFactory = Callable[[], Hasher]


class HashRegistry:
    """
    Registry of named hash factories.

    Names are case-insensitive: ``"SHA1"`` and ``"sha1"`` resolve to the
    same factory.
    """

    def __init__(self, factories: dict[str, HashFactory] | None = None):
        self._factories: dict[str, HashFactory] = {}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: HashFactory) -> None:
        """Register (or replace) a hash factory under ``name``."""
        self._factories[name.lower()] = factory

    def lookup(self, name: str) -> HashFactory:
        """
        Resolve an algorithm name to its factory.

        Raises:
            AlgorithmError: If the name is not registered.
        """
        factory = self._factories.get(name.lower())
        if factory is None:
            raise AlgorithmError(f"Unsupported hash algorithm: {name}", algorithm=name)
        return factory

    def names(self) -> list[str]:
        """Sorted list of registered algorithm names."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._factories


def file_checksum(
    path: Path | str,
    factory: HashFactory,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """
    Compute the hex digest of a file's contents.

    Args:
        path: Path to file.
        factory: Hash factory from a registry.
        chunk_size: Read size in bytes.

    Returns:
        Lowercase hex digest.

    Raises:
        OSError: If the file cannot be read.
    """
    hasher = factory()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def _hashlib_factory(name: str) -> HashFactory:
    return lambda: hashlib.new(name)


def default_registry() -> HashRegistry:
    """
    Create a registry with the BagIt algorithms plus xxhash variants.

    Returns:
        New HashRegistry; callers may register more algorithms on it.
    """
    registry = HashRegistry()
    for name in ("md5", "sha1", "sha224", "sha256", "sha384", "sha512"):
        registry.register(name, _hashlib_factory(name))
    registry.register("xxh64", xxhash.xxh64)
    registry.register("xxh3_64", xxhash.xxh3_64)
    registry.register("xxh128", xxhash.xxh3_128)
    return registry
