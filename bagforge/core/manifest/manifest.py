"""
BagIt manifest files.

A manifest (``manifest-<algo>.txt`` or ``tagmanifest-<algo>.txt``) maps each
file's path, relative to the manifest's directory, to its checksum.

For more information see:
    https://www.rfc-editor.org/rfc/rfc8493#section-2.1.3
    https://www.rfc-editor.org/rfc/rfc8493#section-2.2.1
"""

from __future__ import annotations

import io
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from bagforge.config import DEFAULT_SETTINGS, BagSettings
from bagforge.core.errors import AlgorithmError, BagError, BagIOError, FixityError, PathError
from bagforge.core.manifest.algo_name import extract_algorithm
from bagforge.core.manifest.line_grammar import parse_manifest_data, render_manifest
from bagforge.core.manifest.report import FixityReport
from bagforge.hashing.registry import HashFactory, HashRegistry, default_registry, file_checksum

logger = logging.getLogger(__name__)


def _require_parent(path: Path) -> None:
    """Raise PathError unless the parent directory of ``path`` exists."""
    try:
        os.stat(path.parent)
    except FileNotFoundError:
        raise PathError(
            f"Unable to create manifest. Path does not exist: {path}", path=path
        ) from None
    except OSError as e:
        raise PathError(f"Unexpected error creating manifest: {e}", path=path) from e


@dataclass
class LoadOutcome:
    """Result of reading a manifest from disk."""

    manifest: Manifest | None = None
    errors: list[BagError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if the manifest loaded without any error."""
        return self.manifest is not None and not self.errors


class Manifest:
    """
    In-memory manifest bound to a file path and a hash algorithm.

    Use ``for_directory`` for a new manifest in a bag directory and
    ``for_path`` (or ``load``) for an existing manifest file.
    """

    def __init__(
        self,
        path: str | Path,
        algorithm: str,
        registry: HashRegistry | None = None,
    ):
        """
        Bind a manifest to ``path`` without checking the filesystem.

        Prefer ``for_directory`` or ``for_path``, which check that the
        target's parent directory exists.

        Args:
            path: Manifest file path, used verbatim.
            algorithm: Hash algorithm name.
            registry: Hash registry; defaults to ``default_registry()``.

        Raises:
            AlgorithmError: If the registry does not know ``algorithm``.
        """
        self._path = Path(path)
        self._registry = registry if registry is not None else default_registry()
        self._hash_factory: HashFactory = self._registry.lookup(algorithm)
        self._algorithm = algorithm.lower()
        self.entries: dict[str, str] = {}

    @classmethod
    def for_directory(
        cls,
        directory: str | Path,
        algorithm: str,
        registry: HashRegistry | None = None,
    ) -> Manifest:
        """
        Create a manifest named ``manifest-<algorithm>.txt`` in ``directory``.

        The directory itself may not exist yet; ``create`` makes it. Its
        parent must exist.

        Raises:
            PathError: If the parent of ``directory`` does not exist.
            AlgorithmError: If the registry does not know ``algorithm``.
        """
        directory = Path(directory)
        _require_parent(directory)
        return cls(directory / f"manifest-{algorithm.lower()}.txt", algorithm, registry)

    @classmethod
    def for_path(
        cls,
        path: str | Path,
        algorithm: str,
        registry: HashRegistry | None = None,
    ) -> Manifest:
        """
        Create a manifest for an explicit file path.

        Raises:
            PathError: If the parent directory of ``path`` does not exist.
            AlgorithmError: If the registry does not know ``algorithm``.
        """
        path = Path(path)
        _require_parent(path)
        return cls(path, algorithm, registry)

    @classmethod
    def load(cls, path: str | Path, registry: HashRegistry | None = None) -> LoadOutcome:
        """
        Read a manifest file.

        The algorithm comes from the filename. Parse errors do not stop
        loading: the outcome keeps the entries that parsed and every error.

        Args:
            path: Path to ``manifest-<algo>.txt`` or ``tagmanifest-<algo>.txt``.
            registry: Hash registry; defaults to ``default_registry()``.

        Returns:
            LoadOutcome with the manifest (None if it could not be built)
            and all errors.
        """
        path = Path(path)
        errors: list[BagError] = []

        try:
            algorithm = extract_algorithm(path)
        except AlgorithmError as e:
            return LoadOutcome(errors=[e])

        try:
            with open(path, "rb") as f:
                parsed = parse_manifest_data(f)
        except OSError as e:
            return LoadOutcome(
                errors=[BagIOError(f"Unable to read manifest {path}: {e}", path=path, original_error=e)]
            )
        errors.extend(parsed.errors)

        try:
            manifest = cls.for_path(path, algorithm, registry)
        except BagError as e:
            errors.append(e)
            return LoadOutcome(errors=errors)

        manifest.entries = parsed.entries
        logger.debug("Loaded %d entries from %s", len(parsed.entries), path)
        return LoadOutcome(manifest=manifest, errors=errors)

    @property
    def path(self) -> Path:
        """Manifest file path."""
        return self._path

    @property
    def algorithm(self) -> str:
        """Lowercased algorithm name."""
        return self._algorithm

    def name(self) -> str:
        """Normalised manifest file path as a string."""
        return os.path.normpath(self._path)

    def rename(self, new_path: str | Path) -> None:
        """
        Move the manifest to a new path. Nothing is written to disk.

        Raises:
            PathError: If the parent directory of ``new_path`` does not exist.
        """
        new_path = Path(new_path)
        _require_parent(new_path)
        self._path = new_path

    def _check_entry(self, rel_path: str, expected: str, chunk_size: int) -> BagError | None:
        # Entries always resolve inside the manifest's directory, even absolute ones.
        full_path = self._path.parent / rel_path.lstrip("/")
        try:
            actual = file_checksum(full_path, self._hash_factory, chunk_size=chunk_size)
        except OSError as e:
            return BagIOError(
                f"Unable to compute checksum for {rel_path}: {e}",
                path=rel_path,
                original_error=e,
            )
        if actual != expected:
            return FixityError(rel_path, expected, actual)
        return None

    def verify(
        self,
        workers: int | None = None,
        settings: BagSettings | None = None,
    ) -> list[BagError]:
        """
        Check every entry against the file on disk.

        All entries are checked; nothing short-circuits. With more than one
        worker the files are hashed on a thread pool.

        Args:
            workers: Hashing threads; defaults to ``settings.verify_workers``.
            settings: Optional settings for chunk size and workers.

        Returns:
            FixityError for each mismatch and BagIOError for each file that
            could not be read, ordered by entry path. Empty if all match.
        """
        settings = settings or DEFAULT_SETTINGS
        workers = workers or settings.verify_workers
        items = sorted(self.entries.items())

        if workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(
                    pool.map(
                        lambda item: self._check_entry(item[0], item[1], settings.chunk_size),
                        items,
                    )
                )
        else:
            results = [
                self._check_entry(rel_path, expected, settings.chunk_size)
                for rel_path, expected in items
            ]

        errors = [e for e in results if e is not None]
        if errors:
            logger.warning("%d of %d entries failed fixity in %s", len(errors), len(items), self._path)
        return errors

    def fixity_report(
        self,
        workers: int | None = None,
        settings: BagSettings | None = None,
    ) -> FixityReport:
        """Verify and summarise the result as a FixityReport."""
        errors = self.verify(workers=workers, settings=settings)
        return FixityReport.build(
            manifest=self.name(),
            algorithm=self._algorithm,
            checked=len(self.entries),
            errors=errors,
        )

    def write(self, stream: TextIO) -> None:
        """Write entries to ``stream`` in manifest format, sorted by path."""
        stream.write(render_manifest(self.entries))

    def to_string(self) -> str:
        """Manifest content as a string."""
        buf = io.StringIO()
        self.write(buf)
        return buf.getvalue()

    def create(self, settings: BagSettings | None = None) -> None:
        """
        Write the manifest file, creating parent directories as needed.

        Raises:
            PathError: If the manifest has no filename.
            BagIOError: If a directory or the file cannot be written.
        """
        if not self._path.name:
            raise PathError(
                "Manifest must have values for basename and algo set to create a file.",
                path=self._path,
            )
        settings = settings or DEFAULT_SETTINGS

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding=settings.encoding, newline="\n") as f:
                self.write(f)
        except OSError as e:
            raise BagIOError(
                f"Unable to write manifest {self._path}: {e}",
                path=self._path,
                original_error=e,
            ) from e

        logger.debug("Wrote %d entries to %s", len(self.entries), self._path)

    def __repr__(self) -> str:
        return f"Manifest(path={str(self._path)!r}, algorithm={self._algorithm!r}, entries={len(self.entries)})"
