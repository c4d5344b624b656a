"""
Error types for manifest and tag file handling.

Construction problems are raised. Parse and fixity problems are collected
and handed back together so callers get a complete audit.
"""

from __future__ import annotations

from pathlib import Path


class BagError(Exception):
    """Base class for all bagforge errors."""

    pass


class PathError(BagError):
    """A path is missing its parent directory or has an invalid name."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class AlgorithmError(BagError):
    """A hash algorithm name is unknown or cannot be derived."""

    def __init__(self, message: str, algorithm: str | None = None):
        super().__init__(message)
        self.algorithm = algorithm


class ParseError(BagError):
    """A single line could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class FixityError(BagError):
    """A file's computed checksum differs from the recorded one."""

    def __init__(self, path: str, expected: str, actual: str):
        super().__init__(f"File checksum {expected} is not valid for {path}:{actual}")
        self.path = path
        self.expected = expected
        self.actual = actual


class BagIOError(BagError):
    """Filesystem failure while reading, hashing or writing."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.path = str(path) if path is not None else None
        self.original_error = original_error
