"""
Manifest line grammar.

Each record is ``<checksum><whitespace><path>``. The checksum is any run of
non-whitespace characters; the path is the remainder of the line and may
contain spaces.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from bagforge.core.errors import ParseError

logger = logging.getLogger(__name__)

# One or more linear whitespace characters (spaces or tabs) separate the
# checksum from the filename.
LINE_PATTERN = re.compile(r"^(\S+)[ \t]+(\S.*)$")


@dataclass
class ParseOutcome:
    """Entries parsed from a manifest, plus one error per bad line."""

    entries: dict[str, str] = field(default_factory=dict)
    errors: list[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if every line parsed."""
        return not self.errors


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def parse_line(line: str, line_number: int | None = None) -> tuple[str, str]:
    """
    Parse a single manifest record.

    Args:
        line: Line text, with or without its terminator.
        line_number: Optional 1-based line number for error reporting.

    Returns:
        Tuple of (checksum, path).

    Raises:
        ParseError: If the line is not ``<checksum> <path>``.
    """
    text = _strip_terminator(line)
    match = LINE_PATTERN.match(text)
    if match is None:
        raise ParseError(
            f"Unable to parse data from line: {text}",
            line_number=line_number,
            line=text,
        )
    return match.group(1), match.group(2)


def parse_manifest_data(lines: Iterable[str | bytes]) -> ParseOutcome:
    """
    Parse manifest records from an iterable of lines.

    Accepts an open text or binary file. Blank lines are skipped and
    malformed lines are collected as errors without stopping the parse.

    Args:
        lines: Lines of manifest content.

    Returns:
        ParseOutcome with the entries that parsed and the per-line errors.
    """
    outcome = ParseOutcome()

    for line_number, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                outcome.errors.append(
                    ParseError(
                        f"Line {line_number} is not valid UTF-8: {e}",
                        line_number=line_number,
                    )
                )
                continue

        if not _strip_terminator(raw).strip():
            continue

        try:
            checksum, path = parse_line(raw, line_number=line_number)
        except ParseError as e:
            outcome.errors.append(e)
            continue

        if path in outcome.entries:
            logger.warning("Duplicate manifest entry for %s on line %d", path, line_number)
        outcome.entries[path] = checksum

    return outcome


def render_line(checksum: str, path: str) -> str:
    """Render one manifest record with its trailing newline."""
    return f"{checksum} {path}\n"


def render_manifest(entries: Mapping[str, str]) -> str:
    """
    Render entries as manifest text, sorted by path.

    Args:
        entries: Mapping of relative path to checksum.

    Returns:
        Manifest content; empty string for no entries.
    """
    return "".join(render_line(entries[path], path) for path in sorted(entries))
