"""
Tag files.

Tag files hold ``key: value`` metadata, one field per logical line, wrapped
at 79 columns with indented continuation lines. They include the standard
``bagit.txt`` and ``bag-info.txt`` as well as any optional tag file.

For more information see:
    https://www.rfc-editor.org/rfc/rfc8493#section-2.2.2
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from bagforge.config import DEFAULT_SETTINGS, BagSettings
from bagforge.core.errors import BagError, BagIOError, ParseError, PathError
from bagforge.core.field_format import format_field

logger = logging.getLogger(__name__)

TAG_FILE_NAME = re.compile(r"^.+\.txt$")


@dataclass
class TagFileOutcome:
    """A tag file plus any problems found building or reading it."""

    tag_file: TagFile
    errors: list[BagError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if there were no errors."""
        return not self.errors


class TagFile:
    """Key/value tag data bound to a file path."""

    def __init__(self, path: str | Path):
        self._path = Path(os.path.normpath(path))
        self.fields: dict[str, str] = {}

    @property
    def path(self) -> Path:
        """Tag file path."""
        return self._path

    def name(self) -> str:
        """Tag file path as a string."""
        return str(self._path)

    def validate_path(self) -> list[PathError]:
        """
        Check that the parent directory exists and the name is ``*.txt``.

        Returns:
            One PathError per problem; empty if the path is usable.
        """
        errors = []
        if not self._path.parent.is_dir():
            errors.append(
                PathError(f"Tag file directory does not exist: {self._path.parent}", path=self._path)
            )
        if not TAG_FILE_NAME.match(self._path.name):
            errors.append(
                PathError(
                    "Tagfiles must end in .txt and contain at least 1 letter. "
                    f"Provided: {self._path.name}",
                    path=self._path,
                )
            )
        return errors

    def to_string(self, settings: BagSettings | None = None) -> str:
        """Formatted tag file content, one wrapped field per line."""
        settings = settings or DEFAULT_SETTINGS
        return "".join(
            format_field(
                key,
                value,
                width=settings.line_width,
                indent=settings.continuation_indent,
            )
            + "\n"
            for key, value in self.fields.items()
        )

    def create(self, settings: BagSettings | None = None) -> None:
        """
        Write all fields to the tag file, creating directories as needed.

        Raises:
            BagIOError: If a directory or the file cannot be written.
        """
        settings = settings or DEFAULT_SETTINGS
        content = self.to_string(settings)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding=settings.encoding, newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise BagIOError(
                f"Error writing tagfile {self._path}: {e}",
                path=self._path,
                original_error=e,
            ) from e

        logger.debug("Wrote %d fields to %s", len(self.fields), self._path)

    @classmethod
    def load(cls, path: str | Path, settings: BagSettings | None = None) -> TagFileOutcome:
        """
        Read fields from an existing tag file.

        Indented lines continue the previous field and are joined with a
        single space. Malformed lines are reported and skipped.

        Args:
            path: Tag file path.
            settings: Optional settings for the text encoding.

        Returns:
            TagFileOutcome with the tag file and any path, read or parse errors.
        """
        settings = settings or DEFAULT_SETTINGS
        outcome = new_tag_file(path)
        tag_file = outcome.tag_file

        try:
            with open(tag_file.path, encoding=settings.encoding) as f:
                lines = f.read().splitlines()
        except OSError as e:
            outcome.errors.append(
                BagIOError(f"Unable to read tagfile {tag_file.path}: {e}", path=tag_file.path, original_error=e)
            )
            return outcome
        except UnicodeDecodeError as e:
            outcome.errors.append(ParseError(f"Tagfile {tag_file.path} is not valid {settings.encoding}: {e}"))
            return outcome

        current_key: str | None = None
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            if line[0] in " \t":
                if current_key is None:
                    outcome.errors.append(
                        ParseError(
                            f"Continuation line without a field: {line}",
                            line_number=line_number,
                            line=line,
                        )
                    )
                    continue
                tag_file.fields[current_key] += " " + line.strip()
                continue

            key, sep, value = line.partition(":")
            if not sep or not key.strip():
                outcome.errors.append(
                    ParseError(
                        f"Unable to parse tag from line: {line}",
                        line_number=line_number,
                        line=line,
                    )
                )
                current_key = None
                continue

            current_key = key.strip()
            tag_file.fields[current_key] = value.strip()

        return outcome

    def __repr__(self) -> str:
        return f"TagFile(path={str(self._path)!r}, fields={len(self.fields)})"


def new_tag_file(path: str | Path) -> TagFileOutcome:
    """
    Create a tag file for ``path``.

    The TagFile is always returned, even when the path is unusable, so
    callers can still fill in fields; the problems are listed in ``errors``.

    Args:
        path: Tag file path ending in ``.txt``.

    Returns:
        TagFileOutcome with the new TagFile and any PathErrors.
    """
    tag_file = TagFile(path)
    return TagFileOutcome(tag_file=tag_file, errors=list(tag_file.validate_path()))
