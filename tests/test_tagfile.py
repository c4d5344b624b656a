"""Tests for tag files."""

import tempfile
from pathlib import Path

import pytest

from bagforge.config import BagSettings
from bagforge.core.errors import BagIOError, ParseError, PathError
from bagforge.core.tagfile import TagFile, new_tag_file


@pytest.fixture
def tmpdir_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestNewTagFile:
    """Tests for tag file construction."""

    def test_valid_path(self, tmpdir_path):
        """A .txt file in an existing directory is accepted."""
        outcome = new_tag_file(tmpdir_path / "bag-info.txt")
        assert outcome.ok
        assert outcome.tag_file.fields == {}
        assert outcome.tag_file.name() == str(tmpdir_path / "bag-info.txt")

    @pytest.mark.parametrize("name", ["bag-info.xml", ".txt", "bagit.txt.bak", "txt"])
    def test_bad_name(self, tmpdir_path, name):
        """Names must be at least one character followed by .txt."""
        outcome = new_tag_file(tmpdir_path / name)
        assert len(outcome.errors) == 1
        assert isinstance(outcome.errors[0], PathError)
        assert "must end in .txt" in str(outcome.errors[0])

    def test_missing_parent_still_usable(self, tmpdir_path):
        """A missing directory is reported but the tag file is still returned."""
        outcome = new_tag_file(tmpdir_path / "missing" / "bag-info.txt")
        assert len(outcome.errors) == 1
        assert isinstance(outcome.errors[0], PathError)

        tag_file = outcome.tag_file
        tag_file.fields["Contact-Name"] = "Jane Archivist"
        tag_file.create()
        assert (tmpdir_path / "missing" / "bag-info.txt").exists()

    def test_both_problems(self, tmpdir_path):
        """Missing directory and bad name are both reported."""
        outcome = new_tag_file(tmpdir_path / "missing" / "bag-info.dat")
        assert len(outcome.errors) == 2


class TestCreate:
    """Tests for writing tag files."""

    def test_fields_written_in_order(self, tmpdir_path):
        """Each field is written on its own line in insertion order."""
        tag_file = TagFile(tmpdir_path / "bagit.txt")
        tag_file.fields["BagIt-Version"] = "1.0"
        tag_file.fields["Tag-File-Character-Encoding"] = "UTF-8"
        tag_file.create()

        assert tag_file.path.read_text() == (
            "BagIt-Version: 1.0\nTag-File-Character-Encoding: UTF-8\n"
        )

    def test_long_field_wrapped(self, tmpdir_path):
        """Long values are wrapped at 79 columns."""
        tag_file = TagFile(tmpdir_path / "bag-info.txt")
        tag_file.fields["External-Description"] = " ".join(["collection"] * 40)
        tag_file.create()

        lines = tag_file.path.read_text().splitlines()
        assert len(lines) > 1
        assert all(len(line) <= 79 for line in lines)
        assert all(line.startswith("   ") for line in lines[1:])

    def test_empty_tag_file(self, tmpdir_path):
        """A tag file with no fields is written empty."""
        tag_file = TagFile(tmpdir_path / "empty.txt")
        tag_file.create()
        assert tag_file.path.read_text() == ""

    def test_settings_width(self, tmpdir_path):
        """Settings override the wrap width."""
        tag_file = TagFile(tmpdir_path / "bag-info.txt")
        tag_file.fields["Note"] = " ".join(["abc"] * 30)
        text = tag_file.to_string(BagSettings(line_width=30))
        assert all(len(line) <= 30 for line in text.splitlines())

    def test_create_io_error(self, tmpdir_path):
        """Write failures are raised as BagIOError."""
        blocker = tmpdir_path / "blocker"
        blocker.write_text("not a directory")

        tag_file = TagFile(blocker / "bag-info.txt")
        tag_file.fields["Key"] = "value"
        with pytest.raises(BagIOError):
            tag_file.create()


class TestLoad:
    """Tests for reading tag files."""

    def test_written_fields_load_back(self, tmpdir_path):
        """Wrapped fields are unwrapped when read."""
        tag_file = TagFile(tmpdir_path / "bag-info.txt")
        tag_file.fields["Source-Organization"] = "Example Archive"
        tag_file.fields["External-Description"] = " ".join(f"word{i}" for i in range(60))
        tag_file.fields["Contact-Email"] = "archivist@example.org"
        tag_file.create()

        outcome = TagFile.load(tag_file.path)
        assert outcome.ok
        assert outcome.tag_file.fields == tag_file.fields

    def test_malformed_line(self, tmpdir_path):
        """Lines without a colon are reported and skipped."""
        path = tmpdir_path / "bag-info.txt"
        path.write_text("Key: value\nno colon here\nOther: thing\n")

        outcome = TagFile.load(path)
        assert outcome.tag_file.fields == {"Key": "value", "Other": "thing"}
        assert len(outcome.errors) == 1
        assert isinstance(outcome.errors[0], ParseError)
        assert outcome.errors[0].line_number == 2

    def test_orphan_continuation(self, tmpdir_path):
        """A continuation line before any field is an error."""
        path = tmpdir_path / "bag-info.txt"
        path.write_text("   dangling\nKey: value\n")

        outcome = TagFile.load(path)
        assert outcome.tag_file.fields == {"Key": "value"}
        assert len(outcome.errors) == 1

    def test_missing_file(self, tmpdir_path):
        """A missing file is an I/O error."""
        outcome = TagFile.load(tmpdir_path / "bag-info.txt")
        assert len(outcome.errors) == 1
        assert isinstance(outcome.errors[0], BagIOError)
