"""Tests for pogettext.i18n.sources module."""

import pytest

from pogettext.i18n import FileSystemSource, MemorySource, SourceNotFoundError


class TestFileSystemSource:
    """Tests for FileSystemSource."""

    def test_reads_relative_identifier(self, locales_dir):
        """read_file() resolves '/'-separated names under the root."""
        source = FileSystemSource(locales_dir)
        assert b"Bonjour" in source.read_file("fr/LC_MESSAGES/default.po")

    def test_missing_file_raises(self, tmp_path):
        """read_file() raises SourceNotFoundError for absent files."""
        with pytest.raises(SourceNotFoundError):
            FileSystemSource(tmp_path).read_file("xx/default.po")

    def test_directory_is_not_a_file(self, locales_dir):
        """Reading a directory is reported as not found."""
        with pytest.raises(SourceNotFoundError):
            FileSystemSource(locales_dir).read_file("fr")


class TestMemorySource:
    """Tests for MemorySource."""

    def test_serves_bytes_and_text(self):
        """Text content is stored as UTF-8 bytes."""
        source = MemorySource({"a.po": b"raw", "b.po": "café"})
        assert source.read_file("a.po") == b"raw"
        assert source.read_file("b.po") == "café".encode("utf-8")

    def test_names_are_normalised(self):
        """Redundant separators do not matter."""
        source = MemorySource({"fr//LC_MESSAGES/d.po": b"x"})
        assert source.read_file("fr/LC_MESSAGES/d.po") == b"x"

    def test_add_file_replaces_content(self):
        """add_file() overwrites an existing entry."""
        source = MemorySource({"a.po": b"old"})
        source.add_file("a.po", b"new")
        assert source.read_file("a.po") == b"new"

    def test_missing_name_raises(self):
        """read_file() raises SourceNotFoundError for unknown names."""
        with pytest.raises(SourceNotFoundError):
            MemorySource().read_file("nope.po")
