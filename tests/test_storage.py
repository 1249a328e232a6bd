# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for source readers."""

import pytest

from check_deps.storage import FileSystemReader, InMemoryReader


class TestFileSystemReader:
    """Tests for FileSystemReader."""

    def test_reads_utf8(self, tmp_path):
        """Test reading a UTF-8 file."""
        path = tmp_path / "main.js"
        path.write_text("const greeting = 'héllo'\n", encoding="utf-8")

        assert FileSystemReader().read_text(str(path)) == "const greeting = 'héllo'\n"

    def test_latin1_fallback(self, tmp_path):
        """Test non-UTF-8 content falls back to latin-1."""
        path = tmp_path / "legacy.js"
        path.write_bytes(b"// caf\xe9\n")

        assert FileSystemReader().read_text(str(path)) == "// café\n"

    def test_line_endings_preserved(self, tmp_path):
        """Test CRLF and lone CR line endings are returned unchanged."""
        path = tmp_path / "windows.js"
        path.write_bytes(b"const a = require('./a')\r\nconst b = 1\rmodule.exports = a\n")

        content = FileSystemReader().read_text(str(path))

        assert content == "const a = require('./a')\r\nconst b = 1\rmodule.exports = a\n"

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FileSystemReader().read_text(str(tmp_path / "missing.js"))

    def test_directory_is_not_readable(self, tmp_path):
        """Test a directory raises OSError."""
        (tmp_path / "utils.js").mkdir()

        with pytest.raises(OSError):
            FileSystemReader().read_text(str(tmp_path / "utils.js"))

    def test_size_limit(self, tmp_path):
        """Test files over the size limit raise OSError."""
        path = tmp_path / "big.js"
        path.write_text("x" * 100)

        with pytest.raises(OSError):
            FileSystemReader(max_file_size_bytes=10).read_text(str(path))
        assert FileSystemReader(max_file_size_bytes=None).read_text(str(path)) == "x" * 100


class TestInMemoryReader:
    """Tests for InMemoryReader."""

    def test_reads_normalized_paths(self):
        """Test lookups normalize paths."""
        reader = InMemoryReader({"/project/./checks/../main.js": "x"})

        assert reader.read_text("/project/main.js") == "x"
        assert len(reader) == 1

    def test_missing_path(self):
        """Test unknown paths raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            InMemoryReader().read_text("/nope.js")

    def test_add_file(self):
        """Test files can be added after construction."""
        reader = InMemoryReader()
        reader.add_file("/a.ts", "export {}")

        assert reader.read_text("/a.ts") == "export {}"
