"""Tests for full-line content matching."""

from __future__ import annotations

import re
from pathlib import Path
from unittest.mock import patch

import pytest

from filesearch.search.matcher import line_matches, matches


class TestLineMatches:
    """Test line_matches semantics."""

    def test_full_match(self) -> None:
        """Should accept a line the pattern covers entirely."""
        assert line_matches("hello world", re.compile("hello.*"))

    def test_substring_is_not_enough(self) -> None:
        """Should reject a line that only contains a match."""
        assert not line_matches("hello world", re.compile("hello"))
        assert not line_matches("say hello", re.compile("hello"))

    def test_no_pattern_matches_everything(self) -> None:
        """Should accept any line without a pattern."""
        assert line_matches("anything", None)
        assert line_matches("", None)

    def test_explicit_anchors_are_harmless(self) -> None:
        """Should behave the same with explicit anchors."""
        assert line_matches("abc", re.compile("^abc$"))

    def test_empty_line(self) -> None:
        """Should match an empty line only when the pattern allows it."""
        assert line_matches("", re.compile(".*"))
        assert not line_matches("", re.compile(".+"))


class TestMatches:
    """Test matches over files."""

    def test_matching_line(self, tmp_path: Path) -> None:
        """Should return True when one line fully matches."""
        path = tmp_path / "notes.txt"
        path.write_text("first\nhello world\nlast\n", encoding="utf-8")

        assert matches(path, re.compile("hello.*"))

    def test_substring_only(self, tmp_path: Path) -> None:
        """Should return False when the pattern only occurs inside lines."""
        path = tmp_path / "code.py"
        path.write_text("import os\nprint('hello world')\n", encoding="utf-8")

        assert not matches(path, re.compile("hello"))

    def test_pattern_does_not_span_lines(self, tmp_path: Path) -> None:
        """Should test each line on its own."""
        path = tmp_path / "split.txt"
        path.write_text("hello\nworld\n", encoding="utf-8")

        assert not matches(path, re.compile("hello.world"))
        assert matches(path, re.compile("world"))

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should return False for a file with no lines."""
        path = tmp_path / "empty.txt"
        path.write_text("")

        assert not matches(path, re.compile(".*"))

    def test_empty_file_without_pattern(self, tmp_path: Path) -> None:
        """Should return True without a pattern even for empty files."""
        path = tmp_path / "empty.txt"
        path.write_text("")

        assert matches(path, None)

    def test_crlf_terminators_stripped(self, tmp_path: Path) -> None:
        """Should not leave carriage returns on lines."""
        path = tmp_path / "dos.txt"
        path.write_bytes(b"alpha\r\nbeta\r\n")

        assert matches(path, re.compile("alpha"))

    def test_multibyte_utf8(self, tmp_path: Path) -> None:
        """Should decode multi-byte UTF-8 text."""
        path = tmp_path / "greek.txt"
        path.write_text("καλημέρα κόσμε\n", encoding="utf-8")

        assert matches(path, re.compile("καλημέρα .*"))

    def test_no_pattern_does_not_open_file(self, tmp_path: Path) -> None:
        """Should not read the file at all without a pattern."""
        with patch("filesearch.search.matcher.open", create=True) as mock_open:
            assert matches(tmp_path / "missing.txt", None)
            mock_open.assert_not_called()

    def test_short_circuits_on_first_match(self, tmp_path: Path) -> None:
        """Should stop reading after the first matching line."""
        path = tmp_path / "broken_tail.txt"
        # Invalid UTF-8 after the matching line is never decoded.
        path.write_bytes(b"match me\n" + b"x" * 100000 + b"\n\xff\xfe\n")

        assert matches(path, re.compile("match me"))

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Should raise OSError for a vanished file."""
        with pytest.raises(OSError):
            matches(tmp_path / "gone.txt", re.compile(".*"))

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        """Should raise UnicodeDecodeError for binary content."""
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\xfa\x00\x81")

        with pytest.raises(UnicodeDecodeError):
            matches(path, re.compile(".*"))

    def test_custom_encoding(self, tmp_path: Path) -> None:
        """Should honour a non-default encoding."""
        path = tmp_path / "latin.txt"
        path.write_bytes("café\n".encode("latin-1"))

        assert matches(path, re.compile("café"), encoding="latin-1")
