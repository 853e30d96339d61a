"""Tests for utility functions."""

import io

import pytest

from loggap.models.record import Record
from loggap.utils.input_utils import iter_lines
from loggap.utils.text_utils import split_fields


class TestSplitFields:
    """Test record splitting."""

    def test_split_on_space(self):
        assert split_fields("A 100", " ") == ["A", "100"]

    def test_consecutive_delimiters_collapse(self):
        assert split_fields("A    100   x", " ") == ["A", "100", "x"]

    def test_leading_delimiter_keeps_empty_first_field(self):
        assert split_fields(",a,b", ",") == ["", "a", "b"]

    def test_trailing_empty_fields_dropped(self):
        assert split_fields("a,b,,,", ",") == ["a", "b"]

    def test_multi_character_delimiter_is_literal(self):
        assert split_fields("a.*b.*c", ".*") == ["a", "b", "c"]

    def test_delimiter_matches_case_insensitively(self):
        assert split_fields("aXbxc", "x") == ["a", "b", "c"]

    def test_empty_delimiter_raises(self):
        with pytest.raises(ValueError):
            split_fields("a b", "")


class TestRecord:
    """Test the record model."""

    def test_fields_computed_from_delimiter(self):
        record = Record("a;b;c", delimiter=";", line_number=4)

        assert record.fields == ["a", "b", "c"]
        assert record.line_number == 4

    def test_fields_cached(self):
        record = Record("a b")

        assert record.fields is record.fields


class TestIterLines:
    """Test line input."""

    def test_reads_stdin_when_no_paths(self):
        stream = io.StringIO("first\nsecond\r\nthird")

        assert list(iter_lines([], stdin=stream)) == ["first", "second", "third"]

    def test_stdin_invalid_utf8_replaced(self):
        stream = io.TextIOWrapper(io.BytesIO(b"ok\nbad \xff byte\n"), encoding="utf-8")

        assert list(iter_lines([], stdin=stream)) == ["ok", "bad \ufffd byte"]

    def test_reads_files_in_order(self, tmp_path):
        first = tmp_path / "a.log"
        second = tmp_path / "b.log"
        first.write_text("1\n2\n")
        second.write_text("3\n")

        assert list(iter_lines([first, second])) == ["1", "2", "3"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(iter_lines([tmp_path / "missing.log"]))
