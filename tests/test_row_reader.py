"""Tests for RowReader."""

import pytest

from upbeat.exceptions import ParseError
from upbeat.parsers.row_reader import RowReader


class TestRowReader:
    """Tests for positional field access."""

    @pytest.fixture
    def reader(self):
        return RowReader(["3", " 10 ", "1", "Kitchen", "x"], row_number=7, record_type="MODULE")

    def test_record_tag(self, reader):
        """Test the record type tag."""
        assert reader.record_tag == "3"
        assert RowReader([]).record_tag == ""

    def test_int_at_strips_whitespace(self, reader):
        """Test reading an integer surrounded by spaces."""
        assert reader.int_at(1) == 10

    def test_int_at_invalid(self, reader):
        """Test that a non-integer column raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            reader.int_at(3)
        error = exc_info.value
        assert error.column == 3
        assert error.row_number == 7
        assert error.record_type == "MODULE"
        assert error.raw_data == "3, 10 ,1,Kitchen,x"

    def test_int_at_missing(self, reader):
        """Test that a missing column raises ParseError."""
        with pytest.raises(ParseError):
            reader.int_at(5)

    def test_str_at(self, reader):
        """Test reading text verbatim."""
        assert reader.str_at(3) == "Kitchen"
        with pytest.raises(ParseError):
            reader.str_at(9)

    def test_optional_str_at(self, reader):
        """Test defaults for absent columns."""
        assert reader.optional_str_at(4) == "x"
        assert reader.optional_str_at(12) == ""
        assert reader.optional_str_at(12, default="n/a") == "n/a"

    def test_join_from(self, reader):
        """Test re-joining trailing columns."""
        assert reader.join_from(3) == "Kitchen,x"
        assert reader.join_from(9) == ""

    def test_sequential_reads(self, reader):
        """Test the cursor starting after the tag."""
        assert reader.position == 1
        assert reader.read_ints(2) == [10, 1]
        assert reader.read_str() == "Kitchen"
        assert reader.remaining == 1

    def test_seek_and_skip(self, reader):
        """Test moving the cursor."""
        reader.seek(2)
        reader.skip()
        assert reader.read_str() == "Kitchen"
        with pytest.raises(ParseError):
            reader.seek(6)

    def test_has_columns(self, reader):
        """Test the column count check."""
        assert len(reader) == 5
        assert reader.has_columns(5)
        assert not reader.has_columns(6)

    def test_error_str(self, reader):
        """Test that errors describe the row."""
        text = str(reader.error("bad value", column=2))
        assert "record_type=MODULE" in text
        assert "row=7" in text
        assert "column=2" in text
