"""Tests for the position-tracking scanner."""

import pytest

from json_xml_converter.scanning.scanner import Cursor, Scanner
from json_xml_converter.shared.errors import (
    MalformedObjectError,
    UnexpectedEndOfInputError,
    UnterminatedStringError,
)


class TestCursor:
    """Test cursor validation."""

    def test_defaults(self):
        """Test initial position."""
        cursor = Cursor()
        assert (cursor.index, cursor.line, cursor.column) == (0, 1, 1)

    @pytest.mark.parametrize(
        "kwargs", [{"index": -1}, {"line": 0}, {"column": 0}]
    )
    def test_invalid_positions(self, kwargs):
        """Test invalid positions are rejected."""
        with pytest.raises(ValueError):
            Cursor(**kwargs)


class TestScanner:
    """Test scanner movement and positions."""

    def test_peek_and_advance(self):
        """Test reading characters in order."""
        scanner = Scanner("ab")

        assert scanner.peek() == "a"
        assert scanner.peek_next() == "b"
        scanner.advance()
        assert scanner.peek() == "b"
        assert scanner.peek_next() is None
        scanner.advance()
        assert scanner.peek() is None
        assert scanner.at_end

    def test_columns_and_lines(self):
        """Test newline resets the column and counts the line."""
        scanner = Scanner("a\nbc")

        scanner.advance()
        assert (scanner.line, scanner.column) == (1, 2)
        scanner.advance()
        assert (scanner.line, scanner.column) == (2, 1)
        scanner.advance()
        assert (scanner.line, scanner.column) == (2, 2)

    def test_carriage_return_does_not_start_line(self):
        """Test only line feeds count as line breaks."""
        scanner = Scanner("\r\nx")
        scanner.advance()
        assert (scanner.line, scanner.column) == (1, 2)
        scanner.advance()
        assert (scanner.line, scanner.column) == (2, 1)

    def test_skip_whitespace(self):
        """Test JSON whitespace is skipped."""
        scanner = Scanner(" \t\r\n  x")
        scanner.skip_whitespace()

        assert scanner.peek() == "x"
        assert (scanner.line, scanner.column) == (2, 3)

    def test_skip_whitespace_at_end(self):
        """Test skipping whitespace up to the end of input."""
        scanner = Scanner("   ")
        scanner.skip_whitespace()
        assert scanner.at_end

    def test_advance_past_end_raises(self):
        """Test the default end-of-input error."""
        scanner = Scanner("")

        with pytest.raises(UnexpectedEndOfInputError) as exc_info:
            scanner.advance()
        assert (exc_info.value.line, exc_info.value.column) == (1, 1)

    def test_advance_past_end_custom_error(self):
        """Test a caller-chosen end-of-input error."""
        scanner = Scanner("a")
        scanner.advance()

        with pytest.raises(UnterminatedStringError) as exc_info:
            scanner.advance(on_eof=UnterminatedStringError)
        assert exc_info.value.column == 2

    def test_error_at_cursor(self):
        """Test errors are positioned at the cursor."""
        scanner = Scanner("{\n  ]")
        scanner.advance()
        scanner.skip_whitespace()

        error = scanner.error(MalformedObjectError, expected="'\"'")
        assert isinstance(error, MalformedObjectError)
        assert (error.line, error.column) == (2, 3)
        assert error.expected == "'\"'"

    def test_text_is_exposed(self):
        """Test the original text is available."""
        assert Scanner("[1]").text == "[1]"
