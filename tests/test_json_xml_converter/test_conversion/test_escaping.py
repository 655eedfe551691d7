"""Tests for JSON string to XML text translation."""

import pytest

from json_xml_converter.conversion.escaping import (
    REPLACEMENT_CHARACTER,
    combine_surrogates,
    decode_code_point,
    escape_character,
    is_high_surrogate,
    is_low_surrogate,
    translate_escape,
)


class TestEscapeCharacter:
    """Test escaping of literal characters."""

    @pytest.mark.parametrize(
        ("char", "expected"),
        [("<", "&lt;"), (">", "&gt;"), ("&", "&amp;"), ("'", "&apos;")],
    )
    def test_reserved(self, char, expected):
        """Test reserved characters become references."""
        assert escape_character(char) == expected

    @pytest.mark.parametrize("char", ["a", " ", "é", "中", "/"])
    def test_plain(self, char):
        """Test other characters are copied."""
        assert escape_character(char) == char


class TestTranslateEscape:
    """Test translation of backslash escape letters."""

    @pytest.mark.parametrize(
        ("letter", "expected"),
        [
            ("t", "&#x09;"),
            ("n", "&#x0A;"),
            ("r", "&#x0D;"),
            ('"', "&quot;"),
            ("\\", "\\"),
            ("/", "/"),
        ],
    )
    def test_known_escapes(self, letter, expected):
        """Test supported escapes."""
        assert translate_escape(letter) == expected

    @pytest.mark.parametrize("letter", ["b", "f", "x", "q", None])
    def test_dropped_escapes(self, letter):
        """Test unsupported escapes produce nothing."""
        assert translate_escape(letter) == ""


class TestSurrogates:
    """Test UTF-16 surrogate helpers."""

    def test_classification(self):
        """Test surrogate ranges."""
        assert is_high_surrogate(0xD83D)
        assert not is_high_surrogate(0xDE00)
        assert is_low_surrogate(0xDE00)
        assert not is_low_surrogate(0x0041)

    def test_combine(self):
        """Test pair combination."""
        assert combine_surrogates(0xD83D, 0xDE00) == 0x1F600


class TestDecodeCodePoint:
    """Test XML text for decoded \\u escapes."""

    @pytest.mark.parametrize(
        ("code_point", "expected"),
        [
            (0x41, "A"),
            (0xE9, "é"),
            (0x1F600, "\U0001F600"),
            (0x3C, "&lt;"),
            (0x26, "&amp;"),
            (0x22, "&quot;"),
            (0x09, "&#x09;"),
            (0x0A, "&#x0A;"),
            (0x0D, "&#x0D;"),
            (0x00, ""),
            (0x1F, ""),
            (0xD800, REPLACEMENT_CHARACTER),
            (0xDFFF, REPLACEMENT_CHARACTER),
        ],
    )
    def test_decoding(self, code_point, expected):
        """Test code points are made safe for XML text."""
        assert decode_code_point(code_point) == expected
