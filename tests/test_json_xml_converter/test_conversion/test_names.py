"""Tests for XML element name sanitizing."""

import pytest

from json_xml_converter.conversion.names import (
    ELEMENT_NAME,
    NameBuilder,
)


def build_name(raw_name):
    """Feed a whole JSON name through a NameBuilder."""
    builder = NameBuilder(raw_name[0] if raw_name else None)
    for char in raw_name:
        builder.feed(char)
    return builder.build()


class TestNameRules:
    """Test conversion of JSON property names."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("name", "name"),
            ("first name", "first_name"),
            ("ns:tag", "ns:tag"),
            ("_private", "_private"),
            ("a-b.c", "a-b.c"),
            ("2nd", "_2nd"),
            ("-dash", "_-dash"),
            (" lead", "__lead"),
            ("pr!ce$", "prce"),
            ("$price", "_price"),
            ("Zoë", "Zo"),
        ],
    )
    def test_names(self, raw, expected):
        """Test valid characters are kept and invalid ones dropped."""
        assert build_name(raw) == expected

    @pytest.mark.parametrize("raw", ["", "$$$", "!", "ü"])
    def test_no_valid_characters(self, raw):
        """Test names without usable characters become element."""
        assert build_name(raw) == ELEMENT_NAME

    def test_single_prefix_for_leading_digit(self):
        """Test a leading digit gets exactly one underscore."""
        assert build_name("123") == "_123"

    def test_lone_underscore_becomes_element(self):
        """Test a name that is only an underscore is replaced."""
        assert build_name("_") == ELEMENT_NAME
        assert build_name("__") == "__"


class TestNameBuilder:
    """Test incremental name building."""

    def test_feed_and_build(self):
        """Test building a name one character at a time."""
        builder = NameBuilder("k")
        for char in "key 1":
            builder.feed(char)
        assert builder.build() == "key_1"

    def test_missing_first_character(self):
        """Test building from an empty name."""
        assert NameBuilder(None).build() == ELEMENT_NAME
