"""Tests for the indentation-aware XML emitter."""

import pytest

from json_xml_converter.conversion.emitter import XMLEmitter


class TestXMLEmitter:
    """Test XML emission."""

    def test_empty_document(self):
        """Test nothing is written by default."""
        assert XMLEmitter().getvalue() == ""

    def test_leaf(self):
        """Test a leaf element on one line."""
        emitter = XMLEmitter()
        emitter.leaf("a", "1")

        assert emitter.getvalue() == "<a>1</a>\n"
        assert emitter.element_count == 1

    def test_nested_containers(self):
        """Test indentation follows the nesting level."""
        emitter = XMLEmitter("  ")
        emitter.start_container("outer")
        emitter.start_container("inner")
        emitter.leaf("x", "y")
        emitter.end_container("inner")
        emitter.end_container("outer")

        assert emitter.getvalue() == (
            "<outer>\n"
            "  <inner>\n"
            "    <x>y</x>\n"
            "  </inner>\n"
            "</outer>\n"
        )
        assert emitter.level == 0
        assert emitter.max_depth == 2
        assert emitter.element_count == 3

    def test_tab_indentation(self):
        """Test a tab indent unit."""
        emitter = XMLEmitter("\t")
        emitter.start_container("a")
        emitter.leaf("b", "")
        emitter.end_container("a")

        assert emitter.getvalue() == "<a>\n\t<b></b>\n</a>\n"

    def test_header(self):
        """Test the header precedes elements."""
        emitter = XMLEmitter()
        emitter.write_header('<?xml version="1.0" encoding="UTF-8"?>\n')
        emitter.leaf("a", "1")

        assert emitter.getvalue() == '<?xml version="1.0" encoding="UTF-8"?>\n<a>1</a>\n'

    def test_empty_header(self):
        """Test an empty header writes nothing."""
        emitter = XMLEmitter()
        emitter.write_header("")
        assert emitter.getvalue() == ""

    def test_header_after_element_rejected(self):
        """Test the header must come first."""
        emitter = XMLEmitter()
        emitter.leaf("a", "1")

        with pytest.raises(RuntimeError):
            emitter.write_header("<?xml?>\n")

    def test_unbalanced_end_rejected(self):
        """Test closing without an open container."""
        with pytest.raises(RuntimeError, match="</a>"):
            XMLEmitter().end_container("a")
