"""Indentation-aware XML output buffer.

The emitter only ever appends. Container tags open and close a nesting level;
leaf tags hold text on a single line. Every tag line ends with a newline.
"""

from typing import List


class XMLEmitter:
    """Append-only XML writer driven by the grammar productions."""

    def __init__(self, indent_unit: str = "    ") -> None:
        """Initialize an empty document.

        Args:
            indent_unit: Text repeated once per nesting level
        """
        self._indent_unit = indent_unit
        self._fragments: List[str] = []
        self._indentation = ""
        self.level = 0
        self.max_depth = 0
        self.element_count = 0

    def _set_level(self, level: int) -> None:
        self.level = level
        self._indentation = self._indent_unit * level
        if level > self.max_depth:
            self.max_depth = level

    def write_header(self, header: str) -> None:
        """Write the XML declaration, if any, before the first element."""
        if self._fragments:
            raise RuntimeError("Header must be written before any element")
        if header:
            self._fragments.append(header)

    def start_container(self, name: str) -> None:
        """Open an element that holds child elements."""
        self._fragments.append(f"{self._indentation}<{name}>\n")
        self.element_count += 1
        self._set_level(self.level + 1)

    def end_container(self, name: str) -> None:
        """Close the innermost container, indented at the enclosing level."""
        if self.level == 0:
            raise RuntimeError(f"No open container to close with </{name}>")
        self._set_level(self.level - 1)
        self._fragments.append(f"{self._indentation}</{name}>\n")

    def leaf(self, name: str, text: str) -> None:
        """Write an element holding only text."""
        self._fragments.append(f"{self._indentation}<{name}>{text}</{name}>\n")
        self.element_count += 1

    def getvalue(self) -> str:
        """Return the document built so far."""
        return "".join(self._fragments)
