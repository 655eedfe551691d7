"""Character scanner with line and column tracking.

The scanner owns the immutable input text and a cursor. The cursor is only
ever moved by ``advance``; the line and column counters exist for error
reporting and are never consulted by the grammar productions.
"""

from dataclasses import dataclass
from typing import Optional, Type

from json_xml_converter.shared.errors import (
    JSONSyntaxError,
    UnexpectedEndOfInputError,
)

WHITESPACE = frozenset(" \t\n\r")


@dataclass
class Cursor:
    """Read position inside the input.

    ``line`` and ``column`` describe the character at ``index``.
    """

    index: int = 0
    line: int = 1
    column: int = 1

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.index < 0:
            raise ValueError("Index must be >= 0")
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")


class Scanner:
    """Single-character scanner over a fully loaded input buffer."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._length = len(text)
        self.cursor = Cursor()

    @property
    def text(self) -> str:
        return self._text

    @property
    def at_end(self) -> bool:
        """True once the cursor has moved past the last character."""
        return self.cursor.index >= self._length

    @property
    def line(self) -> int:
        return self.cursor.line

    @property
    def column(self) -> int:
        return self.cursor.column

    def peek(self) -> Optional[str]:
        """Return the character at the cursor, or ``None`` at end of input."""
        if self.cursor.index >= self._length:
            return None
        return self._text[self.cursor.index]

    def peek_next(self) -> Optional[str]:
        """Return the character after the cursor, or ``None``."""
        index = self.cursor.index + 1
        if index >= self._length:
            return None
        return self._text[index]

    def advance(
        self,
        on_eof: Type[JSONSyntaxError] = UnexpectedEndOfInputError
    ) -> None:
        """Move the cursor one character forward.

        Args:
            on_eof: Error raised when the cursor is already at the end

        Raises:
            JSONSyntaxError: an ``on_eof`` instance positioned at the cursor
        """
        cursor = self.cursor
        if cursor.index >= self._length:
            raise self.error(on_eof)
        if self._text[cursor.index] == "\n":
            cursor.line += 1
            cursor.column = 1
        else:
            cursor.column += 1
        cursor.index += 1

    def skip_whitespace(self) -> None:
        """Advance over spaces, tabs, newlines and carriage returns."""
        while self.peek() in WHITESPACE:
            self.advance()

    def error(
        self,
        error_class: Type[JSONSyntaxError],
        expected: Optional[str] = None
    ) -> JSONSyntaxError:
        """Build an error positioned at the cursor."""
        return error_class(self.cursor.line, self.cursor.column, expected=expected)
