"""Single-pass JSON parser that writes XML while it recognizes the input.

Four productions (value, object, array, property) walk the JSON text left to
right. Each recognized construct is appended to an ``XMLEmitter`` immediately;
no intermediate tree is built. Open objects and arrays are kept on an explicit
stack, so nesting depth is not limited by the Python call stack. The first
grammar violation raises a ``JSONSyntaxError`` positioned at the offending
character.

Mapping summary:

* root object: each property becomes a top-level element;
* root array: each item becomes a top-level ``<element>``;
* root string or scalar: a single ``<element>``;
* named object: ``<name>`` container holding the properties;
* named array: ``<name>`` container holding an ``<array>`` container whose
  items are all called ``element``;
* named string or scalar: ``<name>text</name>``.
"""

import re
import string
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple, Type

from json_xml_converter.scanning import Scanner
from json_xml_converter.shared.config import ConverterConfig, UnicodeEscapeMode
from json_xml_converter.shared.errors import (
    InvalidValueError,
    JSONSyntaxError,
    MalformedArrayError,
    MalformedObjectError,
    MissingColonError,
    UnexpectedEndOfInputError,
    UnterminatedStringError,
)
from json_xml_converter.shared.logging import get_logger

from .emitter import XMLEmitter
from .escaping import (
    UNICODE_ESCAPE,
    combine_surrogates,
    decode_code_point,
    escape_character,
    is_high_surrogate,
    is_low_surrogate,
    translate_escape,
)
from .names import ARRAY_NAME, ELEMENT_NAME, NameBuilder

SCALAR_CHARACTERS = frozenset("truefalsn0123456789E.+-")
LITERALS = frozenset(("true", "false", "null"))
NUMBER_PATTERN = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
HEX_DIGITS = frozenset(string.hexdigits)
UNICODE_ESCAPE_LENGTH = 6  # backslash, 'u', four hex digits


@dataclass
class ParseOutcome:
    """XML produced from one JSON document plus bookkeeping.

    Attributes:
        xml: The complete XML text
        characters_processed: Length of the JSON input
        elements_emitted: Number of XML elements written
        max_depth: Deepest nesting level reached
        processing_time_ms: Wall time spent parsing
        trailing_content: ``(line, column)`` of non-whitespace text found
            after the root value, if any
    """

    xml: str
    characters_processed: int
    elements_emitted: int
    max_depth: int
    processing_time_ms: float = 0.0
    trailing_content: Optional[Tuple[int, int]] = None


@dataclass
class OpenContainer:
    """An object or array whose closing bracket has not been read yet.

    Attributes:
        closing: ``}`` or ``]``
        error_class: Raised when a member is followed by anything else
        end_tags: Container tags to close, innermost first
        expecting_item: Whether the next token must be a member
    """

    closing: str
    error_class: Type[JSONSyntaxError]
    end_tags: Tuple[str, ...] = ()
    expecting_item: bool = True


class JSONToXMLParser:
    """Single-pass JSON parser fused with an XML emitter.

    Examples:
        >>> JSONToXMLParser().convert('{"x":1}')
        '<?xml version="1.0" encoding="UTF-8"?>\\n<x>1</x>\\n'

        >>> JSONToXMLParser(ConverterConfig.compact()).convert('[1, "a<b"]')
        '<element>1</element>\\n<element>a&lt;b</element>\\n'
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the parser.

        Args:
            config: Converter configuration (defaults to ``ConverterConfig()``)
            correlation_id: Optional correlation ID for tracking requests
        """
        self.config = config or ConverterConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "json_parser")
        self._decode_unicode = (
            self.config.escaping.unicode_escapes is UnicodeEscapeMode.DECODE
        )
        self._reset_state("")

    def _reset_state(self, text: str) -> None:
        """Reset scanner and output for a new document."""
        self.scanner = Scanner(text)
        self.emitter = XMLEmitter(self.config.formatting.indent_unit)
        self._open_containers: List[OpenContainer] = []

    def convert(self, text: str) -> str:
        """Convert JSON text to XML text.

        Raises:
            JSONSyntaxError: on the first grammar violation
        """
        return self.parse(text).xml

    def parse(self, text: str) -> ParseOutcome:
        """Convert JSON text and report statistics about the conversion.

        Raises:
            JSONSyntaxError: on the first grammar violation
        """
        start_time = time.time()
        self._reset_state(text)
        self.logger.debug(
            "Starting JSON to XML conversion",
            extra={"content_length": len(text)}
        )

        self.emitter.write_header(self.config.formatting.header)
        self._run()

        self.scanner.skip_whitespace()
        trailing_content = None
        if not self.scanner.at_end:
            trailing_content = (self.scanner.line, self.scanner.column)

        processing_time = (time.time() - start_time) * 1000
        outcome = ParseOutcome(
            xml=self.emitter.getvalue(),
            characters_processed=len(text),
            elements_emitted=self.emitter.element_count,
            max_depth=self.emitter.max_depth,
            processing_time_ms=processing_time,
            trailing_content=trailing_content,
        )
        self.logger.debug(
            "JSON to XML conversion completed",
            extra={
                "elements_emitted": outcome.elements_emitted,
                "max_depth": outcome.max_depth,
                "processing_time_ms": processing_time,
            }
        )
        return outcome

    # Grammar productions

    def _run(self) -> None:
        """Parse the root value and every container it opens."""
        self.process_value(None)
        stack = self._open_containers
        while stack:
            container = stack[-1]
            if container.expecting_item:
                container.expecting_item = False
                if container.closing == "}":
                    self.process_property()
                else:
                    self.process_value(ELEMENT_NAME)
            else:
                self._after_item(container)

    def process_value(self, name: Optional[str]) -> None:
        """Parse any JSON value.

        Strings and scalars are emitted at once. Objects and arrays are
        opened here and their members are read by ``_run``.

        Args:
            name: Element name for the value, ``None`` for the root value
        """
        scanner = self.scanner
        scanner.skip_whitespace()
        char = scanner.peek()

        if char is None:
            raise scanner.error(UnexpectedEndOfInputError, expected="value")
        if char == "{":
            self.process_object(name)
        elif char == "[":
            self.process_array(name)
        elif char == '"':
            self.emitter.leaf(name or ELEMENT_NAME, self.process_string())
        else:
            self.emitter.leaf(name or ELEMENT_NAME, self.process_other())

    def process_object(self, name: Optional[str]) -> None:
        """Open ``{ property (, property)* }`` or parse ``{}``."""
        end_tags: Tuple[str, ...] = ()
        if name is not None:
            self.emitter.start_container(name)
            end_tags = (name,)
        self._open(OpenContainer("}", MalformedObjectError, end_tags))

    def process_array(self, name: Optional[str]) -> None:
        """Open ``[ value (, value)* ]`` or parse ``[]``."""
        end_tags: Tuple[str, ...] = ()
        if name is not None:
            self.emitter.start_container(name)
            self.emitter.start_container(ARRAY_NAME)
            end_tags = (ARRAY_NAME, name)
        self._open(OpenContainer("]", MalformedArrayError, end_tags))

    def _open(self, container: OpenContainer) -> None:
        scanner = self.scanner
        scanner.advance()  # past '{' or '['
        self._open_containers.append(container)
        scanner.skip_whitespace()
        if scanner.peek() == container.closing:
            scanner.advance()
            self._close()

    def _close(self) -> None:
        container = self._open_containers.pop()
        for tag in container.end_tags:
            self.emitter.end_container(tag)

    def _after_item(self, container: OpenContainer) -> None:
        """Read the ``,`` or closing bracket that follows a member."""
        scanner = self.scanner
        scanner.skip_whitespace()
        char = scanner.peek()
        if char == container.closing:
            scanner.advance()
            self._close()
        elif char == ",":
            scanner.advance()
            container.expecting_item = True
        elif char is None:
            raise scanner.error(
                UnexpectedEndOfInputError,
                expected=container.error_class.default_expected,
            )
        else:
            raise scanner.error(container.error_class)

    def process_property(self) -> None:
        """Parse ``"name" : value`` and emit the value under the sanitized name."""
        scanner = self.scanner
        scanner.skip_whitespace()
        char = scanner.peek()
        if char is None:
            raise scanner.error(UnexpectedEndOfInputError, expected="'\"'")
        if char != '"':
            raise scanner.error(MalformedObjectError, expected="'\"'")
        scanner.advance()

        builder = NameBuilder(scanner.peek())
        while True:
            char = scanner.peek()
            if char == '"':
                scanner.advance()
                break
            if char == "\\":
                # Only the backslash is dropped; an escaped '"' does not
                # end the name.
                scanner.advance()
                char = scanner.peek()
            if char is not None:
                builder.feed(char)
            scanner.advance(on_eof=UnterminatedStringError)
        name = builder.build()

        scanner.skip_whitespace()
        char = scanner.peek()
        if char is None:
            raise scanner.error(UnexpectedEndOfInputError, expected="':'")
        if char != ":":
            raise scanner.error(MissingColonError)
        scanner.advance()
        self.process_value(name)

    def process_string(self) -> str:
        """Parse a JSON string and return its XML-escaped content."""
        scanner = self.scanner
        scanner.advance()  # past the opening quote
        parts: List[str] = []
        while True:
            char = scanner.peek()
            if char == '"':
                scanner.advance()
                return "".join(parts)
            if char == "\\":
                letter = scanner.peek_next()
                if letter == UNICODE_ESCAPE:
                    if self._decode_unicode:
                        parts.append(self._decode_unicode_escape())
                        continue
                    # Keep the backslash; 'u' and the digits follow as text
                    parts.append("\\")
                else:
                    scanner.advance()
                    parts.append(translate_escape(letter))
            elif char is not None:
                parts.append(escape_character(char))
            scanner.advance(on_eof=UnterminatedStringError)

    def process_other(self) -> str:
        """Parse a number, ``true``, ``false`` or ``null``."""
        scanner = self.scanner
        chars: List[str] = []
        while scanner.peek() in SCALAR_CHARACTERS:
            chars.append(scanner.peek())
            scanner.advance()
        token = "".join(chars)

        if token in LITERALS or NUMBER_PATTERN.fullmatch(token):
            return token
        raise InvalidValueError(
            scanner.line, scanner.column - len(token), token=token
        )

    # Helpers

    def _read_hex_digits(self, start_line: int, start_column: int) -> int:
        """Read the four hex digits of a ``\\u`` escape at the cursor."""
        scanner = self.scanner
        digits: List[str] = []
        for _ in range(UNICODE_ESCAPE_LENGTH - 2):
            char = scanner.peek()
            if char is None:
                scanner.advance(on_eof=UnterminatedStringError)
            if char not in HEX_DIGITS:
                raise InvalidValueError(
                    start_line, start_column, token="\\u" + "".join(digits) + char
                )
            digits.append(char)
            scanner.advance(on_eof=UnterminatedStringError)
        return int("".join(digits), 16)

    def _decode_unicode_escape(self) -> str:
        """Decode ``\\uXXXX`` (and a following low surrogate) at the cursor."""
        scanner = self.scanner
        start_line, start_column = scanner.line, scanner.column
        scanner.advance()  # past the backslash
        scanner.advance(on_eof=UnterminatedStringError)  # past 'u'
        code_point = self._read_hex_digits(start_line, start_column)

        if is_high_surrogate(code_point):
            index = scanner.cursor.index
            follow = scanner.text[index:index + UNICODE_ESCAPE_LENGTH]
            if (
                len(follow) == UNICODE_ESCAPE_LENGTH
                and follow.startswith("\\" + UNICODE_ESCAPE)
                and all(c in HEX_DIGITS for c in follow[2:])
                and is_low_surrogate(int(follow[2:], 16))
            ):
                for _ in range(UNICODE_ESCAPE_LENGTH):
                    scanner.advance()
                code_point = combine_surrogates(code_point, int(follow[2:], 16))

        return decode_code_point(code_point)
