"""Conversion engine for JSON to XML.

Key Components:
    JSONToXMLParser: Single-pass parser that writes XML as it parses
    XMLEmitter: Append-only, indentation-aware XML output buffer
    NameBuilder: XML element names from JSON property names
    escape_character / translate_escape: JSON string content to XML text
"""

from .emitter import XMLEmitter
from .escaping import (
    decode_code_point,
    escape_character,
    translate_escape,
)
from .names import ARRAY_NAME, ELEMENT_NAME, NameBuilder
from .parser import JSONToXMLParser, ParseOutcome

__all__ = [
    "XMLEmitter",
    "decode_code_point",
    "escape_character",
    "translate_escape",
    "ARRAY_NAME",
    "ELEMENT_NAME",
    "NameBuilder",
    "JSONToXMLParser",
    "ParseOutcome",
]
