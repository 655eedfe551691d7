"""Translation of JSON string content into XML character data."""

from typing import Dict, Optional

UNICODE_ESCAPE = "u"
REPLACEMENT_CHARACTER = "\ufffd"

SURROGATE_RANGE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
SURROGATE_RANGE_END = 0xDFFF
CONTROL_CHARACTER_LIMIT = 0x20

# Characters that must not appear literally in XML text
RESERVED_CHARACTER_REFERENCES: Dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&apos;",
}

WHITESPACE_CHARACTER_REFERENCES: Dict[str, str] = {
    "\t": "&#x09;",
    "\n": "&#x0A;",
    "\r": "&#x0D;",
}

# JSON escape letter -> XML text. \b, \f and unknown escapes have no entry
# and produce nothing.
ESCAPE_SEQUENCE_TRANSLATIONS: Dict[str, str] = {
    "t": "&#x09;",
    "n": "&#x0A;",
    "r": "&#x0D;",
    '"': "&quot;",
    "\\": "\\",
    "/": "/",
}


def escape_character(character: str) -> str:
    """Escape one unescaped JSON string character for XML text.

    >>> escape_character("<")
    '&lt;'
    >>> escape_character("a")
    'a'
    """
    return RESERVED_CHARACTER_REFERENCES.get(character, character)


def translate_escape(letter: Optional[str]) -> str:
    """Translate the character following a backslash.

    >>> translate_escape("n")
    '&#x0A;'
    >>> translate_escape("b")
    ''
    """
    return ESCAPE_SEQUENCE_TRANSLATIONS.get(letter, "")


def is_high_surrogate(code_point: int) -> bool:
    return SURROGATE_RANGE_START <= code_point <= HIGH_SURROGATE_END


def is_low_surrogate(code_point: int) -> bool:
    return LOW_SURROGATE_START <= code_point <= SURROGATE_RANGE_END


def combine_surrogates(high: int, low: int) -> int:
    """Combine a UTF-16 surrogate pair into one code point."""
    return 0x10000 + ((high - SURROGATE_RANGE_START) << 10) + (low - LOW_SURROGATE_START)


def decode_code_point(code_point: int) -> str:
    """XML text for a code point named by a decoded ``\\uXXXX`` escape.

    Unpaired surrogates become U+FFFD. Tab, newline and carriage return become
    character references; other C0 control characters cannot be represented
    in XML 1.0 and are dropped.
    """
    if SURROGATE_RANGE_START <= code_point <= SURROGATE_RANGE_END:
        return REPLACEMENT_CHARACTER
    character = chr(code_point)
    if character in WHITESPACE_CHARACTER_REFERENCES:
        return WHITESPACE_CHARACTER_REFERENCES[character]
    if code_point < CONTROL_CHARACTER_LIMIT:
        return ""
    if character == '"':
        return "&quot;"
    return escape_character(character)
