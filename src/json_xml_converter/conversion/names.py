"""XML element names derived from JSON property names.

Only a conservative ASCII subset of the XML ``Name`` production is kept:

* the first character must be an ASCII letter, ``:`` or ``_``; otherwise the
  name is prefixed with ``_``;
* spaces become ``_``;
* ASCII letters, digits, ``:``, ``_``, ``-`` and ``.`` are copied;
* every other character is dropped.

A name that ends up as the lone ``_`` prefix is replaced by ``element``.
"""

import string
from typing import List, Optional

ELEMENT_NAME = "element"
ARRAY_NAME = "array"
FALLBACK_PREFIX = "_"

NAME_START_CHARACTERS = frozenset(string.ascii_letters + ":_")
NAME_CHARACTERS = frozenset(string.ascii_letters + string.digits + ":_-.")


class NameBuilder:
    """Builds an XML name one JSON character at a time.

    >>> builder = NameBuilder("1")
    >>> for char in "1st place":
    ...     builder.feed(char)
    >>> builder.build()
    '_1st_place'
    """

    def __init__(self, first_character: Optional[str]) -> None:
        """Start a name.

        Args:
            first_character: The first character of the JSON name, or ``None``
                when the name is empty or the input ended
        """
        self._parts: List[str] = []
        if first_character not in NAME_START_CHARACTERS:
            self._parts.append(FALLBACK_PREFIX)

    def feed(self, character: str) -> None:
        if character == " ":
            self._parts.append("_")
        elif character in NAME_CHARACTERS:
            self._parts.append(character)

    def build(self) -> str:
        name = "".join(self._parts)
        if name == FALLBACK_PREFIX:
            return ELEMENT_NAME
        return name

