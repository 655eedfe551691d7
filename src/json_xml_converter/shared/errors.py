"""Error types and exit codes for JSON to XML conversion.

Every syntax problem found while scanning the JSON input is raised as a
``JSONSyntaxError`` subclass carrying the 1-based line and column of the
failure. The CLI maps each class to its documented process exit code.
"""

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit codes used by the command-line tool."""

    SUCCESS = 0
    USAGE_ERROR = 1
    MALFORMED_OBJECT = 20
    MALFORMED_ARRAY = 21
    MISSING_COLON = 22
    UNTERMINATED_STRING = 23
    INVALID_VALUE = 24
    UNEXPECTED_END_OF_INPUT = 25


class ConversionError(Exception):
    """Base exception for conversion failures."""

    exit_code: ExitCode = ExitCode.USAGE_ERROR


class InputError(ConversionError):
    """Raised when the JSON input cannot be read."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class JSONSyntaxError(ConversionError, ValueError):
    """A grammar violation in the JSON input.

    Attributes:
        line: 1-based line of the offending character
        column: 1-based column of the offending character
        expected: Human readable description of what was expected
    """

    exit_code = ExitCode.USAGE_ERROR
    default_expected = ""
    message_prefix = "error in input file"

    def __init__(
        self,
        line: int,
        column: int,
        expected: Optional[str] = None
    ) -> None:
        self.line = line
        self.column = column
        self.expected = expected if expected is not None else self.default_expected
        super().__init__(self.describe())

    @property
    def kind(self) -> str:
        """Name of the error kind, e.g. ``MalformedObject``."""
        return type(self).__name__[: -len("Error")]

    def reason(self) -> str:
        """Short description without position."""
        return f"{self.expected} expected!"

    def describe(self) -> str:
        """Full diagnostic line including the position."""
        return f"{self.message_prefix}: {self.reason()} (Line {self.line}:{self.column})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(line={self.line}, column={self.column})"


class MalformedObjectError(JSONSyntaxError):
    """A property is not followed by ``,`` or ``}``."""

    exit_code = ExitCode.MALFORMED_OBJECT
    default_expected = "',' or '}'"


class MalformedArrayError(JSONSyntaxError):
    """A value inside an array is not followed by ``,`` or ``]``."""

    exit_code = ExitCode.MALFORMED_ARRAY
    default_expected = "',' or ']'"


class MissingColonError(JSONSyntaxError):
    """A property name is not followed by ``:``."""

    exit_code = ExitCode.MISSING_COLON
    default_expected = "':'"


class UnterminatedStringError(JSONSyntaxError):
    """End of input reached inside a string body."""

    exit_code = ExitCode.UNTERMINATED_STRING
    default_expected = "'\"'"


class InvalidValueError(JSONSyntaxError):
    """A bare token is not a number, ``true``, ``false`` or ``null``.

    The reported column points at the first character of the token.
    """

    exit_code = ExitCode.INVALID_VALUE
    default_expected = "value"

    def __init__(
        self,
        line: int,
        column: int,
        token: str = "",
        expected: Optional[str] = None
    ) -> None:
        self.token = token
        super().__init__(line, column, expected)

    def reason(self) -> str:
        return "invalid value!"


class UnexpectedEndOfInputError(JSONSyntaxError):
    """Input exhausted while another token was still required."""

    exit_code = ExitCode.UNEXPECTED_END_OF_INPUT
    default_expected = "token"
    message_prefix = "error"

    def reason(self) -> str:
        return f"unexpected end of input file, {self.expected} expected!"
