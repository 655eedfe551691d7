"""JSON to XML Converter.

A single-pass converter that parses JSON in one left-to-right pass and
writes indented XML while parsing, reporting the first syntax error with its
line and column.

Progressive API Disclosure:
- Level 1: Simple functions - convert(), convert_string(), convert_file()
- Level 2: Configured converter - JSONToXMLConverter class
- Level 3: Low-level parser - JSONToXMLParser
"""

__version__ = "0.1.0"
__author__ = "JSON to XML Converter Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured converter
from .api import JSONToXMLConverter, convert, convert_file, convert_string

# Level 3: Low-level parser
from .conversion import JSONToXMLParser

# Configuration classes for advanced usage
from .shared.config import (
    ConverterConfig,
    EscapingConfig,
    FormattingConfig,
    OutputConfig,
    UnicodeEscapeMode,
)

# Core result and error objects for all API levels
from .shared.errors import ExitCode, JSONSyntaxError
from .shared.result import ConversionResult

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple conversion functions
    "convert",
    "convert_string",
    "convert_file",

    # Level 2: Configured converter class
    "JSONToXMLConverter",

    # Level 3: Low-level parser
    "JSONToXMLParser",

    # Result and error objects
    "ConversionResult",
    "ExitCode",
    "JSONSyntaxError",

    # Configuration classes for advanced usage
    "ConverterConfig",
    "EscapingConfig",
    "FormattingConfig",
    "OutputConfig",
    "UnicodeEscapeMode",
]
