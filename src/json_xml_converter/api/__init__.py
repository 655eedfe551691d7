"""Public conversion API.

Module-level functions for one-off conversions and a reusable converter class
with configuration and usage statistics.
"""

from .converter import (
    JSONToXMLConverter,
    convert,
    convert_file,
    convert_string,
)

__all__ = [
    "JSONToXMLConverter",
    "convert",
    "convert_file",
    "convert_string",
]
