"""Character layer for JSON to XML conversion.

This module provides input decoding and the position-tracking scanner the
grammar productions read from.
"""

from .encoding import BOMDetector, DecodedInput, DetectionMethod, decode_input
from .scanner import WHITESPACE, Cursor, Scanner

__all__ = [
    "BOMDetector",
    "DecodedInput",
    "DetectionMethod",
    "decode_input",
    "WHITESPACE",
    "Cursor",
    "Scanner",
]
