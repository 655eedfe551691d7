"""Command-line interface module for JSON to XML conversion.

This module provides the json2xml tool that converts a JSON file to XML on
stdout or into an output file.
"""

from .main import main

__all__ = ["main"]
