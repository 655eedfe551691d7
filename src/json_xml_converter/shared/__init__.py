"""Shared utilities for JSON to XML conversion.

This module provides shared configuration objects, result types, error types
and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
    EscapingConfig,
    FormattingConfig,
    OutputConfig,
    UnicodeEscapeMode,
)
from .errors import (
    ConversionError,
    ExitCode,
    InputError,
    InvalidValueError,
    JSONSyntaxError,
    MalformedArrayError,
    MalformedObjectError,
    MissingColonError,
    UnexpectedEndOfInputError,
    UnterminatedStringError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    ConversionResult,
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ConverterConfig",
    "EscapingConfig",
    "FormattingConfig",
    "OutputConfig",
    "UnicodeEscapeMode",
    "ConversionError",
    "ExitCode",
    "InputError",
    "InvalidValueError",
    "JSONSyntaxError",
    "MalformedArrayError",
    "MalformedObjectError",
    "MissingColonError",
    "UnexpectedEndOfInputError",
    "UnterminatedStringError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "ConversionResult",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
