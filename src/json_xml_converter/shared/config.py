"""Configuration classes for JSON to XML conversion.

This module provides configuration objects for output formatting, string
escaping and output destination handling, aggregated by the immutable
``ConverterConfig``.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
DEFAULT_INDENT_SPACES = 4

_COMPONENTS = ("formatting", "escaping", "output")


class UnicodeEscapeMode(Enum):
    """How ``\\uXXXX`` escapes in JSON strings are written to XML."""

    PRESERVE = "preserve"   # Copy backslash, 'u' and digits verbatim
    DECODE = "decode"       # Decode to the character it names


@dataclass
class FormattingConfig:
    """Configuration for XML layout."""

    indent_spaces: int = DEFAULT_INDENT_SPACES
    use_tabs: bool = False
    include_header: bool = True

    def __post_init__(self) -> None:
        """Validate formatting configuration."""
        if isinstance(self.indent_spaces, bool) or not isinstance(self.indent_spaces, int):
            raise ValueError("indent_spaces must be an integer")
        if self.indent_spaces < 0:
            raise ValueError("indent_spaces must be >= 0")

    @property
    def indent_unit(self) -> str:
        """Text written once per nesting level."""
        if self.use_tabs:
            return "\t"
        return " " * self.indent_spaces

    @property
    def header(self) -> str:
        """XML declaration line, or an empty string when disabled."""
        return XML_DECLARATION + "\n" if self.include_header else ""


@dataclass
class EscapingConfig:
    """Configuration for JSON string escape handling."""

    unicode_escapes: UnicodeEscapeMode = UnicodeEscapeMode.PRESERVE

    def __post_init__(self) -> None:
        """Validate escaping configuration."""
        if isinstance(self.unicode_escapes, str):
            self.unicode_escapes = UnicodeEscapeMode(self.unicode_escapes)
        if not isinstance(self.unicode_escapes, UnicodeEscapeMode):
            raise ValueError("unicode_escapes must be a UnicodeEscapeMode")


@dataclass
class OutputConfig:
    """Configuration for writing the finished document."""

    append: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if not self.encoding:
            raise ValueError("encoding must not be empty")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.field_name = field_name


@dataclass(frozen=True)
class ConverterConfig:
    """Complete configuration for a JSON to XML conversion.

    Immutable; use ``override`` to derive a modified copy.
    """

    formatting: FormattingConfig = field(default_factory=FormattingConfig)
    escaping: EscapingConfig = field(default_factory=EscapingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    correlation_id: Optional[str] = None
    warn_on_trailing_content: bool = True

    def __post_init__(self) -> None:
        """Validate the complete converter configuration."""
        try:
            self.formatting.__post_init__()
            self.escaping.__post_init__()
            self.output.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ConverterConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ConverterConfig()
            >>> config.override(formatting__indent_spaces=2, output__append=True)
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component, overrides in nested_overrides.items():
                new_fields[component] = replace(getattr(self, component), **overrides)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e
        new_fields.update(top_level)
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.value
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        go unnoticed.
        """
        component_classes = {
            "formatting": FormattingConfig,
            "escaping": EscapingConfig,
            "output": OutputConfig,
        }
        values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key in component_classes:
                    if not isinstance(value, dict):
                        raise ConfigValidationError(
                            f"{key} must be an object", field_name=key
                        )
                    values[key] = component_classes[key](**value)
                elif key in cls.__dataclass_fields__:
                    values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {key}", field_name=key
                    )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ConverterConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ConverterConfig":
        """Four-space indentation with the XML declaration."""
        return cls()

    @classmethod
    def compact(cls) -> "ConverterConfig":
        """No indentation and no XML declaration."""
        return cls(formatting=FormattingConfig(indent_spaces=0, include_header=False))

    @classmethod
    def tabbed(cls) -> "ConverterConfig":
        """One tab per nesting level."""
        return cls(formatting=FormattingConfig(use_tabs=True))
