"""Conversion API with progressive disclosure for JSON to XML.

Module-level functions cover one-off conversions; ``JSONToXMLConverter``
keeps a configuration and usage statistics across many conversions. None of
them raise on malformed JSON: the syntax error is stored in the returned
``ConversionResult`` together with diagnostics and timing information.
"""

import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, TextIO, Union

from json_xml_converter.conversion import JSONToXMLParser
from json_xml_converter.scanning import decode_input
from json_xml_converter.shared import (
    ConversionResult,
    ConverterConfig,
    DiagnosticSeverity,
    InputError,
    JSONSyntaxError,
    PerformanceMetrics,
    get_logger,
)

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def convert(
    input_data: InputType,
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert JSON from various input sources to XML.

    Text is converted directly, bytes are decoded first, ``Path`` objects are
    read from disk and file-like objects are read to the end.

    Args:
        input_data: JSON content as string, bytes, file-like object, or Path
        config: Converter configuration (defaults to ``ConverterConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ConversionResult holding the XML or the error that stopped conversion

    Examples:
        >>> convert('{"x": 1}').xml
        '<?xml version="1.0" encoding="UTF-8"?>\\n<x>1</x>\\n'

        >>> result = convert('{"x" 1}')
        >>> result.success, result.exit_code
        (False, 22)
    """
    logger = get_logger(__name__, correlation_id, "convert")
    logger.debug(
        "Starting universal convert operation",
        extra={"input_type": type(input_data).__name__}
    )

    if isinstance(input_data, Path):
        return convert_file(input_data, config, correlation_id)
    if isinstance(input_data, (str, bytes)):
        return _convert_content(input_data, config, correlation_id)
    if hasattr(input_data, "read"):
        return _convert_file_like_object(input_data, config, correlation_id)

    raise TypeError(
        f"Unsupported input type for conversion: {type(input_data).__name__}"
    )


def convert_string(
    json_string: str,
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert JSON text to XML.

    Examples:
        >>> result = convert_string('[true, null]', ConverterConfig.compact())
        >>> print(result.xml, end="")
        <element>true</element>
        <element>null</element>
    """
    logger = get_logger(__name__, correlation_id, "convert_string")
    logger.debug(
        "Starting string convert operation",
        extra={
            "content_length": len(json_string),
            "preview": (
                json_string[:PREVIEW_LENGTH] + "..."
                if len(json_string) > PREVIEW_LENGTH else json_string
            )
        }
    )
    return _convert_text(json_string, config, correlation_id)


def convert_file(
    file_path: Union[str, Path],
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert a JSON file to XML.

    The file is read in binary mode and decoded with ``decode_input``. A file
    that does not exist or cannot be read yields an unsuccessful result with
    an ``InputError`` and exit code 1.

    Args:
        file_path: Path to the JSON file (string or Path object)
        config: Converter configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ConversionResult with ``source`` set to the file path
    """
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "convert_file")
    path_obj = Path(file_path) if isinstance(file_path, str) else file_path

    logger.info("Starting file convert operation", extra={"file_path": str(path_obj)})

    error = None
    if not path_obj.exists():
        error = InputError(f"file {path_obj} not found", str(path_obj))
    elif not path_obj.is_file():
        error = InputError(f"{path_obj} is not a file", str(path_obj))

    raw_data = b""
    if error is None:
        try:
            with path_obj.open("rb") as file:
                raw_data = file.read()
        except OSError as e:
            logger.error(
                "Unable to read input file",
                extra={"file_path": str(path_obj), "error": str(e)}
            )
            error = InputError(f"cannot read file {path_obj}: {e.strerror}", str(path_obj))

    if error is not None:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        result = _create_error_result(error, config, correlation_id, processing_time)
        result.source = str(path_obj)
        return result

    result = _convert_content(raw_data, config, correlation_id)
    result.source = str(path_obj)
    return result


def _convert_content(
    content: Union[str, bytes],
    config: Optional[ConverterConfig],
    correlation_id: Optional[str]
) -> ConversionResult:
    """Convert direct content, decoding bytes first."""
    if isinstance(content, str):
        return _convert_text(content, config, correlation_id)

    decoded = decode_input(content)
    logger = get_logger(__name__, correlation_id, "convert_direct")
    logger.debug(
        "Input decoded",
        extra={
            "encoding": decoded.encoding,
            "method": decoded.method.value,
            "issues": len(decoded.issues),
        }
    )
    return _convert_text(decoded.text, config, correlation_id, decoded.issues)


def _convert_file_like_object(
    file_obj: Union[BinaryIO, TextIO],
    config: Optional[ConverterConfig],
    correlation_id: Optional[str]
) -> ConversionResult:
    """Convert the remaining content of a file-like object."""
    content = file_obj.read()
    logger = get_logger(__name__, correlation_id, "convert_filelike")
    logger.debug(
        "File-like object read",
        extra={
            "content_length": len(content) if content else 0,
            "content_type": type(content).__name__
        }
    )
    return _convert_content(content, config, correlation_id)


def _convert_text(
    text: str,
    config: Optional[ConverterConfig],
    correlation_id: Optional[str],
    decode_issues: Optional[List[str]] = None
) -> ConversionResult:
    """Run the parser on decoded text and package the outcome.

    Args:
        text: JSON text
        config: Converter configuration
        correlation_id: Optional correlation ID for request tracking
        decode_issues: Problems reported while decoding the raw input

    Returns:
        ConversionResult with diagnostics and performance metrics
    """
    start_time = time.time()
    config = config or ConverterConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "convert_direct")
    result = ConversionResult(correlation_id=correlation_id)

    for issue in decode_issues or []:
        result.add_diagnostic(DiagnosticSeverity.WARNING, issue, "input_decoder")

    parser = JSONToXMLParser(config, correlation_id=correlation_id)
    try:
        outcome = parser.parse(text)
    except JSONSyntaxError as e:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        logger.info(
            "JSON syntax error",
            extra={
                "kind": e.kind,
                "line": e.line,
                "column": e.column,
                "processing_time_ms": processing_time,
            }
        )
        result.success = False
        result.error = e
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            e.describe(),
            "json_parser",
            position={"line": e.line, "column": e.column},
            details={"kind": e.kind, "exit_code": int(e.exit_code)},
        )
        result.performance = PerformanceMetrics(
            processing_time_ms=processing_time,
            characters_processed=len(text),
        )
        return result

    if outcome.trailing_content is not None and config.warn_on_trailing_content:
        line, column = outcome.trailing_content
        result.add_diagnostic(
            DiagnosticSeverity.WARNING,
            f"Content after the root value was ignored (Line {line}:{column})",
            "json_parser",
            position={"line": line, "column": column},
        )

    processing_time = (time.time() - start_time) * MS_PER_SECOND
    result.xml = outcome.xml
    result.performance = PerformanceMetrics(
        processing_time_ms=processing_time,
        characters_processed=outcome.characters_processed,
        elements_emitted=outcome.elements_emitted,
        max_depth=outcome.max_depth,
        output_characters=len(outcome.xml),
    )

    logger.info(
        "Conversion completed",
        extra={
            "elements_emitted": outcome.elements_emitted,
            "max_depth": outcome.max_depth,
            "processing_time_ms": processing_time,
        }
    )
    return result


def _create_error_result(
    error: InputError,
    config: Optional[ConverterConfig],
    correlation_id: Optional[str],
    processing_time: float
) -> ConversionResult:
    """Build an unsuccessful result for input that could not be read."""
    if correlation_id is None and config is not None:
        correlation_id = config.correlation_id
    result = ConversionResult(success=False, error=error, correlation_id=correlation_id)
    result.performance.processing_time_ms = processing_time
    result.add_diagnostic(
        DiagnosticSeverity.CRITICAL,
        error.message,
        "api_converter",
        details={"path": error.path},
    )
    return result


class JSONToXMLConverter:
    """Reusable converter with a fixed configuration and usage statistics.

    Attributes:
        config: Current converter configuration
        correlation_id: Correlation ID for request tracking

    Examples:
        >>> converter = JSONToXMLConverter(ConverterConfig.compact())
        >>> converter.convert('{"a": {"b": "c"}}').xml
        '<a>\\n<b>c</b>\\n</a>\\n'
        >>> converter.statistics["total_conversions"]
        1
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the converter.

        Args:
            config: Converter configuration (defaults to ``ConverterConfig()``)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ConverterConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "json_xml_converter")

        self._conversion_count = 0
        self._successful_conversions = 0
        self._total_processing_time = 0.0
        self._characters_processed = 0

        self.logger.debug(
            "JSONToXMLConverter initialized",
            extra={"config": self.config.to_dict()}
        )

    def convert(
        self,
        input_data: InputType,
        config_override: Optional[ConverterConfig] = None,
        correlation_id_override: Optional[str] = None
    ) -> ConversionResult:
        """Convert JSON input using the converter configuration.

        Args:
            input_data: JSON content as string, bytes, file-like object, or Path
            config_override: Configuration used for this conversion only
            correlation_id_override: Correlation ID used for this conversion only
        """
        effective_config = config_override or self.config
        effective_correlation_id = correlation_id_override or self.correlation_id

        result = convert(input_data, effective_config, effective_correlation_id)

        self._conversion_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        self._characters_processed += result.performance.characters_processed
        if result.success:
            self._successful_conversions += 1

        self.logger.debug(
            "Configured conversion finished",
            extra={
                "success": result.success,
                "total_conversions": self._conversion_count,
            }
        )
        return result

    def convert_to_file(
        self,
        input_data: InputType,
        output_path: Union[str, Path],
        append: Optional[bool] = None
    ) -> ConversionResult:
        """Convert JSON input and write the XML to ``output_path``.

        The output file is only opened when the conversion succeeded.

        Args:
            input_data: JSON content as string, bytes, file-like object, or Path
            output_path: Destination XML file
            append: Append instead of overwrite (defaults to ``config.output.append``)

        Raises:
            OSError: if the output file cannot be written
        """
        result = self.convert(input_data)
        if not result.success:
            return result

        if append is None:
            append = self.config.output.append
        result.write_to(output_path, append=append, encoding=self.config.output.encoding)
        self.logger.info(
            "XML written",
            extra={"output_path": str(output_path), "append": append}
        )
        return result

    def reconfigure(self, config: ConverterConfig) -> None:
        """Replace the converter configuration."""
        self.config = config
        self.logger.info("Converter reconfigured", extra={"config": config.to_dict()})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get converter usage statistics."""
        return {
            "total_conversions": self._conversion_count,
            "successful_conversions": self._successful_conversions,
            "success_rate": (
                self._successful_conversions / self._conversion_count
                if self._conversion_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._conversion_count
                if self._conversion_count > 0 else 0.0
            ),
            "characters_processed": self._characters_processed,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset converter usage statistics."""
        self._conversion_count = 0
        self._successful_conversions = 0
        self._total_processing_time = 0.0
        self._characters_processed = 0

        self.logger.info("Converter statistics reset")
