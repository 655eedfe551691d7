"""Main CLI entry point for the json2xml command-line tool.

Converts one JSON file to XML, writing to stdout or to an output file. The
process exit code identifies the kind of syntax error found in the input.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

from json_xml_converter import __version__
from json_xml_converter.api import JSONToXMLConverter
from json_xml_converter.shared import (
    ConfigError,
    ConverterConfig,
    DiagnosticSeverity,
    ExitCode,
    UnicodeEscapeMode,
    configure_logging,
    get_logger,
)

PROG_NAME = "json2xml"


class ConverterArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.exit(
            int(ExitCode.USAGE_ERROR),
            f"{self.prog}: {message}\nTry '{self.prog} -h' for more information.\n"
        )


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self, converter_config: Optional[ConverterConfig] = None) -> None:
        self.converter_config = converter_config or ConverterConfig()

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load converter configuration from a JSON file.

        Raises:
            ConfigError: if the file cannot be read or is not a valid configuration
        """
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot read config file {config_path}: {e.strerror}") from e
        return cls(ConverterConfig.from_json(content))

    def apply_arguments(self, args: argparse.Namespace) -> None:
        """Override file settings with options given on the command line."""
        overrides: Dict[str, Any] = {}
        if args.indent is not None:
            overrides["formatting__indent_spaces"] = args.indent
            overrides["formatting__use_tabs"] = False
        if args.tabs:
            overrides["formatting__use_tabs"] = True
        if args.no_header:
            overrides["formatting__include_header"] = False
        if args.decode_unicode:
            overrides["escaping__unicode_escapes"] = UnicodeEscapeMode.DECODE
        if args.append:
            overrides["output__append"] = True
        if overrides:
            self.converter_config = self.converter_config.override(**overrides)


def indent_size(value: str) -> int:
    """argparse type for ``--indent``: a non-negative number of spaces."""
    try:
        size = int(value)
    except ValueError:
        size = -1
    if size < 0:
        raise argparse.ArgumentTypeError(f"invalid indentation size: '{value}'")
    return size


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = ConverterArgumentParser(
        prog=PROG_NAME,
        description="Convert a JSON document to XML",
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "json_file",
        type=Path,
        help="JSON input file"
    )
    parser.add_argument(
        "xml_file",
        nargs="?",
        type=Path,
        help="XML output file (default: stdout)"
    )
    parser.add_argument(
        "--append", "-a",
        action="store_true",
        help="Append to the output file instead of overwriting it"
    )
    parser.add_argument(
        "--indent", "-i",
        type=indent_size,
        metavar="N",
        help="Indent with N spaces per level (default: 4)"
    )
    parser.add_argument(
        "--tabs", "-t",
        action="store_true",
        help="Indent with one tab per level"
    )
    parser.add_argument(
        "--no-header", "-x",
        action="store_true",
        help="Omit the XML declaration"
    )
    parser.add_argument(
        "--decode-unicode", "-u",
        action="store_true",
        help="Decode \\uXXXX escapes instead of copying them"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def cmd_convert(args: argparse.Namespace) -> int:
    """Convert ``args.json_file`` and write the XML."""
    logger = get_logger(__name__, None, "cli")

    config = CLIConfig()
    try:
        if args.config:
            config = CLIConfig.from_file(args.config)
        config.apply_arguments(args)
    except ConfigError as e:
        print(f"{PROG_NAME}: {e}", file=sys.stderr)
        return int(ExitCode.USAGE_ERROR)

    converter = JSONToXMLConverter(config.converter_config)
    result = converter.convert(args.json_file)

    for diagnostic in result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING):
        logger.warning(diagnostic.message, extra={"source": result.source})

    if not result.success:
        print(f"{PROG_NAME}: {result.error_message}", file=sys.stderr)
        return result.exit_code

    if args.xml_file:
        try:
            result.write_to(
                args.xml_file,
                append=config.converter_config.output.append,
                encoding=config.converter_config.output.encoding,
            )
        except OSError as e:
            logger.error("Unable to write output file", extra={"error": str(e)})
            print(f"{PROG_NAME}: cannot open file {args.xml_file}", file=sys.stderr)
            return int(ExitCode.USAGE_ERROR)
    else:
        # The XML declaration promises an encoding; bypass the locale codec.
        output = (result.xml or "").encode(
            config.converter_config.output.encoding, errors="xmlcharrefreplace"
        )
        sys.stdout.flush()
        sys.stdout.buffer.write(output)
        sys.stdout.buffer.flush()

    logger.debug(
        "Conversion finished",
        extra={
            "elements_emitted": result.performance.elements_emitted,
            "processing_time_ms": result.performance.processing_time_ms,
        }
    )
    return int(ExitCode.SUCCESS)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exit_request:
        # -h, --version and usage errors
        return int(exit_request.code or 0)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return cmd_convert(args)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
