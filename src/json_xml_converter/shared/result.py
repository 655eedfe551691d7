"""Result objects and diagnostic types for JSON to XML conversion.

A ``ConversionResult`` holds either the finished XML document or the syntax
error that stopped the conversion, together with diagnostics and timing
information.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConversionError, ExitCode


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class PerformanceMetrics:
    """Performance metrics for a conversion."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    elements_emitted: int = 0
    max_depth: int = 0
    output_characters: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate input characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def expansion_ratio(self) -> float:
        """Output size relative to input size."""
        if self.characters_processed == 0:
            return 0.0
        return self.output_characters / self.characters_processed


@dataclass
class ConversionResult:
    """Outcome of converting one JSON document.

    Attributes:
        xml: The XML document, ``None`` when the conversion failed
        success: Whether the document was converted
        error: The error that aborted the conversion, if any
        diagnostics: Diagnostic entries collected along the way
        performance: Timing and size metrics
        source: Path of the input file, when converting a file
        correlation_id: Correlation ID used for logging
    """

    xml: Optional[str] = None
    success: bool = True
    error: Optional[ConversionError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    source: Optional[str] = None
    correlation_id: Optional[str] = None

    @property
    def exit_code(self) -> int:
        """Process exit code matching this result."""
        if self.success:
            return int(ExitCode.SUCCESS)
        if self.error is not None:
            return int(self.error.exit_code)
        return int(ExitCode.USAGE_ERROR)

    @property
    def error_message(self) -> Optional[str]:
        """One-line description of the failure, if any."""
        if self.success:
            return None
        if self.error is not None:
            return str(self.error)
        critical = [
            d.message for d in self.diagnostics
            if d.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
        ]
        return critical[0] if critical else "conversion failed"

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add a diagnostic entry to the result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics filtered by severity."""
        return [d for d in self.diagnostics if d.severity == severity]

    def raise_for_error(self) -> None:
        """Re-raise the error that stopped the conversion."""
        if self.error is not None:
            raise self.error
        if not self.success:
            raise ConversionError(self.error_message)

    def write_to(
        self,
        path: Union[str, Path],
        append: bool = False,
        encoding: str = "utf-8"
    ) -> None:
        """Write the XML document to ``path``.

        Raises:
            ConversionError: if the conversion failed, nothing is written
        """
        self.raise_for_error()
        mode = "a" if append else "w"
        with Path(path).open(
            mode, encoding=encoding, errors="xmlcharrefreplace", newline=""
        ) as f:
            f.write(self.xml or "")
