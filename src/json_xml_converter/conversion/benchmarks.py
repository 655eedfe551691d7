"""Performance benchmarking for JSON to XML conversion.

Measures conversion throughput and resident memory growth over a set of
generated JSON documents, optionally next to the standard library ``json``
parser as a parse-only baseline, and compares two benchmark runs for
regressions.
"""

import gc
import json
import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import psutil

from json_xml_converter.shared import ConverterConfig, JSONSyntaxError, get_logger

from .parser import JSONToXMLParser

CONVERTER_NAME = "json_xml_converter"
BASELINE_NAME = "json.loads"
REGRESSION_THRESHOLD = 0.05  # 5% change counts as improvement/regression


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run."""

    parser_name: str
    test_case: str
    processing_time_ms: float
    memory_used_mb: float
    characters_processed: int
    elements_emitted: int
    success: bool
    error_message: Optional[str] = None

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def elements_per_second(self) -> float:
        """Calculate XML elements emitted per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.elements_emitted * 1000.0) / self.processing_time_ms


@dataclass
class BenchmarkSuite:
    """Collection of benchmark results with statistical analysis."""

    suite_name: str = "Conversion Benchmark"
    results: List[BenchmarkResult] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)

    def add_result(self, result: BenchmarkResult) -> None:
        self.results.append(result)

    def get_results_by_parser(self, parser_name: str) -> List[BenchmarkResult]:
        return [r for r in self.results if r.parser_name == parser_name]

    def get_results_by_test_case(self, test_case: str) -> List[BenchmarkResult]:
        return [r for r in self.results if r.test_case == test_case]

    def get_statistics(self, parser_name: str, metric: str) -> Dict[str, float]:
        """Get statistical analysis for a parser and metric.

        Args:
            parser_name: Name the results were recorded under
            metric: Attribute or property of ``BenchmarkResult``
        """
        values = [
            float(getattr(result, metric))
            for result in self.get_results_by_parser(parser_name)
            if hasattr(result, metric)
        ]
        if not values:
            return {}

        return {
            "min": min(values),
            "max": max(values),
            "mean": statistics.mean(values),
            "median": statistics.median(values),
            "stdev": statistics.stdev(values) if len(values) > 1 else 0.0,
            "count": len(values),
        }

    def generate_report(self) -> Dict[str, Any]:
        """Generate benchmark report grouped by parser and test case."""
        parsers = sorted(set(r.parser_name for r in self.results))
        test_cases = sorted(set(r.test_case for r in self.results))

        report: Dict[str, Any] = {
            "suite_name": self.suite_name,
            "timestamp": self.timestamp,
            "total_results": len(self.results),
            "parsers": parsers,
            "test_cases": test_cases,
            "summary": {},
            "detailed_results": {},
        }

        for parser in parsers:
            parser_results = self.get_results_by_parser(parser)
            successful_results = [r for r in parser_results if r.success]
            report["summary"][parser] = {
                "total_runs": len(parser_results),
                "successful_runs": len(successful_results),
                "success_rate": len(successful_results) / len(parser_results),
                "performance": self.get_statistics(parser, "characters_per_second"),
                "memory": self.get_statistics(parser, "memory_used_mb"),
            }

        for test_case in test_cases:
            report["detailed_results"][test_case] = {
                result.parser_name: {
                    "processing_time_ms": result.processing_time_ms,
                    "memory_used_mb": result.memory_used_mb,
                    "characters_per_second": result.characters_per_second,
                    "success": result.success,
                    "error": result.error_message,
                }
                for result in self.get_results_by_test_case(test_case)
            }

        return report


class ConversionBenchmark:
    """Conversion throughput and memory benchmark."""

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None,
        warmup_runs: int = 3,
        benchmark_runs: int = 10,
        test_cases: Optional[Dict[str, str]] = None
    ) -> None:
        """Initialize benchmark.

        Args:
            config: Converter configuration used for every run
            correlation_id: Optional correlation ID for tracking
            warmup_runs: Number of warmup runs before benchmarking
            benchmark_runs: Number of benchmark runs to average
            test_cases: JSON documents keyed by name (generated if omitted)
        """
        if warmup_runs < 0:
            raise ValueError("warmup_runs must be >= 0")
        if benchmark_runs <= 0:
            raise ValueError("benchmark_runs must be > 0")

        self.config = config or ConverterConfig()
        self.correlation_id = correlation_id
        self.warmup_runs = warmup_runs
        self.benchmark_runs = benchmark_runs
        self.logger = get_logger(__name__, correlation_id, "benchmark")
        self.test_cases = test_cases if test_cases is not None else self._create_test_cases()

    def _create_test_cases(self) -> Dict[str, str]:
        return {
            "small_object": '{"name": "widget", "price": 9.99, "tags": ["a", "b"]}',
            "nested": self._generate_nested_json(depth=50),
            "escaped_strings": json.dumps(
                {"text": "line\nbreak <tag> & 'quote' \"dq\" \\ / \t" * 50}
            ),
            "large_array": self._generate_large_json(items=1000),
        }

    def _generate_nested_json(self, depth: int) -> str:
        return '{"level": ' * depth + '"bottom"' + "}" * depth

    def _generate_large_json(self, items: int) -> str:
        records = [
            {
                "id": i,
                "title": f"Item {i}",
                "active": i % 2 == 0,
                "score": i * 1.5,
                "owner": None,
                "labels": ["benchmark", "performance", "json"],
            }
            for i in range(items)
        ]
        return json.dumps({"items": records}, indent=2)

    def _measure_memory_usage(self) -> float:
        """Get current resident memory usage in MB."""
        process = psutil.Process()
        return process.memory_info().rss / 1024 / 1024

    def _measure(
        self,
        parser_name: str,
        test_case: str,
        json_text: str,
        run: Callable[[str], int]
    ) -> BenchmarkResult:
        gc.collect()
        memory_before = self._measure_memory_usage()
        start_time = time.time()

        try:
            elements_emitted = run(json_text)
            success = True
            error_message = None
        except (JSONSyntaxError, ValueError) as e:
            elements_emitted = 0
            success = False
            error_message = str(e)

        processing_time = (time.time() - start_time) * 1000
        memory_used = max(0.0, self._measure_memory_usage() - memory_before)

        return BenchmarkResult(
            parser_name=parser_name,
            test_case=test_case,
            processing_time_ms=processing_time,
            memory_used_mb=memory_used,
            characters_processed=len(json_text),
            elements_emitted=elements_emitted,
            success=success,
            error_message=error_message,
        )

    def _run_converter(self, json_text: str) -> int:
        parser = JSONToXMLParser(self.config, correlation_id=self.correlation_id)
        return parser.parse(json_text).elements_emitted

    def _run_baseline(self, json_text: str) -> int:
        json.loads(json_text)
        return 0

    def benchmark_case(self, parser_name: str, test_case: str) -> Optional[BenchmarkResult]:
        """Run warmups and measured runs for one parser and test case.

        Returns:
            Averaged result, or the first failure when every run failed
        """
        json_text = self.test_cases[test_case]
        run = self._run_converter if parser_name == CONVERTER_NAME else self._run_baseline

        for _ in range(self.warmup_runs):
            self._measure(parser_name, test_case, json_text, run)

        run_results = [
            self._measure(parser_name, test_case, json_text, run)
            for _ in range(self.benchmark_runs)
        ]
        successful_runs = [r for r in run_results if r.success]
        if not successful_runs:
            return run_results[0]

        return BenchmarkResult(
            parser_name=parser_name,
            test_case=test_case,
            processing_time_ms=statistics.mean(r.processing_time_ms for r in successful_runs),
            memory_used_mb=statistics.mean(r.memory_used_mb for r in successful_runs),
            characters_processed=len(json_text),
            elements_emitted=successful_runs[0].elements_emitted,
            success=True,
        )

    def run_benchmark(self, include_baseline: bool = True) -> BenchmarkSuite:
        """Run the benchmark suite.

        Args:
            include_baseline: Whether to also time ``json.loads``
        """
        suite = BenchmarkSuite(suite_name="JSON to XML Conversion Benchmark")
        parsers_to_test = [CONVERTER_NAME]
        if include_baseline:
            parsers_to_test.append(BASELINE_NAME)

        self.logger.info(
            "Starting benchmark suite",
            extra={
                "test_cases": len(self.test_cases),
                "parsers": parsers_to_test,
                "warmup_runs": self.warmup_runs,
                "benchmark_runs": self.benchmark_runs,
            }
        )

        for test_case in self.test_cases:
            self.logger.debug(f"Benchmarking test case: {test_case}")
            for parser_name in parsers_to_test:
                result = self.benchmark_case(parser_name, test_case)
                if result is not None:
                    suite.add_result(result)

        self.logger.info(
            "Benchmark suite completed",
            extra={
                "total_results": len(suite.results),
                "suite_duration_seconds": time.time() - suite.timestamp,
            }
        )
        return suite

    def compare_performance(
        self,
        baseline_suite: BenchmarkSuite,
        current_suite: BenchmarkSuite
    ) -> Dict[str, Any]:
        """Compare two suites and classify timing changes beyond 5%."""
        comparison: Dict[str, Any] = {
            "baseline_timestamp": baseline_suite.timestamp,
            "current_timestamp": current_suite.timestamp,
            "improvements": {},
            "regressions": {},
            "summary": {},
        }

        for baseline_result in baseline_suite.results:
            current_result = next(
                (
                    r for r in current_suite.get_results_by_test_case(baseline_result.test_case)
                    if r.parser_name == baseline_result.parser_name
                ),
                None,
            )
            if (
                current_result is None
                or not (baseline_result.success and current_result.success)
                or baseline_result.processing_time_ms <= 0
            ):
                continue

            time_change = (
                (current_result.processing_time_ms - baseline_result.processing_time_ms)
                / baseline_result.processing_time_ms
            )
            key = f"{baseline_result.parser_name}_{baseline_result.test_case}"
            entry = {
                "baseline_time_ms": baseline_result.processing_time_ms,
                "current_time_ms": current_result.processing_time_ms,
                "change_percent": time_change * 100,
            }
            if time_change < -REGRESSION_THRESHOLD:
                comparison["improvements"][key] = entry
            elif time_change > REGRESSION_THRESHOLD:
                comparison["regressions"][key] = entry

        comparison["summary"] = {
            "total_improvements": len(comparison["improvements"]),
            "total_regressions": len(comparison["regressions"]),
            "has_regressions": len(comparison["regressions"]) > 0,
        }
        return comparison
