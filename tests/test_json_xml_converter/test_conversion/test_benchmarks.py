"""Tests for conversion performance benchmarking.

This module tests the benchmarking system for JSON to XML conversion,
including the standard library baseline and regression detection.
"""

from unittest.mock import Mock, patch

import pytest

from json_xml_converter.conversion.benchmarks import (
    BASELINE_NAME,
    CONVERTER_NAME,
    BenchmarkResult,
    BenchmarkSuite,
    ConversionBenchmark,
)


def make_result(parser_name="p", test_case="t", time_ms=10.0, success=True, memory=1.0):
    return BenchmarkResult(
        parser_name=parser_name,
        test_case=test_case,
        processing_time_ms=time_ms,
        memory_used_mb=memory,
        characters_processed=1000,
        elements_emitted=50,
        success=success,
    )


class TestBenchmarkResult:
    """Test benchmark result data structure."""

    def test_benchmark_result_creation(self):
        """Test basic benchmark result creation."""
        result = make_result()

        assert result.parser_name == "p"
        assert result.success is True
        assert result.error_message is None

    def test_performance_metrics_calculation(self):
        """Test calculated performance metrics."""
        result = make_result(time_ms=100.0)

        assert result.characters_per_second == 10000.0
        assert result.elements_per_second == 500.0

    def test_zero_division_handling(self):
        """Test handling of zero processing time."""
        result = make_result(time_ms=0.0)

        assert result.characters_per_second == 0.0
        assert result.elements_per_second == 0.0


class TestBenchmarkSuite:
    """Test benchmark suite aggregation."""

    def setup_method(self):
        """Build a suite with two parsers and two test cases."""
        self.suite = BenchmarkSuite()
        self.suite.add_result(make_result("a", "small", 10.0))
        self.suite.add_result(make_result("a", "large", 30.0))
        self.suite.add_result(make_result("b", "small", 5.0, success=False))

    def test_filters(self):
        """Test result filtering."""
        assert len(self.suite.get_results_by_parser("a")) == 2
        assert len(self.suite.get_results_by_test_case("small")) == 2

    def test_statistics(self):
        """Test statistical summary."""
        stats = self.suite.get_statistics("a", "processing_time_ms")

        assert stats["min"] == 10.0
        assert stats["max"] == 30.0
        assert stats["mean"] == 20.0
        assert stats["median"] == 20.0
        assert stats["count"] == 2
        assert stats["stdev"] > 0

    def test_statistics_unknown_parser(self):
        """Test statistics for a parser without results."""
        assert self.suite.get_statistics("missing", "processing_time_ms") == {}

    def test_generate_report(self):
        """Test report structure."""
        report = self.suite.generate_report()

        assert report["total_results"] == 3
        assert report["parsers"] == ["a", "b"]
        assert report["test_cases"] == ["large", "small"]
        assert report["summary"]["a"]["success_rate"] == 1.0
        assert report["summary"]["b"]["success_rate"] == 0.0
        assert set(report["detailed_results"]["small"]) == {"a", "b"}


class TestConversionBenchmark:
    """Test benchmark execution."""

    def setup_method(self):
        """Create a small, fast benchmark."""
        self.benchmark = ConversionBenchmark(
            warmup_runs=0,
            benchmark_runs=2,
            test_cases={"tiny": '{"a": [1, 2]}', "broken": '{"a" 1}'},
        )

    def test_invalid_run_counts(self):
        """Test run count validation."""
        with pytest.raises(ValueError):
            ConversionBenchmark(warmup_runs=-1)
        with pytest.raises(ValueError):
            ConversionBenchmark(benchmark_runs=0)

    def test_default_test_cases(self):
        """Test generated documents are valid JSON."""
        import json

        benchmark = ConversionBenchmark()
        assert set(benchmark.test_cases) == {
            "small_object", "nested", "escaped_strings", "large_array"
        }
        for text in benchmark.test_cases.values():
            json.loads(text)

    @patch("psutil.Process")
    def test_memory_measurement(self, mock_process):
        """Test memory is read from the process RSS."""
        mock_memory = Mock()
        mock_memory.rss = 1024 * 1024 * 50  # 50MB in bytes
        mock_process.return_value.memory_info.return_value = mock_memory

        assert self.benchmark._measure_memory_usage() == 50.0

    def test_memory_growth_recorded(self):
        """Test memory difference between samples."""
        with patch.object(
            self.benchmark, "_measure_memory_usage", side_effect=[10.0, 12.0, 10.0, 12.5]
        ):
            result = self.benchmark.benchmark_case(CONVERTER_NAME, "tiny")

        assert result.success is True
        assert result.memory_used_mb == pytest.approx(2.25)
        assert result.elements_emitted == 4

    def test_failed_conversion(self):
        """Test syntax errors are recorded as failures."""
        with patch.object(self.benchmark, "_measure_memory_usage", return_value=1.0):
            result = self.benchmark.benchmark_case(CONVERTER_NAME, "broken")

        assert result.success is False
        assert "':' expected" in result.error_message

    def test_run_benchmark_with_baseline(self):
        """Test both the converter and the json baseline run."""
        with patch.object(self.benchmark, "_measure_memory_usage", return_value=1.0):
            suite = self.benchmark.run_benchmark()

        assert len(suite.results) == 4
        assert {r.parser_name for r in suite.results} == {CONVERTER_NAME, BASELINE_NAME}
        baseline_broken = [
            r for r in suite.get_results_by_parser(BASELINE_NAME) if r.test_case == "broken"
        ][0]
        assert baseline_broken.success is False

    def test_run_benchmark_without_baseline(self):
        """Test baseline can be skipped."""
        with patch.object(self.benchmark, "_measure_memory_usage", return_value=1.0):
            suite = self.benchmark.run_benchmark(include_baseline=False)

        assert {r.parser_name for r in suite.results} == {CONVERTER_NAME}

    def test_compare_performance(self):
        """Test regressions and improvements beyond five percent."""
        baseline = BenchmarkSuite()
        baseline.add_result(make_result("p", "fast", 10.0))
        baseline.add_result(make_result("p", "slow", 10.0))
        baseline.add_result(make_result("p", "same", 10.0))
        current = BenchmarkSuite()
        current.add_result(make_result("p", "fast", 5.0))
        current.add_result(make_result("p", "slow", 20.0))
        current.add_result(make_result("p", "same", 10.2))

        comparison = self.benchmark.compare_performance(baseline, current)

        assert list(comparison["improvements"]) == ["p_fast"]
        assert list(comparison["regressions"]) == ["p_slow"]
        assert comparison["regressions"]["p_slow"]["change_percent"] == pytest.approx(100.0)
        assert comparison["summary"]["has_regressions"] is True
