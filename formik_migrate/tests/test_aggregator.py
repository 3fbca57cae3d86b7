"""Tests for aggregation and effort estimates."""

import pytest
from formik_migrate.core.analyzer import (
    Complexity,
    Effort,
    FileAnalysis,
    FileStatus,
    Location,
    Pattern,
    PatternKind,
    aggregate_analysis,
    estimate_effort,
)
from formik_migrate.core.analyzer.aggregator import round_hours


# ── Fixtures ──────────────────────────────────────────────────────────────


def _pattern(kind=PatternKind.FIELD, complexity=Complexity.SIMPLE, line=1) -> Pattern:
    convertible = complexity is Complexity.SIMPLE
    return Pattern(
        kind=kind,
        location=Location(file="f.jsx", line=line, column=0),
        complexity=complexity,
        convertible=convertible,
        reason=None if convertible else "needs review",
    )


def _file(path, patterns, has_formik=True, status=FileStatus.USES_API, line_count=10) -> FileAnalysis:
    return FileAnalysis(
        file_path=path,
        has_formik=has_formik,
        patterns=tuple(patterns),
        line_count=line_count,
        effort=estimate_effort(patterns, line_count),
        status=status,
        error="boom" if status is FileStatus.ANALYSIS_FAILED else None,
    )


# =========================================================================
# Tests: Aggregation
# =========================================================================

class TestAggregate:
    def test_empty_input(self):
        result = aggregate_analysis([])
        assert result.total_files == 0
        assert result.formik_files == 0
        assert result.convertible == 0
        assert result.needs_review == 0
        assert result.estimated_hours == 0
        assert result.estimated_savings == 0
        assert set(result.patterns) == {k.value for k in PatternKind}
        assert all(v == 0 for v in result.patterns.values())
        assert result.complexity == {"simple": 0, "medium": 0, "complex": 0}

    def test_counts_equal_per_file_sums(self):
        files = [
            _file("a.jsx", [_pattern(PatternKind.USE_FORMIK), _pattern(PatternKind.FIELD)]),
            _file("b.jsx", [
                _pattern(PatternKind.FORMIK, Complexity.MEDIUM),
                _pattern(PatternKind.USE_FORMIK, Complexity.COMPLEX),
                _pattern(PatternKind.ERROR_MESSAGE, Complexity.MEDIUM),
            ]),
        ]
        result = aggregate_analysis(files)

        assert result.patterns["useFormik"] == 2
        assert result.patterns["Field"] == 1
        assert result.patterns["Formik"] == 1
        assert result.patterns["ErrorMessage"] == 1
        assert result.complexity == {"simple": 2, "medium": 2, "complex": 1}
        assert result.convertible == sum(f.convertible_count for f in files)
        assert result.needs_review == sum(f.needs_review_count for f in files)
        assert result.convertible + result.needs_review == sum(len(f.patterns) for f in files)
        assert sum(result.patterns.values()) == result.total_patterns

    def test_estimates(self):
        files = [_file("a.jsx", [
            _pattern(PatternKind.USE_FORMIK),
            _pattern(PatternKind.FIELD),
            _pattern(PatternKind.FORMIK, Complexity.MEDIUM),
            _pattern(PatternKind.USE_FORMIK, Complexity.COMPLEX),
        ])]
        result = aggregate_analysis(files)
        # 2 × 0.25 + 0.5 + 1.5
        assert result.estimated_hours == 2.5
        # 2 × 0.25 × 0.8 + 2 × 0.5 × 0.3
        assert result.estimated_savings == 0.7

    def test_order_independent(self):
        files = [
            _file("a.jsx", [_pattern()]),
            _file("b.jsx", [_pattern(complexity=Complexity.COMPLEX)]),
            _file("c.jsx", [], status=FileStatus.ANALYSIS_FAILED, has_formik=False),
        ]
        forward = aggregate_analysis(files)
        backward = aggregate_analysis(list(reversed(files)))
        assert forward.patterns == backward.patterns
        assert forward.complexity == backward.complexity
        assert forward.estimated_hours == backward.estimated_hours
        assert forward.failed_files == backward.failed_files == 1

    def test_total_files_override(self):
        result = aggregate_analysis([_file("a.jsx", [_pattern()])], total_files=12)
        assert result.total_files == 12
        assert result.formik_files == 1
        assert [f.file_path for f in result.files] == ["a.jsx"]


# =========================================================================
# Tests: Effort and rounding
# =========================================================================

class TestEffort:
    def test_low(self):
        assert estimate_effort([_pattern()], 50) is Effort.LOW

    def test_high_from_complex_patterns(self):
        complex_patterns = [_pattern(complexity=Complexity.COMPLEX) for _ in range(3)]
        assert estimate_effort(complex_patterns, 10) is Effort.HIGH

    def test_high_from_size(self):
        assert estimate_effort([], 501) is Effort.HIGH

    def test_medium(self):
        assert estimate_effort([_pattern(complexity=Complexity.COMPLEX)], 10) is Effort.MEDIUM
        assert estimate_effort([_pattern(complexity=Complexity.MEDIUM)] * 4, 10) is Effort.MEDIUM
        assert estimate_effort([], 201) is Effort.MEDIUM

    def test_thresholds_are_exclusive(self):
        assert estimate_effort([_pattern(complexity=Complexity.MEDIUM)] * 3, 200) is Effort.LOW
        assert estimate_effort([_pattern(complexity=Complexity.COMPLEX)] * 2, 500) is Effort.MEDIUM

    def test_round_hours_halves_up(self):
        assert round_hours(0.25) == 0.3
        assert round_hours(1.04) == 1.0
        assert round_hours(0) == 0


class TestPatternInvariant:
    def test_reason_required_when_not_convertible(self):
        with pytest.raises(ValueError):
            Pattern(
                kind=PatternKind.FIELD,
                location=Location("f.jsx", 1, 0),
                complexity=Complexity.MEDIUM,
                convertible=False,
            )
        with pytest.raises(ValueError):
            Pattern(
                kind=PatternKind.FIELD,
                location=Location("f.jsx", 1, 0),
                complexity=Complexity.SIMPLE,
                convertible=True,
                reason="unexpected",
            )
