"""Codebase-wide aggregation of per-file analyses.

A pure fold: counters are sums over patterns, so the result does not
depend on the order files finished analysing.
"""

import math
from typing import Iterable, List, Optional, Sequence

from ..constants import (
    AUTOMATED_HOURS,
    AUTOMATED_SAVINGS_RATE,
    HIGH_EFFORT_COMPLEX_PATTERNS,
    HIGH_EFFORT_LINES,
    HOURS_PER_PATTERN,
    MEDIUM_EFFORT_LINES,
    MEDIUM_EFFORT_MEDIUM_PATTERNS,
    REVIEWED_HOURS,
    REVIEWED_SAVINGS_RATE,
)
from .models import CodebaseAnalysis, Complexity, Effort, FileAnalysis, FileStatus, Pattern, PatternKind


def round_hours(hours: float) -> float:
    """Round to one decimal, halves away from zero."""
    return math.floor(hours * 10 + 0.5) / 10


def estimate_effort(patterns: Sequence[Pattern], line_count: int) -> Effort:
    """Per-file effort tier from complexity counts and file size."""
    complex_count = sum(1 for p in patterns if p.complexity is Complexity.COMPLEX)
    medium_count = sum(1 for p in patterns if p.complexity is Complexity.MEDIUM)

    if complex_count > HIGH_EFFORT_COMPLEX_PATTERNS or line_count > HIGH_EFFORT_LINES:
        return Effort.HIGH
    if (
        complex_count > 0
        or medium_count > MEDIUM_EFFORT_MEDIUM_PATTERNS
        or line_count > MEDIUM_EFFORT_LINES
    ):
        return Effort.MEDIUM
    return Effort.LOW


def aggregate_analysis(
    files: Iterable[FileAnalysis],
    total_files: Optional[int] = None,
) -> CodebaseAnalysis:
    """Fold per-file analyses into one CodebaseAnalysis.

    Args:
        files: Per-file results, in display order
        total_files: Number of files scanned, including clean files that
            were not kept in ``files``; defaults to ``len(files)``

    Returns:
        CodebaseAnalysis with counters and time estimates
    """
    file_list: List[FileAnalysis] = list(files)

    patterns = {kind.value: 0 for kind in PatternKind}
    complexity = {tier.value: 0 for tier in Complexity}
    convertible = 0
    needs_review = 0

    for file in file_list:
        for pattern in file.patterns:
            patterns[pattern.kind.value] += 1
            complexity[pattern.complexity.value] += 1
            if pattern.convertible:
                convertible += 1
            else:
                needs_review += 1

    estimated_hours = sum(HOURS_PER_PATTERN[tier] * count for tier, count in complexity.items())
    estimated_savings = (
        convertible * AUTOMATED_HOURS * AUTOMATED_SAVINGS_RATE
        + needs_review * REVIEWED_HOURS * REVIEWED_SAVINGS_RATE
    )

    return CodebaseAnalysis(
        total_files=total_files if total_files is not None else len(file_list),
        formik_files=sum(1 for f in file_list if f.has_formik),
        failed_files=sum(1 for f in file_list if f.status is FileStatus.ANALYSIS_FAILED),
        patterns=patterns,
        complexity=complexity,
        convertible=convertible,
        needs_review=needs_review,
        estimated_hours=round_hours(estimated_hours),
        estimated_savings=round_hours(estimated_savings),
        files=tuple(file_list),
    )
