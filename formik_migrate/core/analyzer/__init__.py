"""Formik usage analysis: detection, classification and aggregation.

Public API:
    FormikAnalyzer().analyze_source(source, path) → FileAnalysis
    FormikAnalyzer().analyze_codebase(directory) → CodebaseAnalysis
    aggregate_analysis(files) → CodebaseAnalysis
    classify(kind, keys) → Classification
"""

from .aggregator import aggregate_analysis, estimate_effort
from .classifier import classify, classify_field, classify_hook, classify_wrapper
from .detector import DetectionResult, PatternDetector
from .models import (
    Classification,
    CodebaseAnalysis,
    Complexity,
    Effort,
    FileAnalysis,
    FileStatus,
    Location,
    Pattern,
    PatternKind,
)
from .service import FormikAnalyzer

__all__ = [
    "FormikAnalyzer",
    "PatternDetector",
    "DetectionResult",
    "aggregate_analysis",
    "estimate_effort",
    "classify",
    "classify_hook",
    "classify_wrapper",
    "classify_field",
    "Classification",
    "CodebaseAnalysis",
    "Complexity",
    "Effort",
    "FileAnalysis",
    "FileStatus",
    "Location",
    "Pattern",
    "PatternKind",
]
