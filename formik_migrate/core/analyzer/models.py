"""Data contracts for the Formik analyzer.

All structured types produced by detection, classification and
aggregation. Kept as frozen dataclasses: a result is never mutated after
construction, re-analysis builds new objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class PatternKind(str, Enum):
    """Formik API shapes the detector recognises."""
    USE_FORMIK = "useFormik"
    FORMIK = "Formik"
    FIELD = "Field"
    FIELD_ARRAY = "FieldArray"
    FAST_FIELD = "FastField"
    ERROR_MESSAGE = "ErrorMessage"
    USE_FIELD = "useField"


class Complexity(str, Enum):
    """Conversion risk, ordered simple < medium < complex."""
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class Effort(str, Enum):
    """Per-file migration effort tier."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FileStatus(str, Enum):
    """Outcome of analysing one file.

    ``ANALYSIS_FAILED`` keeps unparsable files distinguishable from
    files that simply do not use Formik.
    """
    CLEAN = "clean"
    USES_API = "uses_api"
    ANALYSIS_FAILED = "analysis_failed"


@dataclass(frozen=True)
class Classification:
    """Complexity tier plus the reason a pattern needs review."""
    complexity: Complexity
    reason: Optional[str] = None

    @property
    def convertible(self) -> bool:
        return self.complexity is Complexity.SIMPLE


@dataclass(frozen=True)
class Location:
    """Where a pattern was found. For reporting only."""
    file: str
    line: int
    column: int


@dataclass(frozen=True)
class Pattern:
    """One detected Formik usage site.

    ``reason`` must be present exactly when ``convertible`` is False.
    """
    kind: PatternKind
    location: Location
    complexity: Complexity
    convertible: bool
    reason: Optional[str] = None

    def __post_init__(self):
        if self.convertible and self.reason is not None:
            raise ValueError(f"Convertible {self.kind.value} pattern must not carry a reason")
        if not self.convertible and not self.reason:
            raise ValueError(f"Non-convertible {self.kind.value} pattern needs a reason")

    @classmethod
    def from_classification(
        cls, kind: PatternKind, location: Location, classification: Classification
    ) -> "Pattern":
        convertible = classification.convertible
        reason = None if convertible else classification.reason
        return cls(
            kind=kind,
            location=location,
            complexity=classification.complexity,
            convertible=convertible,
            reason=reason,
        )


@dataclass(frozen=True)
class FileAnalysis:
    """Analysis results for a single file."""
    file_path: str
    has_formik: bool
    patterns: Tuple[Pattern, ...]
    line_count: int
    effort: Effort
    status: FileStatus
    error: Optional[str] = None

    @property
    def convertible_count(self) -> int:
        return sum(1 for p in self.patterns if p.convertible)

    @property
    def needs_review_count(self) -> int:
        return sum(1 for p in self.patterns if not p.convertible)

    @property
    def has_convertible(self) -> bool:
        return any(p.convertible for p in self.patterns)


@dataclass(frozen=True)
class CodebaseAnalysis:
    """Codebase-wide fold over FileAnalysis results.

    Every counter equals the sum of the matching per-file counts.
    ``patterns`` is keyed by PatternKind value, ``complexity`` by
    Complexity value; both always list every key.
    """
    total_files: int
    formik_files: int
    failed_files: int
    patterns: Dict[str, int]
    complexity: Dict[str, int]
    convertible: int
    needs_review: int
    estimated_hours: float
    estimated_savings: float
    files: Tuple[FileAnalysis, ...] = field(default_factory=tuple)

    @property
    def total_patterns(self) -> int:
        return self.convertible + self.needs_review
