"""Helpers shared by the report renderers."""

from typing import Dict

from ..core.analyzer import CodebaseAnalysis, PatternKind

# Kinds shown on their own row; the rest are summed into "other".
HEADLINE_KINDS = (
    PatternKind.USE_FORMIK,
    PatternKind.FORMIK,
    PatternKind.FIELD,
    PatternKind.FIELD_ARRAY,
)

OTHER = "other"


def format_hours(hours: float) -> str:
    """``0.5`` → ``"30 minutes"``, ``2`` → ``"2.0 hours"``."""
    if hours < 1:
        return f"{int(hours * 60 + 0.5)} minutes"
    return f"{hours:.1f} hours"


def pattern_breakdown(analysis: CodebaseAnalysis) -> Dict[str, int]:
    """Per-kind counts with the minor kinds folded into ``other``."""
    breakdown = {kind.value: analysis.patterns.get(kind.value, 0) for kind in HEADLINE_KINDS}
    breakdown[OTHER] = sum(
        count for kind, count in analysis.patterns.items() if kind not in breakdown
    )
    return breakdown


def short_path(file_path: str, parts: int = 3) -> str:
    """Last ``parts`` components of a path, for display."""
    return "/".join(file_path.replace("\\", "/").split("/")[-parts:])
