"""Markdown report."""

from typing import List

from ..core.analyzer import CodebaseAnalysis, FileStatus
from .formatting import format_hours, pattern_breakdown, short_path

_PATTERN_LABELS = {
    "useFormik": "useFormik()",
    "Formik": "<Formik>",
    "Field": "<Field>",
    "FieldArray": "<FieldArray>",
    "other": "Other",
}


def generate_markdown_report(analysis: CodebaseAnalysis) -> str:
    """Render the analysis as a Markdown document.

    Args:
        analysis: Codebase analysis

    Returns:
        Markdown text ending in a newline
    """
    lines: List[str] = ["# Formik → React Hook Form Migration Report", ""]

    lines += [
        "## Summary",
        "",
        f"- **Total Files Scanned:** {analysis.total_files}",
        f"- **Files Using Formik:** {analysis.formik_files}",
        f"- **Auto-Convertible:** {analysis.convertible}",
        f"- **Manual Review Needed:** {analysis.needs_review}",
    ]
    if analysis.failed_files:
        lines.append(f"- **Files That Failed Analysis:** {analysis.failed_files}")
    lines.append("")

    lines += ["## Pattern Breakdown", "", "| Pattern | Count |", "|---------|-------|"]
    for kind, count in pattern_breakdown(analysis).items():
        lines.append(f"| {_PATTERN_LABELS[kind]} | {count} |")
    lines.append("")

    lines += [
        "## Complexity",
        "",
        f"- Simple: {analysis.complexity['simple']}",
        f"- Medium: {analysis.complexity['medium']}",
        f"- Complex: {analysis.complexity['complex']}",
        "",
    ]

    remaining = analysis.estimated_hours - analysis.estimated_savings
    lines += [
        "## Time Estimates",
        "",
        f"- **Manual migration:** {format_hours(analysis.estimated_hours)}",
        f"- **With formik-migrate:** {format_hours(remaining)}",
        f"- **Time saved:** {format_hours(analysis.estimated_savings)}",
        "",
    ]

    lines += ["## Files", ""]
    for file in analysis.files:
        lines += [f"### {short_path(file.file_path, 4)}", ""]
        if file.status is FileStatus.ANALYSIS_FAILED:
            lines += [f"- Analysis failed: {file.error}", ""]
            continue
        lines.append(f"- Patterns: {len(file.patterns)}")
        lines.append(f"- Effort: {file.effort.value}")
        if file.needs_review_count:
            lines.append("- Manual review needed")
            for pattern in file.patterns:
                if not pattern.convertible:
                    lines.append(f"  - line {pattern.location.line}: {pattern.kind.value}: {pattern.reason}")
        lines.append("")

    return "\n".join(lines) + "\n"
