"""Report renderers for a CodebaseAnalysis.

Renderers only read the analysis; none of them reorders or mutates it.
"""

from .console_report import print_console_report, print_conversion_summary, print_stats
from .formatting import format_hours, pattern_breakdown, short_path
from .json_report import analysis_to_dict, generate_json_report
from .markdown_report import generate_markdown_report

REPORT_FORMATS = ("console", "json", "markdown")

__all__ = [
    "REPORT_FORMATS",
    "analysis_to_dict",
    "generate_json_report",
    "generate_markdown_report",
    "print_console_report",
    "print_conversion_summary",
    "print_stats",
    "format_hours",
    "pattern_breakdown",
    "short_path",
]
