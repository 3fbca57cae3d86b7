"""Tests for the report renderers."""

import io
import json

import pytest
from rich.console import Console

from formik_migrate.core.analyzer import FormikAnalyzer, aggregate_analysis
from formik_migrate.core.transformer import ConversionSummary
from formik_migrate.reporting import (
    analysis_to_dict,
    format_hours,
    generate_json_report,
    generate_markdown_report,
    pattern_breakdown,
    print_console_report,
    print_conversion_summary,
    print_stats,
    short_path,
)

SMALL_FORM = '''import { useFormik, Field, ErrorMessage } from "formik";

export function Signup() {
  const formik = useFormik({ initialValues: {}, onSubmit: save });
  return (
    <form>
      <Field name="email" />
      <ErrorMessage name="email" />
    </form>
  );
}
'''

BIG_FORM = '''import { Formik, Field, FastField } from "formik";

export const Big = () => (
  <Formik initialValues={{}} onSubmit={save} validate={check}>
    <Field name="a" />
    <Field name="b" as="textarea" />
    <FastField name="c" />
  </Formik>
);
'''


@pytest.fixture
def analysis():
    analyzer = FormikAnalyzer()
    files = [
        analyzer.analyze_source(SMALL_FORM, "/app/src/forms/Signup.jsx"),
        analyzer.analyze_source(BIG_FORM, "/app/src/forms/Big.jsx"),
        analyzer.analyze_source("const x = (;", "/app/src/broken.js"),
    ]
    return aggregate_analysis(files, total_files=10)


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestFormatting:
    def test_format_hours(self):
        assert format_hours(0.5) == "30 minutes"
        assert format_hours(0) == "0 minutes"
        assert format_hours(1) == "1.0 hours"
        assert format_hours(2.5) == "2.5 hours"

    def test_pattern_breakdown_groups_other(self, analysis):
        breakdown = pattern_breakdown(analysis)
        assert list(breakdown) == ["useFormik", "Formik", "Field", "FieldArray", "other"]
        assert breakdown["Field"] == 3
        assert breakdown["other"] == 2  # ErrorMessage + FastField
        assert sum(breakdown.values()) == analysis.total_patterns

    def test_short_path(self):
        assert short_path("/a/b/c/d/e.jsx") == "c/d/e.jsx"
        assert short_path("e.jsx") == "e.jsx"


class TestJsonReport:
    def test_enums_as_values(self, analysis):
        data = analysis_to_dict(analysis)
        first = data["files"][0]
        assert first["status"] == "uses_api"
        assert first["effort"] == "low"
        assert first["patterns"][0]["kind"] == "useFormik"
        assert first["patterns"][0]["complexity"] == "simple"

    def test_round_trips_through_json(self, analysis):
        data = json.loads(generate_json_report(analysis))
        assert data["total_files"] == 10
        assert data["failed_files"] == 1
        assert data["patterns"]["other"] == 2
        assert data["total_patterns"] == analysis.total_patterns

    def test_does_not_mutate(self, analysis):
        generate_json_report(analysis)
        assert "other" not in analysis.patterns


class TestMarkdownReport:
    def test_sections(self, analysis):
        md = generate_markdown_report(analysis)
        for heading in ("## Summary", "## Pattern Breakdown", "## Complexity", "## Time Estimates", "## Files"):
            assert heading in md
        assert "- **Total Files Scanned:** 10" in md
        assert "| <Field> | 3 |" in md
        assert "### app/src/forms/Big.jsx" in md
        assert "- Analysis failed:" in md
        assert "- Manual review needed" in md


class TestConsoleReport:
    def test_renders_without_reordering(self, analysis):
        order = [f.file_path for f in analysis.files]
        console = _console()
        print_console_report(analysis, console)
        output = console.file.getvalue()
        assert "Files with Most Formik Usage" in output
        assert "Big.jsx" in output
        assert [f.file_path for f in analysis.files] == order

    def test_stats(self, analysis):
        console = _console()
        print_stats(analysis, console)
        output = console.file.getvalue()
        assert "Files with Formik:" in output
        assert f"{analysis.estimated_hours} hours" in output

    def test_conversion_summary(self):
        summary = ConversionSummary(
            converted=["/a.jsx"],
            skipped=["/b.jsx"],
            failed=[],
            warnings=[f"warning [{i}]" for i in range(12)],
            files=[],
            dry_run=True,
        )
        console = _console()
        print_conversion_summary(summary, console)
        output = console.file.getvalue()
        assert "Would convert 1 files" in output
        assert "Skipped 1 files" in output
        assert "warning [0]" in output
        assert "... and 2 more" in output
