"""Tests for discovery, the analyzer service and the conversion driver."""

import pytest
from formik_migrate.core import FormikAnalyzer, FormikConverter, discover_files
from formik_migrate.core.analyzer import Effort, FileStatus
from formik_migrate.core.transformer import convert_codebase


# =========================================================================
# Sample source fixtures
# =========================================================================

SIMPLE_FORM = '''import { useFormik, Field } from "formik";

export function Signup() {
  const formik = useFormik({ initialValues: { email: "" }, onSubmit: save });
  return <Field name="email" type="email" />;
}
'''

COMPLEX_FORM = '''import { useFormik, Field } from "formik";

export function Profile() {
  const formik = useFormik({ initialValues: {}, onSubmit: save, validate });
  return <Field name="bio" />;
}
'''

REVIEW_ONLY = '''import { Field } from "formik";

export const Bio = () => <Field name="bio" component={RichText} />;
'''

CLEAN = '''export const add = (a, b) => a + b;
'''

BROKEN = '''import { useFormik } from "formik";
const x = (;
'''


@pytest.fixture
def project(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "Signup.jsx").write_text(SIMPLE_FORM, encoding="utf-8")
    (src / "Profile.jsx").write_text(COMPLEX_FORM, encoding="utf-8")
    (src / "Bio.tsx").write_text(REVIEW_ONLY, encoding="utf-8")
    (src / "math.js").write_text(CLEAN, encoding="utf-8")
    (src / "broken.js").write_text(BROKEN, encoding="utf-8")
    (src / "notes.md").write_text("# not code", encoding="utf-8")

    vendored = tmp_path / "node_modules" / "formik"
    vendored.mkdir(parents=True)
    (vendored / "index.js").write_text(SIMPLE_FORM, encoding="utf-8")
    hidden = tmp_path / ".cache"
    hidden.mkdir()
    (hidden / "Form.jsx").write_text(SIMPLE_FORM, encoding="utf-8")
    return tmp_path


# =========================================================================
# Tests: Discovery
# =========================================================================

class TestDiscovery:
    def test_skips_ignored_and_foreign_files(self, project):
        files = discover_files(str(project))
        names = [f.rsplit("/", 1)[-1] for f in files]
        assert names == ["Bio.tsx", "Profile.jsx", "Signup.jsx", "broken.js", "math.js"]

    def test_extension_filter(self, project):
        files = discover_files(str(project), extensions=[".tsx"])
        assert [f.rsplit("/", 1)[-1] for f in files] == ["Bio.tsx"]

    def test_custom_skip_list(self, project):
        files = discover_files(str(project), skip_directories=["src"])
        assert [f.rsplit("/", 1)[-1] for f in files] == ["index.js"]

    def test_missing_directory(self, tmp_path):
        assert discover_files(str(tmp_path / "nope")) == []


# =========================================================================
# Tests: Analyzer service
# =========================================================================

class TestAnalyzer:
    def test_codebase(self, project):
        result = FormikAnalyzer(max_workers=2).analyze_codebase(str(project))
        assert result.total_files == 5
        assert result.formik_files == 3
        assert result.failed_files == 1
        assert len(result.files) == 4
        assert result.patterns["useFormik"] == 2
        assert result.patterns["Field"] == 3
        assert result.convertible == 3
        assert result.needs_review == 2

    def test_clean_file_status(self):
        analysis = FormikAnalyzer().analyze_source(CLEAN, "math.js")
        assert analysis.status is FileStatus.CLEAN
        assert not analysis.has_formik
        assert analysis.patterns == ()
        assert analysis.effort is Effort.LOW

    def test_broken_file_is_distinguishable(self):
        analysis = FormikAnalyzer().analyze_source(BROKEN, "broken.js")
        assert analysis.status is FileStatus.ANALYSIS_FAILED
        assert analysis.error
        assert analysis.patterns == ()

    def test_unreadable_file(self, tmp_path):
        analysis = FormikAnalyzer().analyze_file(str(tmp_path / "gone.jsx"))
        assert analysis.status is FileStatus.ANALYSIS_FAILED

    def test_unsupported_file(self):
        analysis = FormikAnalyzer().analyze_source("x", "style.css")
        assert analysis.status is FileStatus.ANALYSIS_FAILED
        assert "Unsupported" in analysis.error

    def test_analyze_files_keeps_order(self, project):
        paths = [str(project / "src" / n) for n in ("math.js", "Signup.jsx", "Bio.tsx")]
        results = FormikAnalyzer(max_workers=3).analyze_files(paths)
        assert [r.file_path for r in results] == paths


# =========================================================================
# Tests: Conversion driver
# =========================================================================

class TestConvertCodebase:
    def test_dry_run_writes_nothing(self, project):
        summary = FormikConverter().convert_codebase(str(project), dry_run=True)
        assert summary.dry_run
        assert [p.rsplit("/", 1)[-1] for p in summary.converted] == ["Signup.jsx"]
        assert [p.rsplit("/", 1)[-1] for p in summary.skipped] == ["Profile.jsx"]
        assert summary.failed == []
        assert (project / "src" / "Signup.jsx").read_text(encoding="utf-8") == SIMPLE_FORM

    def test_convert_with_backup(self, project):
        summary = convert_codebase(str(project), backup=True)
        signup = project / "src" / "Signup.jsx"
        converted = signup.read_text(encoding="utf-8")
        assert "useForm({ defaultValues: {" in converted
        assert '<input {...register("email")} type="email" />' in converted
        assert (project / "src" / "Signup.jsx.backup").read_text(encoding="utf-8") == SIMPLE_FORM
        outcome = next(f for f in summary.files if f.file_path == str(signup))
        assert outcome.written
        assert outcome.backup_path == str(signup) + ".backup"

    def test_unsafe_file_untouched(self, project):
        summary = FormikConverter().convert_codebase(str(project))
        assert (project / "src" / "Profile.jsx").read_text(encoding="utf-8") == COMPLEX_FORM
        assert not (project / "src" / "Profile.jsx.backup").exists()
        assert summary.needs_review == 1
        assert any(w.endswith("File contains complex patterns that need manual review") for w in summary.warnings)

    def test_review_only_file_not_selected(self, project):
        summary = FormikConverter().convert_codebase(str(project))
        touched = [f.file_path.rsplit("/", 1)[-1] for f in summary.files]
        assert "Bio.tsx" not in touched
        assert (project / "src" / "Bio.tsx").read_text(encoding="utf-8") == REVIEW_ONLY

    def test_custom_backup_suffix(self, project):
        FormikConverter(backup_suffix=".orig").convert_codebase(str(project), backup=True)
        assert (project / "src" / "Signup.jsx.orig").exists()

    def test_write_failure_recorded(self, project, monkeypatch):
        converter = FormikConverter()

        def refuse(*args, **kwargs):
            raise PermissionError("read-only")

        monkeypatch.setattr("formik_migrate.core.transformer.service.shutil.copyfile", refuse)
        summary = converter.convert_codebase(str(project), backup=True)
        assert [p.rsplit("/", 1)[-1] for p in summary.failed] == ["Signup.jsx"]
        assert summary.converted == []
        assert (project / "src" / "Signup.jsx").read_text(encoding="utf-8") == SIMPLE_FORM


class TestConvertFile:
    def test_invalid_utf8_left_alone(self, tmp_path):
        path = tmp_path / "Legacy.jsx"
        original = b"// caf\xe9\n" + SIMPLE_FORM.encode("utf-8")
        path.write_bytes(original)
        outcome = FormikConverter().convert_file(str(path))
        assert not outcome.written
        assert outcome.error.startswith("Cannot read file: Cannot decode file as UTF-8")
        assert path.read_bytes() == original

    def test_invalid_utf8_counted_as_failed(self, tmp_path):
        path = tmp_path / "Legacy.jsx"
        path.write_bytes(b"// caf\xe9\n" + SIMPLE_FORM.encode("utf-8"))
        summary = FormikConverter().convert_codebase(str(tmp_path))
        assert [p.rsplit("/", 1)[-1] for p in summary.failed] == ["Legacy.jsx"]
        assert summary.converted == []

    def test_crlf_line_endings_kept(self, tmp_path):
        path = tmp_path / "Signup.jsx"
        path.write_bytes(SIMPLE_FORM.replace("\n", "\r\n").encode("utf-8"))
        outcome = FormikConverter().convert_file(str(path))
        assert outcome.written
        data = path.read_bytes()
        assert b"useForm({ defaultValues: {" in data
        assert data.count(b"\r\n") == SIMPLE_FORM.count("\n")
        assert data.count(b"\n") == data.count(b"\r\n")
