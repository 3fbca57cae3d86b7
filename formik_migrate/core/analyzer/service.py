"""Formik analyzer service.

Orchestrates: discover → parse → detect/classify → aggregate.
Per-file work runs on a bounded thread pool; each file is independent,
and the aggregate is a pure fold so completion order does not matter.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..ast_parser import ParsedSource, detect_language, get_parser
from ..ingestion import discover_files
from .aggregator import aggregate_analysis, estimate_effort
from .detector import PatternDetector
from .models import CodebaseAnalysis, Effort, FileAnalysis, FileStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class FormikAnalyzer:
    """Detects Formik usage patterns in files and codebases."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS):
        self.max_workers = max_workers
        self._detector = PatternDetector()

    # ── Public entry points ──────────────────────────────────────────

    def analyze_source(self, source_text: str, file_path: str) -> FileAnalysis:
        """Analyze source text. No I/O.

        Args:
            source_text: File contents
            file_path: File identifier; its extension selects the grammar

        Returns:
            FileAnalysis for the text
        """
        language = detect_language(file_path)
        if not language:
            return self._failed(file_path, f"Unsupported file type: {file_path}")
        return self.analyze_parsed(get_parser(language).parse_source(source_text, file_path))

    def analyze_file(self, file_path: str) -> FileAnalysis:
        """Read and analyze a single file."""
        language = detect_language(file_path)
        if not language:
            return self._failed(file_path, f"Unsupported file type: {file_path}")
        return self.analyze_parsed(get_parser(language).parse_file(file_path))

    def analyze_parsed(self, parsed: ParsedSource) -> FileAnalysis:
        """Analyze an already parsed file.

        A file that could not be read or parsed yields status
        ``ANALYSIS_FAILED`` with the parse error, never an exception.
        """
        if not parsed.ok:
            message = parsed.error_message or "Unknown parse failure"
            logger.warning(f"Could not analyze {parsed.file_path}: {message}")
            return self._failed(parsed.file_path, message, parsed.line_count)

        detection = self._detector.detect(parsed)
        patterns = detection.patterns

        if detection.has_formik or patterns:
            status = FileStatus.USES_API
        else:
            status = FileStatus.CLEAN

        return FileAnalysis(
            file_path=parsed.file_path,
            has_formik=detection.has_formik,
            patterns=patterns,
            line_count=parsed.line_count,
            effort=estimate_effort(patterns, parsed.line_count),
            status=status,
        )

    def analyze_files(self, file_paths: List[str]) -> List[FileAnalysis]:
        """Analyze files on the worker pool, preserving input order."""
        if not file_paths:
            return []
        workers = min(self.max_workers, len(file_paths))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="analyze") as pool:
            return list(pool.map(self.analyze_file, file_paths))

    def analyze_codebase(
        self,
        directory: str,
        extensions: Optional[List[str]] = None,
        skip_directories: Optional[List[str]] = None,
    ) -> CodebaseAnalysis:
        """Analyze every source file under a directory.

        Files that use Formik and files that failed analysis are kept in
        the result; clean files only count toward ``total_files``.

        Args:
            directory: Project root
            extensions: File extensions to include
            skip_directories: Directory names to prune

        Returns:
            CodebaseAnalysis for the directory
        """
        files = discover_files(directory, extensions, skip_directories)
        analyses = self.analyze_files(files)

        kept = [a for a in analyses if a.status is not FileStatus.CLEAN]
        result = aggregate_analysis(kept, total_files=len(files))

        logger.info(
            f"Analyzed {result.total_files} files: {result.formik_files} use Formik, "
            f"{result.convertible} convertible, {result.needs_review} need review, "
            f"{result.failed_files} failed"
        )
        return result

    # ── Private helpers ──────────────────────────────────────────────

    def _failed(self, file_path: str, message: str, line_count: int = 0) -> FileAnalysis:
        return FileAnalysis(
            file_path=file_path,
            has_formik=False,
            patterns=(),
            line_count=line_count,
            effort=Effort.LOW,
            status=FileStatus.ANALYSIS_FAILED,
            error=message,
        )
