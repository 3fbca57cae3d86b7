"""Codebase conversion driver.

Orchestrates: analyze → select files with convertible patterns →
transform → (backup) → write. Each file's read, transform and write run
on a single worker; different files convert concurrently.
"""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..analyzer import FormikAnalyzer
from ..analyzer.service import DEFAULT_MAX_WORKERS
from .models import ConversionSummary, FileConversion
from .safe_transformer import CANNOT_READ_PREFIX, SafeTransformer

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_SUFFIX = ".backup"


class FormikConverter:
    """Applies the safe transformer across a codebase."""

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        retain_lines: bool = True,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
    ):
        self.max_workers = max_workers
        self.backup_suffix = backup_suffix
        self.analyzer = FormikAnalyzer(max_workers=max_workers)
        self.transformer = SafeTransformer(retain_lines=retain_lines)

    def convert_file(self, file_path: str, dry_run: bool = False, backup: bool = False) -> FileConversion:
        """Convert one file in place.

        Args:
            file_path: File to convert
            dry_run: Transform only, never write
            backup: Copy the original to ``<path><backup_suffix>`` first

        Returns:
            FileConversion; I/O errors are recorded, not raised
        """
        try:
            result = self.transformer.transform_file(file_path)
            if not result.success:
                if result.error.startswith(CANNOT_READ_PREFIX):
                    logger.error(f"Failed to convert {file_path}: {result.error}")
                    return FileConversion(file_path=file_path, result=result, error=result.error)
                logger.info(f"Skipped {file_path}: {result.error}")
                return FileConversion(file_path=file_path, result=result)
            if dry_run:
                return FileConversion(file_path=file_path, result=result)

            backup_path = None
            if backup:
                backup_path = file_path + self.backup_suffix
                shutil.copyfile(file_path, backup_path)

            with open(file_path, "w", encoding="utf-8", newline="") as f:
                f.write(result.converted_code)
            logger.info(f"Wrote {file_path}")
            return FileConversion(file_path=file_path, result=result, written=True, backup_path=backup_path)

        except OSError as e:
            logger.error(f"Failed to convert {file_path}: {e}")
            return FileConversion(file_path=file_path, error=str(e))

    def convert_codebase(
        self,
        directory: str,
        dry_run: bool = False,
        backup: bool = False,
        extensions: Optional[List[str]] = None,
        skip_directories: Optional[List[str]] = None,
    ) -> ConversionSummary:
        """Convert every file under ``directory`` that has a convertible pattern.

        Args:
            directory: Project root
            dry_run: Report what would change without writing
            backup: Keep a copy of each original next to it
            extensions: File extensions to include
            skip_directories: Directory names to prune

        Returns:
            ConversionSummary for the run
        """
        analysis = self.analyzer.analyze_codebase(directory, extensions, skip_directories)
        candidates = [f.file_path for f in analysis.files if f.has_convertible]
        logger.info(f"{len(candidates)} of {analysis.formik_files} Formik files have convertible patterns")

        outcomes: List[FileConversion] = []
        if candidates:
            workers = min(self.max_workers, len(candidates))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="convert") as pool:
                outcomes = list(pool.map(lambda path: self.convert_file(path, dry_run, backup), candidates))

        warnings: List[str] = []
        for outcome in outcomes:
            if outcome.result is not None:
                warnings.extend(outcome.result.warnings)
            if not outcome.converted:
                warnings.append(f"{outcome.file_path}: {outcome.error or outcome.result.error}")

        summary = ConversionSummary(
            converted=[o.file_path for o in outcomes if o.converted],
            skipped=[o.file_path for o in outcomes if o.error is None and not o.converted],
            failed=[o.file_path for o in outcomes if o.error is not None],
            warnings=list(dict.fromkeys(warnings)),
            files=outcomes,
            dry_run=dry_run,
        )
        logger.info(
            f"Conversion {'dry run ' if dry_run else ''}done: {len(summary.converted)} converted, "
            f"{len(summary.skipped)} skipped, {len(summary.failed)} failed"
        )
        return summary


def convert_codebase(directory: str, dry_run: bool = False, backup: bool = False, **kwargs) -> ConversionSummary:
    """Convert a codebase with default settings. See ``FormikConverter``."""
    return FormikConverter(**kwargs).convert_codebase(directory, dry_run=dry_run, backup=backup)
