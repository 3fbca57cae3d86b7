"""Conversion result types."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one whole-file conversion attempt.

    On success ``converted_code`` holds the new file text and ``error`` is
    None; on failure it is the other way round. Warnings are advisory and
    never change the outcome.
    """

    success: bool
    converted_code: Optional[str] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.success and (self.converted_code is None or self.error is not None):
            raise ValueError("Successful conversion needs converted_code and no error")
        if not self.success and (self.error is None or self.converted_code is not None):
            raise ValueError("Failed conversion needs an error and no converted_code")

    @classmethod
    def succeeded(cls, code: str, warnings: List[str], changes: List[str]) -> "ConversionResult":
        return cls(success=True, converted_code=code, warnings=list(warnings), changes=list(changes))

    @classmethod
    def failed(cls, error: str, warnings: Optional[List[str]] = None) -> "ConversionResult":
        return cls(success=False, error=error, warnings=list(warnings or []))


@dataclass(frozen=True)
class FileConversion:
    """What happened to one file during a codebase conversion.

    ``error`` is set when the file could not be read or written; ``result``
    is then None unless the transformer itself reported the read failure.
    """

    file_path: str
    result: Optional[ConversionResult] = None
    written: bool = False
    backup_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def converted(self) -> bool:
        return self.result is not None and self.result.success


@dataclass(frozen=True)
class ConversionSummary:
    """Codebase conversion outcome.

    ``skipped`` and ``failed`` files are the ones left for manual review:
    skipped files were refused by the transformer, failed files hit an
    I/O or unexpected error.
    """

    converted: List[str]
    skipped: List[str]
    failed: List[str]
    warnings: List[str]
    files: List[FileConversion]
    dry_run: bool = False

    @property
    def needs_review(self) -> int:
        return len(self.skipped) + len(self.failed)
