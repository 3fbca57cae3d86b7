"""Formik → React Hook Form conversion.

Public API:
    SafeTransformer().transform_source(source, path) → ConversionResult
    FormikConverter().convert_codebase(directory) → ConversionSummary
    convert_codebase(directory, dry_run, backup) → ConversionSummary
"""

from .models import ConversionResult, ConversionSummary, FileConversion
from .safe_transformer import SafeTransformer, unsafe_hook_reason
from .service import FormikConverter, convert_codebase

__all__ = [
    "SafeTransformer",
    "unsafe_hook_reason",
    "FormikConverter",
    "convert_codebase",
    "ConversionResult",
    "ConversionSummary",
    "FileConversion",
]
