"""formik-migrate AST Parser: tree-sitter based parsing and regeneration.

Public API:
    parse_file(path) → ParsedSource
    parse_source(source, file_path, language) → ParsedSource
    detect_language(file_path) → str | None
    SourceRewriter(parsed) → node replacements + render()
"""

from .models import ParseError, ParsedSource
from .printer import SourceRewriter
from .utils import (
    DEFAULT_EXTENSIONS,
    SKIP_DIRECTORIES,
    detect_language,
    get_parser,
    is_supported_file,
    should_skip_directory,
)

__all__ = [
    "parse_file",
    "parse_source",
    "detect_language",
    "get_parser",
    "is_supported_file",
    "should_skip_directory",
    "DEFAULT_EXTENSIONS",
    "SKIP_DIRECTORIES",
    "ParseError",
    "ParsedSource",
    "SourceRewriter",
]


def parse_file(file_path: str) -> ParsedSource:
    """Parse a source file into a tree-sitter tree.

    Detects language from file extension and uses the matching grammar.

    Args:
        file_path: Path to the source file

    Returns:
        ParsedSource for the file

    Raises:
        ValueError: If the extension has no grammar
    """
    language = detect_language(file_path)
    if not language:
        raise ValueError(f"Unsupported file type: {file_path}")
    return get_parser(language).parse_file(file_path)


def parse_source(source_text: str, file_path: str, language: str | None = None) -> ParsedSource:
    """Parse source code string into a tree-sitter tree.

    Args:
        source_text: Source code as string
        file_path: File identifier (for metadata and language detection)
        language: Language identifier. If None, detected from file_path.

    Returns:
        ParsedSource for the text

    Raises:
        ValueError: If no grammar matches
    """
    if language is None:
        language = detect_language(file_path)
    if not language:
        raise ValueError(f"Unsupported file type: {file_path}")
    return get_parser(language).parse_source(source_text, file_path)
