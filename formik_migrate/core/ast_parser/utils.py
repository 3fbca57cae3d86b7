"""AST Parser utilities.

Language detection, parser registry, and helper functions.
"""

import os
from typing import Dict, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseLanguageParser

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

# Extensions scanned by default during discovery
DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    "node_modules",
    "dist",
    "build",
    "coverage",
    ".next",
    ".git",
})

# Parser registry, filled lazily
_parser_registry: Dict[str, "BaseLanguageParser"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Detect language from file extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(language: str) -> "BaseLanguageParser":
    """Get a parser instance for the given language.

    Uses a lazy-initialized registry to avoid loading every grammar
    at startup. Parser instances hold no per-parse state, so sharing
    them across worker threads is safe.

    Args:
        language: Language identifier (e.g., "tsx")

    Returns:
        Parser instance

    Raises:
        ValueError: If language is not supported
    """
    if language not in _parser_registry:
        if language == "javascript":
            from .javascript_parser import JavaScriptParser
            _parser_registry["javascript"] = JavaScriptParser()
        elif language == "typescript":
            from .typescript_parser import TypeScriptParser
            _parser_registry["typescript"] = TypeScriptParser()
        elif language == "tsx":
            from .typescript_parser import TsxParser
            _parser_registry["tsx"] = TsxParser()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _parser_registry[language]


def should_skip_directory(dir_name: str, skip_directories: Iterable[str] = SKIP_DIRECTORIES) -> bool:
    """Check if a directory should be skipped during file walking.

    Args:
        dir_name: Directory name (not full path)
        skip_directories: Names to skip in addition to dot-directories

    Returns:
        True if directory should be skipped
    """
    return dir_name in skip_directories or dir_name.startswith(".")


def is_supported_file(file_path: str) -> bool:
    """Check if a file has a supported language extension.

    Args:
        file_path: Path to the file

    Returns:
        True if file type is supported for AST parsing
    """
    return detect_language(file_path) is not None
