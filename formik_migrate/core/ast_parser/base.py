"""Base interface for language-specific AST parsers.

Defines the Strategy pattern base class that all language parsers implement.
Shared parsing logic lives here; grammar selection is delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import tree_sitter

from .models import ParseError, ParsedSource

logger = logging.getLogger(__name__)


class BaseLanguageParser(ABC):
    """Abstract base for language-specific tree-sitter parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'javascript', 'tsx')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    def parse_file(self, file_path: str, strict: bool = False) -> ParsedSource:
        """Read and parse a source file.

        Line endings are kept as they are on disk.

        Args:
            file_path: Path to the source file
            strict: Refuse files that are not valid UTF-8 instead of
                replacing the bad bytes

        Returns:
            ParsedSource; an unreadable file yields one with no tree
            and an error entry.
        """
        try:
            with open(
                file_path, "r", encoding="utf-8",
                errors="strict" if strict else "replace", newline=""
            ) as f:
                source_text = f.read()
        except UnicodeDecodeError as e:
            return self._unreadable(file_path, f"Cannot decode file as UTF-8: {e}")
        except OSError as e:
            return self._unreadable(file_path, str(e))

        return self.parse_source(source_text, file_path)

    def parse_source(self, source_text: str, file_path: str) -> ParsedSource:
        """Parse source code string into a ParsedSource.

        Args:
            source_text: Source code as string
            file_path: File identifier (for metadata only)

        Returns:
            ParsedSource with the tree and any parse errors
        """
        errors: List[ParseError] = []
        source_bytes = source_text.encode("utf-8")
        line_count = len(source_text.split("\n")) if source_text else 0

        # Create parser and parse
        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        # tree-sitter always recovers; a flagged root means the file is not valid syntax
        if tree.root_node.has_error:
            bad = self._first_error_node(tree.root_node)
            line = bad.start_point.row + 1 if bad is not None else 0
            errors.append(
                ParseError(
                    file_path=file_path,
                    line=line,
                    message="Tree-sitter reported parse errors in file",
                )
            )
            logger.debug(f"Parse errors in {file_path} near line {line}")

        return ParsedSource(
            file_path=file_path,
            language=self.get_language(),
            source=source_bytes,
            tree=tree,
            line_count=line_count,
            errors=errors,
        )

    def _first_error_node(self, node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        """Locate the first ERROR or MISSING node in document order."""
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                return current
            if current.has_error:
                stack.extend(reversed(current.children))
        return None

    def _unreadable(self, file_path: str, message: str) -> ParsedSource:
        return ParsedSource(
            file_path=file_path,
            language=self.get_language(),
            source=b"",
            tree=None,
            errors=[ParseError(file_path=file_path, line=0, message=message)],
        )
