"""AST Parser data models.

Defines the structures handed from the tree-sitter layer to the analyzer
and the transformer. These are pure data containers, no parsing logic.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import tree_sitter


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str


@dataclass
class ParsedSource:
    """Complete parse output for a single file.

    Holds the tree-sitter tree together with the exact bytes it was built
    from, so callers can slice node text and regenerate the file.
    """

    file_path: str
    language: str
    source: bytes
    tree: Optional[tree_sitter.Tree]
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when a tree exists and no error was reported."""
        return self.tree is not None and not self.errors

    @property
    def error_message(self) -> Optional[str]:
        """First error as a one-line message, or None."""
        if not self.errors:
            return None
        err = self.errors[0]
        return f"{err.message} (line {err.line})" if err.line else err.message
