"""TypeScript AST parsers using tree-sitter.

tree-sitter-typescript ships two grammars: plain TypeScript, where ``<T>``
is a type assertion, and TSX, where it opens a JSX element. Picking the
wrong one for a file produces parse errors, so each gets its own parser.
"""

import tree_sitter
import tree_sitter_typescript

from .base import BaseLanguageParser

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())


class TypeScriptParser(BaseLanguageParser):
    """tree-sitter based TypeScript parser for ``.ts`` files."""

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE


class TsxParser(TypeScriptParser):
    """TypeScript parser with JSX support for ``.tsx`` files."""

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE
