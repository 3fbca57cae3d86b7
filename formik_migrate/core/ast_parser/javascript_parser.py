"""JavaScript AST parser using tree-sitter.

The JavaScript grammar understands JSX natively, so ``.js``, ``.jsx``,
``.mjs`` and ``.cjs`` files all go through this parser.
"""

import tree_sitter
import tree_sitter_javascript

from .base import BaseLanguageParser

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


class JavaScriptParser(BaseLanguageParser):
    """tree-sitter based JavaScript (and JSX) parser."""

    def get_language(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE
