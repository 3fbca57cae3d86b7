"""Source regeneration from a tree plus node replacements.

tree-sitter trees are immutable, so a rewrite is expressed as a set of
replacement nodes: each replaced node maps to a sequence of parts, where
a part is either literal text or an original node to be emitted in its
place (recursively, so replacements may nest). ``render()`` then walks
the tree once and produces the new file text.

Usage:
    rewriter = SourceRewriter(parsed)
    rewriter.replace(callee, "useForm")
    rewriter.replace(value, "yupResolver(", value, ")")
    new_code = rewriter.render()
"""

import logging
from typing import Dict, List, Sequence, Tuple, Union

import tree_sitter

from .models import ParsedSource

logger = logging.getLogger(__name__)

Part = Union[str, tree_sitter.Node]


class SourceRewriter:
    """Collects node replacements and regenerates the file text.

    Untouched spans are copied byte-for-byte, so formatting and comments
    outside replaced nodes survive unchanged.

    Attributes:
        retain_lines: Pad replacements that shrink line count with
            newlines so every following line keeps its line number
    """

    def __init__(self, parsed: ParsedSource, retain_lines: bool = True):
        if parsed.tree is None:
            raise ValueError(f"No syntax tree for {parsed.file_path}")
        self._source = parsed.source
        self._root = parsed.tree.root_node
        self.retain_lines = retain_lines
        self._edits: Dict[int, List[Part]] = {}
        self._spans: List[Tuple[int, int]] = []
        self._newline = b"\r\n" if b"\r\n" in self._source else b"\n"

    @property
    def has_edits(self) -> bool:
        return bool(self._edits)

    def replace(self, node: tree_sitter.Node, *parts: Part) -> None:
        """Replace ``node`` with the concatenation of ``parts``.

        Raises:
            ValueError: If the node already has a replacement
        """
        if node.id in self._edits:
            raise ValueError(
                f"{node.type} at line {node.start_point.row + 1} is already replaced"
            )
        self._edits[node.id] = list(parts)
        self._spans.append((node.start_byte, node.end_byte))

    def render(self) -> str:
        """Regenerate the full source text."""
        logger.debug(f"Rendering {len(self._edits)} replacements")
        out = bytearray(self._source[:self._root.start_byte])
        out += self._emit(self._root)
        out += self._source[self._root.end_byte:]
        return out.decode("utf-8", errors="replace")

    # ── Private helpers ──────────────────────────────────────────────

    def _emit(self, node: tree_sitter.Node) -> bytes:
        if node.id in self._edits:
            return self._emit_replacement(node, self._edits[node.id])
        return self._emit_original(node)

    def _emit_original(self, node: tree_sitter.Node) -> bytes:
        """Emit a node's own text, applying replacements below it."""
        if not node.children or not self._touches(node):
            return self._source[node.start_byte:node.end_byte]

        out = bytearray()
        cursor = node.start_byte
        for child in node.children:
            out += self._source[cursor:child.start_byte]
            out += self._emit(child)
            cursor = child.end_byte
        out += self._source[cursor:node.end_byte]
        return bytes(out)

    def _emit_replacement(self, node: tree_sitter.Node, parts: Sequence[Part]) -> bytes:
        out = bytearray()
        for part in parts:
            if isinstance(part, str):
                out += part.encode("utf-8")
            elif part.id == node.id:
                # wrapping a node in new text: emit it as it was
                out += self._emit_original(part)
            else:
                out += self._emit(part)

        if self.retain_lines:
            missing = self._source.count(b"\n", node.start_byte, node.end_byte) - out.count(b"\n")
            if missing > 0:
                out += self._newline * missing
        return bytes(out)

    def _touches(self, node: tree_sitter.Node) -> bool:
        """True if any replaced node lies inside ``node``."""
        start, end = node.start_byte, node.end_byte
        return any(start <= s and e <= end for s, e in self._spans)
