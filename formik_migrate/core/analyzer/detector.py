"""Pattern detection over a parsed JavaScript/TypeScript tree.

Walks the whole tree once, in document order, and turns every node that
matches a Formik API shape into a classified Pattern:

- ``useFormik(...)`` / ``useField(...)`` calls with a bare identifier callee
- ``<Formik>`` elements
- ``<Field>``, ``<FastField>``, ``<FieldArray>`` and ``<ErrorMessage>`` elements

Detection is a pure read of the tree.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

import tree_sitter

from ..ast_parser import ParsedSource
from ..ast_parser.nodes import (
    callee_name,
    first_argument,
    has_function_child,
    import_source,
    jsx_attributes,
    jsx_tag_name,
    line_of,
    object_entries,
    walk,
)
from ..constants import FORMIK_MODULE
from .classifier import classify
from .models import Location, Pattern, PatternKind

logger = logging.getLogger(__name__)

CALL_KINDS = {
    PatternKind.USE_FORMIK.value: PatternKind.USE_FORMIK,
    PatternKind.USE_FIELD.value: PatternKind.USE_FIELD,
}

ELEMENT_KINDS = {
    PatternKind.FORMIK.value: PatternKind.FORMIK,
    PatternKind.FIELD.value: PatternKind.FIELD,
    PatternKind.FAST_FIELD.value: PatternKind.FAST_FIELD,
    PatternKind.FIELD_ARRAY.value: PatternKind.FIELD_ARRAY,
    PatternKind.ERROR_MESSAGE.value: PatternKind.ERROR_MESSAGE,
}


@dataclass(frozen=True)
class DetectionResult:
    """Patterns found in one file plus whether it imports formik."""
    has_formik: bool
    patterns: Tuple[Pattern, ...]


def hook_config_keys(call: tree_sitter.Node, source: bytes) -> Optional[FrozenSet[str]]:
    """Key set of a hook call's config object, or None if it is not a literal."""
    config = first_argument(call)
    if config is None or config.type != "object":
        return None
    return frozenset(entry.key for entry in object_entries(config, source))


def element_attribute_names(element: tree_sitter.Node, source: bytes) -> FrozenSet[str]:
    """Attribute names of a JSX element.

    A children-as-function body is reported as a ``children`` attribute.
    Spread attributes carry no name and are left out.
    """
    names = {attr.name for attr in jsx_attributes(element, source) if attr.name}
    if has_function_child(element):
        names.add("children")
    return frozenset(names)


class PatternDetector:
    """Finds and classifies Formik usages in a parsed file."""

    def detect(self, parsed: ParsedSource) -> DetectionResult:
        """Detect every Formik pattern in the file.

        Args:
            parsed: Parsed file; a missing tree yields no patterns

        Returns:
            DetectionResult with patterns in document order
        """
        if parsed.tree is None:
            return DetectionResult(has_formik=False, patterns=())

        source = parsed.source
        has_formik = False
        patterns: List[Pattern] = []

        for node in walk(parsed.tree.root_node):
            if node.type == "import_statement":
                if import_source(node, source) == FORMIK_MODULE:
                    has_formik = True

            elif node.type == "call_expression":
                kind = CALL_KINDS.get(callee_name(node, source) or "")
                if kind is None:
                    continue
                keys = hook_config_keys(node, source) if kind is PatternKind.USE_FORMIK else frozenset()
                patterns.append(self._pattern(kind, node, keys, parsed.file_path))

            elif node.type in ("jsx_element", "jsx_self_closing_element"):
                kind = ELEMENT_KINDS.get(jsx_tag_name(node, source) or "")
                if kind is None:
                    continue
                keys = element_attribute_names(node, source)
                patterns.append(self._pattern(kind, node, keys, parsed.file_path))

        logger.debug(f"{parsed.file_path}: {len(patterns)} patterns, formik import={has_formik}")
        return DetectionResult(has_formik=has_formik, patterns=tuple(patterns))

    def _pattern(
        self,
        kind: PatternKind,
        node: tree_sitter.Node,
        keys: Optional[FrozenSet[str]],
        file_path: str,
    ) -> Pattern:
        location = Location(file=file_path, line=line_of(node), column=node.start_point.column)
        return Pattern.from_classification(kind, location, classify(kind, keys))
