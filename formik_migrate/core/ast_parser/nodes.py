"""Node-level helpers for the JavaScript/TypeScript tree-sitter grammars.

Small read-only views over the shapes the analyzer and transformer care
about: object literal entries, JSX elements and their attributes, and
import declarations. Every helper takes the source bytes explicitly
because tree-sitter nodes only carry byte offsets.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

import tree_sitter

# Key recorded for object entries that have no static name
# (spread elements, computed keys). Never part of any allow-list.
NON_LITERAL_KEY = "..."

_FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "function"})


@dataclass(frozen=True)
class ObjectEntry:
    """One entry of an object literal."""

    key: str
    kind: str  # "pair" | "shorthand" | "method" | "other"
    node: tree_sitter.Node
    key_node: Optional[tree_sitter.Node] = None
    value: Optional[tree_sitter.Node] = None


@dataclass(frozen=True)
class JsxAttribute:
    """One attribute of a JSX opening or self-closing element.

    ``name`` is None for spread attributes (``{...props}``).
    """

    name: Optional[str]
    node: tree_sitter.Node
    value: Optional[tree_sitter.Node] = None


@dataclass(frozen=True)
class ImportSpecifier:
    """A named import, e.g. ``useFormik`` or ``useFormik as useF``."""

    name: str
    alias: Optional[str]
    node: tree_sitter.Node


def node_text(node: tree_sitter.Node, source: bytes) -> str:
    """Return the exact source text covered by a node."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def string_value(node: Optional[tree_sitter.Node], source: bytes) -> Optional[str]:
    """Return the contents of a string literal node without its quotes."""
    if node is None or node.type != "string":
        return None
    text = node_text(node, source)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return None


def walk(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield every node under ``root`` (inclusive) in document order.

    Iterative so that deeply nested or minified files cannot exhaust
    the interpreter's recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def first_named_child(node: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
    """First named child that is not a comment."""
    if node is None:
        return None
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def line_of(node: tree_sitter.Node) -> int:
    """1-based line number of a node."""
    return node.start_point.row + 1


# ── Calls and object literals ────────────────────────────────────────


def callee_name(call: tree_sitter.Node, source: bytes) -> Optional[str]:
    """Name of a call's callee when it is a bare identifier."""
    function = call.child_by_field_name("function")
    if function is None or function.type != "identifier":
        return None
    return node_text(function, source)


def first_argument(call: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """First argument of a call expression, skipping comments."""
    return first_named_child(call.child_by_field_name("arguments"))


def object_entries(obj: tree_sitter.Node, source: bytes) -> List[ObjectEntry]:
    """List the entries of an ``object`` node in source order.

    Pairs with identifier, string or number keys and shorthand properties
    carry their key name; methods carry their method name. Spread
    elements and computed keys are recorded under ``NON_LITERAL_KEY``.
    """
    entries: List[ObjectEntry] = []
    for child in obj.named_children:
        if child.type == "comment":
            continue
        if child.type == "pair":
            key_node = child.child_by_field_name("key")
            value = child.child_by_field_name("value")
            entries.append(ObjectEntry(
                key=_property_key(key_node, source),
                kind="pair",
                node=child,
                key_node=key_node,
                value=value,
            ))
        elif child.type == "shorthand_property_identifier":
            entries.append(ObjectEntry(
                key=node_text(child, source),
                kind="shorthand",
                node=child,
                key_node=child,
                value=child,
            ))
        elif child.type == "method_definition":
            name_node = child.child_by_field_name("name")
            entries.append(ObjectEntry(
                key=_property_key(name_node, source),
                kind="method",
                node=child,
                key_node=name_node,
            ))
        else:
            entries.append(ObjectEntry(key=NON_LITERAL_KEY, kind="other", node=child))
    return entries


def _property_key(key_node: Optional[tree_sitter.Node], source: bytes) -> str:
    if key_node is None:
        return NON_LITERAL_KEY
    if key_node.type in ("property_identifier", "identifier", "number"):
        return node_text(key_node, source)
    if key_node.type == "string":
        return string_value(key_node, source) or NON_LITERAL_KEY
    return NON_LITERAL_KEY


# ── JSX ──────────────────────────────────────────────────────────────


def jsx_opening(element: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """The node holding the tag name and attributes of a JSX element."""
    if element.type == "jsx_self_closing_element":
        return element
    if element.type == "jsx_element":
        open_tag = element.child_by_field_name("open_tag")
        if open_tag is None:
            open_tag = next(
                (c for c in element.named_children if c.type == "jsx_opening_element"), None
            )
        return open_tag
    return None


def jsx_tag_name(element: tree_sitter.Node, source: bytes) -> Optional[str]:
    """Tag name of a JSX element when it is a plain identifier.

    Member tags (``<Formik.Field>``) and namespaced tags are not matched.
    """
    opening = jsx_opening(element)
    if opening is None:
        return None
    name = opening.child_by_field_name("name")
    if name is None or name.type != "identifier":
        return None
    return node_text(name, source)


def jsx_attributes(element: tree_sitter.Node, source: bytes) -> List[JsxAttribute]:
    """Attributes of a JSX element in source order."""
    opening = jsx_opening(element)
    if opening is None:
        return []
    attributes: List[JsxAttribute] = []
    for child in opening.named_children:
        if child.type == "jsx_attribute":
            parts = [c for c in child.named_children if c.type != "comment"]
            if not parts:
                continue
            name = node_text(parts[0], source)
            value = parts[1] if len(parts) > 1 else None
            attributes.append(JsxAttribute(name=name, node=child, value=value))
        elif child.type == "jsx_expression":
            # {...props}
            attributes.append(JsxAttribute(name=None, node=child))
    return attributes


def jsx_children(element: tree_sitter.Node) -> List[tree_sitter.Node]:
    """Child nodes between the opening and closing tags."""
    if element.type != "jsx_element":
        return []
    return [
        c for c in element.named_children
        if c.type not in ("jsx_opening_element", "jsx_closing_element")
    ]


def has_function_child(element: tree_sitter.Node) -> bool:
    """True when the element renders through a children-as-function."""
    for child in jsx_children(element):
        if child.type == "jsx_expression":
            inner = first_named_child(child)
            if inner is not None and inner.type in _FUNCTION_TYPES:
                return True
    return False


def has_content_children(element: tree_sitter.Node, source: bytes) -> bool:
    """True when the element has any child other than whitespace text."""
    for child in jsx_children(element):
        if child.type == "jsx_text" and not node_text(child, source).strip():
            continue
        return True
    return False


# ── Imports ──────────────────────────────────────────────────────────


def import_source(statement: tree_sitter.Node, source: bytes) -> Optional[str]:
    """Module name an import statement pulls from."""
    return string_value(statement.child_by_field_name("source"), source)


def import_clause(statement: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    return next((c for c in statement.named_children if c.type == "import_clause"), None)


def is_type_only_import(statement: tree_sitter.Node) -> bool:
    """True for TypeScript ``import type { ... }`` statements."""
    return any(not c.is_named and c.type == "type" for c in statement.children)


def named_imports(statement: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """The ``{ ... }`` list of an import statement, if any."""
    clause = import_clause(statement)
    if clause is None:
        return None
    return next((c for c in clause.named_children if c.type == "named_imports"), None)


def import_specifiers(statement: tree_sitter.Node, source: bytes) -> List[ImportSpecifier]:
    """Named specifiers of an import statement in source order."""
    names = named_imports(statement)
    if names is None:
        return []
    specifiers: List[ImportSpecifier] = []
    for spec in names.named_children:
        if spec.type != "import_specifier":
            continue
        name_node = spec.child_by_field_name("name")
        alias_node = spec.child_by_field_name("alias")
        if name_node is None:
            continue
        specifiers.append(ImportSpecifier(
            name=node_text(name_node, source),
            alias=node_text(alias_node, source) if alias_node is not None else None,
            node=spec,
        ))
    return specifiers
