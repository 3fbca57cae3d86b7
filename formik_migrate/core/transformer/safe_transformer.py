"""Safe transformer: rewrites only Formik usages it can prove equivalent.

Conversion is all-or-nothing per file and runs in two phases:

1. **Check**: every ``useFormik`` call is re-examined against the
   allow-list, directly on the tree. A single unsafe call fails the whole
   file before anything is rewritten.
2. **Commit**: one walk over the tree records node replacements for the
   formik import, every ``useFormik`` call and every plain ``<Field>``;
   the file text is then regenerated in a single pass.

There is no partial state to roll back: phase 1 has no side effects and
phase 2 only runs once phase 1 has passed.
"""

import logging
from typing import List, Optional

import tree_sitter

from ..ast_parser import ParsedSource, SourceRewriter, detect_language, get_parser
from ..ast_parser.nodes import (
    callee_name,
    first_argument,
    has_content_children,
    has_function_child,
    import_clause,
    import_source,
    import_specifiers,
    is_type_only_import,
    jsx_attributes,
    jsx_tag_name,
    line_of,
    named_imports,
    node_text,
    object_entries,
    string_value,
    walk,
)
from ..constants import (
    DEFAULT_INPUT_TYPE,
    DEFAULT_VALUES,
    FIELD_COMPONENT,
    FIELD_CUSTOM_RENDER_ATTRIBUTES,
    FORMIK_MODULE,
    HOOK_MAX_SAFE_KEYS,
    HOOK_SAFE_KEYS,
    INITIAL_VALUES,
    NATIVE_INPUT_TAG,
    REGISTER_FUNCTION,
    RESOLVER,
    RHF_EXPORTS,
    RHF_MODULE,
    SCHEMA_RESOLVER,
    SCHEMA_RESOLVER_IMPORT,
    USE_FORM,
    USE_FORMIK,
    VALIDATION_SCHEMA,
)
from .models import ConversionResult

logger = logging.getLogger(__name__)

CANNOT_READ_PREFIX = "Cannot read file"
UNSAFE_FILE_ERROR = "File contains complex patterns that need manual review"

_RENAMED_KEYS = (INITIAL_VALUES, VALIDATION_SCHEMA)


def unsafe_hook_reason(call: tree_sitter.Node, source: bytes) -> Optional[str]:
    """Why a ``useFormik`` call cannot be rewritten, or None if it can.

    Uses the same allow-list as the classifier's simple tier, evaluated
    on the tree itself.
    """
    config = first_argument(call)
    if config is None or config.type != "object":
        return "non-standard configuration object"

    entries = object_entries(config, source)
    keys = frozenset(entry.key for entry in entries)
    if not keys <= HOOK_SAFE_KEYS or len(keys) > HOOK_MAX_SAFE_KEYS:
        return "unsupported options: " + ", ".join(sorted(keys - HOOK_SAFE_KEYS))

    for entry in entries:
        if entry.kind == "method" and entry.key in _RENAMED_KEYS:
            return f"{entry.key} declared as a method"
    return None


def _binds_use_form(parsed: ParsedSource) -> bool:
    """True if an existing react-hook-form import already binds ``useForm``."""
    for node in walk(parsed.tree.root_node):
        if node.type != "import_statement" or is_type_only_import(node):
            continue
        if import_source(node, parsed.source) != RHF_MODULE:
            continue
        if any(
            spec.name == USE_FORM and not spec.alias
            for spec in import_specifiers(node, parsed.source)
        ):
            return True
    return False


class _Rewrite:
    """Mutable state for one commit phase."""

    def __init__(self, parsed: ParsedSource, retain_lines: bool):
        self.source = parsed.source
        self.rewriter = SourceRewriter(parsed, retain_lines=retain_lines)
        self.warnings: List[str] = []
        self.changes: List[str] = []
        self.resolver_used = False
        self.use_form_imported = False


class SafeTransformer:
    """Converts Formik code to React Hook Form, safe patterns only.

    Instances hold no per-file state and may be shared between threads.
    """

    def __init__(self, retain_lines: bool = True):
        self.retain_lines = retain_lines

    # ── Public entry points ──────────────────────────────────────────

    def transform_source(self, source_text: str, file_path: str) -> ConversionResult:
        """Convert source text. No I/O."""
        language = detect_language(file_path)
        if not language:
            return ConversionResult.failed(f"Unsupported file type: {file_path}")
        return self.transform_parsed(get_parser(language).parse_source(source_text, file_path))

    def transform_file(self, file_path: str) -> ConversionResult:
        """Read and convert a file. Nothing is written.

        Files that are not valid UTF-8 fail instead of being decoded lossily.
        """
        language = detect_language(file_path)
        if not language:
            return ConversionResult.failed(f"Unsupported file type: {file_path}")
        return self.transform_parsed(get_parser(language).parse_file(file_path, strict=True))

    def transform_parsed(self, parsed: ParsedSource) -> ConversionResult:
        """Attempt a whole-file conversion.

        Args:
            parsed: Parsed file

        Returns:
            ConversionResult carrying the new text on success, or the
            reason the file was left alone
        """
        if parsed.tree is None:
            return ConversionResult.failed(f"{CANNOT_READ_PREFIX}: {parsed.error_message}")
        if not parsed.ok:
            return ConversionResult.failed(f"Parse error: {parsed.error_message}")

        # Phase 1: check
        warnings = []
        for node in walk(parsed.tree.root_node):
            if node.type == "call_expression" and callee_name(node, parsed.source) == USE_FORMIK:
                reason = unsafe_hook_reason(node, parsed.source)
                if reason:
                    warnings.append(
                        f"Complex useFormik pattern at line {line_of(node)} ({reason}) "
                        f"- skipping auto-conversion"
                    )
        if warnings:
            logger.info(f"Skipping {parsed.file_path}: {len(warnings)} unsafe useFormik call(s)")
            return ConversionResult.failed(UNSAFE_FILE_ERROR, warnings)

        # Phase 2: commit
        state = _Rewrite(parsed, self.retain_lines)
        state.use_form_imported = _binds_use_form(parsed)
        stack = [parsed.tree.root_node]
        while stack:
            node = stack.pop()
            if self._visit(node, state):
                continue
            stack.extend(reversed(node.children))

        if state.rewriter.has_edits:
            code = state.rewriter.render()
        else:
            code = parsed.source.decode("utf-8", errors="replace")
        logger.info(f"Converted {parsed.file_path}: {len(state.changes)} change(s)")
        return ConversionResult.succeeded(
            code,
            warnings=list(dict.fromkeys(state.warnings)),
            changes=state.changes,
        )

    # ── Private helpers ──────────────────────────────────────────────

    def _visit(self, node: tree_sitter.Node, state: _Rewrite) -> bool:
        """Record replacements for one node.

        Returns:
            True when the whole node was replaced and its subtree must
            not be visited
        """
        if node.type == "import_statement":
            if import_source(node, state.source) == FORMIK_MODULE:
                self._rewrite_import(node, state)
        elif node.type == "call_expression":
            if callee_name(node, state.source) == USE_FORMIK:
                self._rewrite_hook(node, state)
        elif node.type in ("jsx_element", "jsx_self_closing_element"):
            if jsx_tag_name(node, state.source) == FIELD_COMPONENT:
                return self._rewrite_field(node, state)
        return False

    def _rewrite_import(self, statement: tree_sitter.Node, state: _Rewrite) -> None:
        """``import { useFormik, Field, X } from 'formik'`` → ``import { useForm, X } from 'react-hook-form'``."""
        source = state.source
        line = line_of(statement)
        type_only = is_type_only_import(statement)

        module = statement.child_by_field_name("source")
        quote = node_text(module, source)[0]
        state.rewriter.replace(module, f"{quote}{RHF_MODULE}{quote}")

        specifiers: List[str] = []
        for spec in import_specifiers(statement, source):
            if spec.name == USE_FORMIK:
                if spec.alias:
                    specifiers.append(f"{USE_FORM} as {spec.alias}")
                elif not state.use_form_imported:
                    specifiers.append(USE_FORM)
                    state.use_form_imported = not type_only
            elif spec.name == FIELD_COMPONENT:
                continue
            else:
                specifiers.append(node_text(spec.node, source))
                if spec.name == USE_FORM and not spec.alias and not type_only:
                    state.use_form_imported = True
                if spec.name not in RHF_EXPORTS:
                    state.warnings.append(
                        f"'{spec.name}' (line {line}) is not exported by {RHF_MODULE}; update its import by hand"
                    )

        needs_use_form = not type_only and not state.use_form_imported
        names = named_imports(statement)
        clause = import_clause(statement)

        if names is not None:
            if needs_use_form:
                specifiers.insert(0, USE_FORM)
                state.use_form_imported = True
            state.rewriter.replace(names, "{ " + ", ".join(specifiers) + " }" if specifiers else "{}")
        elif clause is not None:
            default = next((c for c in clause.named_children if c.type == "identifier"), None)
            namespace = next((c for c in clause.named_children if c.type == "namespace_import"), None)
            if default is not None:
                state.warnings.append(
                    f"Default import '{node_text(default, source)}' (line {line}) has no "
                    f"{RHF_MODULE} equivalent; update it by hand"
                )
            if namespace is not None:
                state.warnings.append(
                    f"Namespace import from {FORMIK_MODULE} (line {line}) kept; "
                    f"add {USE_FORM} to the import by hand"
                )
            elif default is not None and needs_use_form:
                state.rewriter.replace(default, node_text(default, source), f", {{ {USE_FORM} }}")
                state.use_form_imported = True

        state.changes.append(f"Updated imports from {FORMIK_MODULE} to {RHF_MODULE}")

    def _rewrite_hook(self, call: tree_sitter.Node, state: _Rewrite) -> None:
        """``useFormik({ initialValues, validationSchema })`` → ``useForm({ defaultValues, resolver })``."""
        rewriter = state.rewriter
        rewriter.replace(call.child_by_field_name("function"), USE_FORM)

        for entry in object_entries(first_argument(call), state.source):
            if entry.key == INITIAL_VALUES:
                if entry.kind == "shorthand":
                    rewriter.replace(entry.node, f"{DEFAULT_VALUES}: {INITIAL_VALUES}")
                else:
                    rewriter.replace(entry.key_node, DEFAULT_VALUES)

            elif entry.key == VALIDATION_SCHEMA:
                if entry.kind == "shorthand":
                    rewriter.replace(entry.node, f"{RESOLVER}: {SCHEMA_RESOLVER}({VALIDATION_SCHEMA})")
                else:
                    rewriter.replace(entry.key_node, RESOLVER)
                    rewriter.replace(entry.value, f"{SCHEMA_RESOLVER}(", entry.value, ")")
                if not state.resolver_used:
                    state.resolver_used = True
                    state.warnings.append(f"Add: {SCHEMA_RESOLVER_IMPORT}")

        state.changes.append(f"Converted {USE_FORMIK}() to {USE_FORM}() at line {line_of(call)}")

    def _rewrite_field(self, element: tree_sitter.Node, state: _Rewrite) -> bool:
        """``<Field name="email" type="email" />`` → ``<input {...register("email")} type="email" />``.

        Returns:
            True if the element was replaced
        """
        source = state.source
        line = line_of(element)
        attributes = jsx_attributes(element, source)
        names = [attr.name for attr in attributes if attr.name]

        if set(names) & FIELD_CUSTOM_RENDER_ATTRIBUTES or has_function_child(element):
            state.warnings.append(f"Complex <Field> pattern at line {line} - needs manual review")
            return False
        if any(attr.name is None for attr in attributes):
            state.warnings.append(f"<Field> with spread props at line {line} - needs manual review")
            return False
        if has_content_children(element, source):
            state.warnings.append(f"<Field> with children at line {line} - needs manual review")
            return False

        name_attr = next((a for a in attributes if a.name == "name"), None)
        if name_attr is None or string_value(name_attr.value, source) is None:
            state.warnings.append(f"<Field> without a literal name at line {line} - skipped")
            return False

        type_attr = next((a for a in attributes if a.name == "type"), None)
        if type_attr is not None and string_value(type_attr.value, source) is None:
            state.warnings.append(f"<Field> with a computed type at line {line} - skipped")
            return False

        name_literal = node_text(name_attr.value, source)
        type_literal = node_text(type_attr.value, source) if type_attr else f'"{DEFAULT_INPUT_TYPE}"'

        dropped = [n for n in dict.fromkeys(names) if n not in ("name", "type")]
        if dropped:
            state.warnings.append(
                f"<Field name={name_literal}> at line {line}: dropped attributes {', '.join(dropped)}"
            )

        state.rewriter.replace(
            element,
            f"<{NATIVE_INPUT_TAG} {{...{REGISTER_FUNCTION}({name_literal})}} type={type_literal} />",
        )
        state.changes.append(
            f"Converted <Field name={name_literal}> to native input with {REGISTER_FUNCTION}() at line {line}"
        )
        return True
