"""Complexity classification for detected Formik patterns.

Classification is a pure function of the *set of keys* a pattern is
configured with: the keys of the ``useFormik`` config object or the
attribute names of a JSX element. No tree access happens here, so every
rule is unit-testable on plain sets.

The decision tables below are data. Adding a key to an allow-list or a
deny-list is a one-line change.
"""

from typing import AbstractSet, Callable, Dict, Optional, Tuple

from ..constants import (
    ENABLE_REINITIALIZE,
    FIELD_CUSTOM_RENDER_ATTRIBUTES,
    HOOK_MAX_SAFE_KEYS,
    HOOK_SAFE_KEYS,
    RENDER_PROP_ATTRIBUTES,
    VALIDATE,
    VALIDATE_ON_BLUR,
    VALIDATE_ON_CHANGE,
)
from .models import Classification, Complexity, PatternKind

# ── Decision tables ──────────────────────────────────────────────────

# useFormik keys that rule out automatic conversion, checked in order;
# the first one present supplies the reason.
HOOK_DENY_RULES: Tuple[Tuple[str, str], ...] = (
    (VALIDATE, "Custom validate function (convert to Zod/Yup schema)"),
    (ENABLE_REINITIALIZE, "Uses enableReinitialize (different pattern in React Hook Form)"),
    (VALIDATE_ON_CHANGE, "Custom validation triggers (adjust mode in React Hook Form)"),
    (VALIDATE_ON_BLUR, "Custom validation triggers (adjust mode in React Hook Form)"),
)

HOOK_NON_LITERAL_REASON = "Non-standard configuration object"
HOOK_REVIEW_REASON = "Complex configuration needs review"

# <Formik> attributes that make the wrapper complex
WRAPPER_DENY_RULES: Tuple[Tuple[str, str], ...] = (
    (VALIDATE, "Custom validate function on <Formik> (convert to Zod/Yup schema)"),
    (VALIDATE_ON_CHANGE, "Custom validation triggers on <Formik> (adjust mode in React Hook Form)"),
    (VALIDATE_ON_BLUR, "Custom validation triggers on <Formik> (adjust mode in React Hook Form)"),
)

WRAPPER_RENDER_REASON = "Complex render patterns need manual review"
FIELD_RENDER_REASON = "Custom render/component prop needs adjustment"
ERROR_MESSAGE_REASON = "Render errors from formState.errors instead of <ErrorMessage>"
USE_FIELD_REASON = "useField maps to useController; convert by hand"

SIMPLE = Classification(Complexity.SIMPLE)


def classify_hook(keys: Optional[AbstractSet[str]]) -> Classification:
    """Classify a ``useFormik`` call by its configuration keys.

    Args:
        keys: Keys of the config object literal, or None when the first
            argument is not an object literal at all

    Returns:
        Classification with a reason whenever the call is not simple
    """
    if keys is None:
        return Classification(Complexity.COMPLEX, HOOK_NON_LITERAL_REASON)

    if keys <= HOOK_SAFE_KEYS and len(keys) <= HOOK_MAX_SAFE_KEYS:
        return SIMPLE

    for key, reason in HOOK_DENY_RULES:
        if key in keys:
            return Classification(Complexity.COMPLEX, reason)

    return Classification(Complexity.MEDIUM, HOOK_REVIEW_REASON)


def classify_wrapper(attributes: AbstractSet[str]) -> Classification:
    """Classify a ``<Formik>`` element by its attribute names.

    A children-as-function body is reported by the detector as a
    ``children`` attribute, so it lands in the render-prop rule.
    """
    if attributes & RENDER_PROP_ATTRIBUTES:
        return Classification(Complexity.MEDIUM, WRAPPER_RENDER_REASON)

    for key, reason in WRAPPER_DENY_RULES:
        if key in attributes:
            return Classification(Complexity.COMPLEX, reason)

    return SIMPLE


def classify_field(attributes: AbstractSet[str]) -> Classification:
    """Classify a ``<Field>``, ``<FastField>`` or ``<FieldArray>`` element."""
    if attributes & FIELD_CUSTOM_RENDER_ATTRIBUTES:
        return Classification(Complexity.MEDIUM, FIELD_RENDER_REASON)
    return SIMPLE


def _always(reason: str) -> Callable[[AbstractSet[str]], Classification]:
    def classify(_keys: AbstractSet[str]) -> Classification:
        return Classification(Complexity.MEDIUM, reason)
    return classify


CLASSIFIERS: Dict[PatternKind, Callable[..., Classification]] = {
    PatternKind.USE_FORMIK: classify_hook,
    PatternKind.FORMIK: classify_wrapper,
    PatternKind.FIELD: classify_field,
    PatternKind.FAST_FIELD: classify_field,
    PatternKind.FIELD_ARRAY: classify_field,
    PatternKind.ERROR_MESSAGE: _always(ERROR_MESSAGE_REASON),
    PatternKind.USE_FIELD: _always(USE_FIELD_REASON),
}


def classify(kind: PatternKind, keys: Optional[AbstractSet[str]]) -> Classification:
    """Classify any detected pattern kind.

    Args:
        kind: Pattern kind
        keys: Configuration keys or attribute names; None only for a
            ``useFormik`` call without an object literal argument

    Returns:
        Classification for the pattern
    """
    if keys is None and kind is not PatternKind.USE_FORMIK:
        keys = frozenset()
    return CLASSIFIERS[kind](keys)
