"""Shared constants for formik-migrate.

API names on both sides of the migration, the configuration keys the
classifier and transformer reason about, and the planning constants used
for effort estimates.
"""

# =============================================================================
# Target / replacement API names
# =============================================================================

FORMIK_MODULE = "formik"
RHF_MODULE = "react-hook-form"

USE_FORMIK = "useFormik"
USE_FORM = "useForm"
USE_FIELD = "useField"

FORMIK_COMPONENT = "Formik"
FIELD_COMPONENT = "Field"
FAST_FIELD_COMPONENT = "FastField"
FIELD_ARRAY_COMPONENT = "FieldArray"
ERROR_MESSAGE_COMPONENT = "ErrorMessage"

NATIVE_INPUT_TAG = "input"
REGISTER_FUNCTION = "register"
DEFAULT_INPUT_TYPE = "text"

# Schema adapter wrapped around validationSchema values
SCHEMA_RESOLVER = "yupResolver"
SCHEMA_RESOLVER_IMPORT = 'import { yupResolver } from "@hookform/resolvers/yup"'

# Names react-hook-form exports; anything else kept on a rewritten import is flagged
RHF_EXPORTS = frozenset({
    "useForm",
    "useController",
    "useFieldArray",
    "useFormContext",
    "useFormState",
    "useWatch",
    "Controller",
    "FormProvider",
    "Form",
    "get",
    "set",
    "appendErrors",
})

# =============================================================================
# Configuration keys
# =============================================================================

INITIAL_VALUES = "initialValues"
ON_SUBMIT = "onSubmit"
VALIDATION_SCHEMA = "validationSchema"
VALIDATE = "validate"
VALIDATE_ON_CHANGE = "validateOnChange"
VALIDATE_ON_BLUR = "validateOnBlur"
ENABLE_REINITIALIZE = "enableReinitialize"

DEFAULT_VALUES = "defaultValues"
RESOLVER = "resolver"

# useFormik configs made only of these keys are safe to rewrite
HOOK_SAFE_KEYS = frozenset({INITIAL_VALUES, ON_SUBMIT, VALIDATION_SCHEMA})
HOOK_MAX_SAFE_KEYS = 3

# Attributes that hand rendering to user code
RENDER_PROP_ATTRIBUTES = frozenset({"render", "component", "children"})
FIELD_CUSTOM_RENDER_ATTRIBUTES = RENDER_PROP_ATTRIBUTES | {"as"}

# =============================================================================
# Effort estimates (planning heuristics, not measurements)
# =============================================================================

# Hours of manual migration work per pattern, by complexity
HOURS_PER_PATTERN = {
    "simple": 0.25,
    "medium": 0.5,
    "complex": 1.5,
}

# Share of manual time the tool removes: automated patterns are costed
# at the simple rate, flagged ones at the medium rate
AUTOMATED_HOURS = 0.25
AUTOMATED_SAVINGS_RATE = 0.8
REVIEWED_HOURS = 0.5
REVIEWED_SAVINGS_RATE = 0.3

# Per-file effort tier thresholds
HIGH_EFFORT_COMPLEX_PATTERNS = 2
HIGH_EFFORT_LINES = 500
MEDIUM_EFFORT_MEDIUM_PATTERNS = 3
MEDIUM_EFFORT_LINES = 200
