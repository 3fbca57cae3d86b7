# Lazy imports so `from formik_migrate.core.ast_parser import ...` does not
# pull in the analyzer and transformer.

__all__ = [
    "FormikAnalyzer",
    "FormikConverter",
    "SafeTransformer",
    "aggregate_analysis",
    "discover_files",
    "parse_file",
    "parse_source",
]

_IMPORT_MAP = {
    "FormikAnalyzer": ".analyzer",
    "aggregate_analysis": ".analyzer",
    "FormikConverter": ".transformer",
    "SafeTransformer": ".transformer",
    "discover_files": ".ingestion",
    "parse_file": ".ast_parser",
    "parse_source": ".ast_parser",
}


def __getattr__(name):
    if name in _IMPORT_MAP:
        import importlib
        module = importlib.import_module(_IMPORT_MAP[name], __package__)
        return getattr(module, name)
    raise AttributeError(f"module 'formik_migrate.core' has no attribute {name}")
