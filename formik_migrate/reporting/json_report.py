"""JSON report."""

import json
from dataclasses import asdict
from enum import Enum
from typing import Any, Dict

from ..core.analyzer import CodebaseAnalysis
from .formatting import OTHER, pattern_breakdown


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def analysis_to_dict(analysis: CodebaseAnalysis) -> Dict[str, Any]:
    """Serialise an analysis to JSON-ready data, enums as their values."""
    data = _plain(asdict(analysis))
    data["patterns"][OTHER] = pattern_breakdown(analysis)[OTHER]
    data["total_patterns"] = analysis.total_patterns
    return data


def generate_json_report(analysis: CodebaseAnalysis) -> str:
    return json.dumps(analysis_to_dict(analysis), indent=2)
