"""
JSON output for tvcheck analyses.

Renders an ``AnalysisResult`` into plain dicts a host can display: every
diagnostic, highlight and edit carries its character offsets plus a 0-based
line/column range resolved through ``PositionIndex`` against the same text
that was analyzed.
"""

import json
from typing import Any, Dict, List, Optional

from .positions import PositionIndex
from .types import AnalysisResult, Diagnostic, Edit, HighlightRange, OffsetRange

# Current protocol version
PROTOCOL_VERSION = "1"
ENGINE_VERSION = "0.1.0"

# JSON Schema for the line/column range attached to every item
RANGE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "startLine": {"type": "integer", "minimum": 0},
        "startCol": {"type": "integer", "minimum": 0},
        "endLine": {"type": "integer", "minimum": 0},
        "endCol": {"type": "integer", "minimum": 0}
    },
    "required": ["startLine", "startCol", "endLine", "endCol"],
    "additionalProperties": False,
    "description": "Line/column range (0-based lines, 0-based columns)"
}


def range_to_dict(span: OffsetRange, positions: PositionIndex) -> Dict[str, int]:
    start_line, start_col = positions.offset_to_line_column(span.start)
    end_line, end_col = positions.offset_to_line_column(span.end)
    return {
        "startLine": start_line,
        "startCol": start_col,
        "endLine": end_line,
        "endCol": end_col,
    }


def diagnostic_to_dict(diagnostic: Diagnostic, positions: PositionIndex) -> Dict[str, Any]:
    return {
        "rule_id": diagnostic.rule_id,
        "message": diagnostic.message,
        "severity": diagnostic.severity,
        "start": diagnostic.range.start,
        "end": diagnostic.range.end,
        "range": range_to_dict(diagnostic.range, positions),
    }


def highlight_to_dict(highlight: HighlightRange, positions: PositionIndex) -> Dict[str, Any]:
    return {
        "rule_id": highlight.rule_id,
        "start": highlight.range.start,
        "end": highlight.range.end,
        "range": range_to_dict(highlight.range, positions),
    }


def edit_to_dict(edit: Edit, positions: PositionIndex) -> Dict[str, Any]:
    return {
        "rule_id": edit.rule_id,
        "start": edit.start,
        "end": edit.end,
        "new_text": edit.new_text,
        "range": range_to_dict(OffsetRange(edit.start, edit.end), positions),
    }


def analysis_to_dict(result: AnalysisResult, text: str,
                     positions: Optional[PositionIndex] = None) -> Dict[str, Any]:
    """
    Convert an analysis to the output protocol.

    Args:
        result: Output of one analysis pass
        text: The exact text that was analyzed
        positions: Prebuilt index for ``text``; built on demand when omitted

    Returns:
        Dict ready for json.dumps
    """
    positions = positions or PositionIndex(text)
    return {
        "tvcheck.protocol": PROTOCOL_VERSION,
        "engine_version": ENGINE_VERSION,
        "diagnostics": [diagnostic_to_dict(d, positions) for d in result.diagnostics],
        "highlights": [highlight_to_dict(h, positions) for h in result.highlights],
        "edits": [edit_to_dict(e, positions) for e in result.edits],
    }


def analysis_to_json(result: AnalysisResult, text: str, indent: Optional[int] = 2) -> str:
    """Serialize an analysis as JSON."""
    return json.dumps(analysis_to_dict(result, text), indent=indent)


def validate_range(range_dict: Dict[str, Any]) -> List[str]:
    """Check a serialized range against RANGE_JSON_SCHEMA; returns error strings."""
    errors = []
    for key in RANGE_JSON_SCHEMA["required"]:
        value = range_dict.get(key)
        if not isinstance(value, int) or value < 0:
            errors.append(f"range.{key} must be a non-negative integer, got {value!r}")
    extra = set(range_dict) - set(RANGE_JSON_SCHEMA["properties"])
    if extra:
        errors.append(f"range has unexpected keys: {sorted(extra)}")
    return errors
