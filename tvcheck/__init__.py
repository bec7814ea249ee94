"""
tvcheck: style and safety checks for TypeScript and TSX sources.

    from tvcheck import analyze, apply_edits

    result = analyze(source_text, "ts")
    new_text = apply_edits(source_text, result.edits)
"""

from .engine import (
    AnalysisResult, Diagnostic, Edit, EngineConfig, HighlightRange, OffsetRange,
    PositionIndex, RuleEngine, analyze, apply_edits, fix, load_config, offset_to_line_column,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult", "Diagnostic", "Edit", "EngineConfig", "HighlightRange", "OffsetRange",
    "PositionIndex", "RuleEngine", "analyze", "apply_edits", "fix", "load_config",
    "offset_to_line_column",
]
