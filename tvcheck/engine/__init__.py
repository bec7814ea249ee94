"""
tvcheck tree-sitter engine package.

This package provides the TypeScript/TSX rule engine built on tree-sitter.
"""

from .types import (
    OffsetRange, Diagnostic, HighlightRange, Edit, AnalysisResult,
    RuleMeta, RuleContext, Rule, Severity, FileKind
)

from .positions import PositionIndex, offset_to_line_column

from .edits import apply_edits, validate_edits, EditError, InvalidEditError, OverlappingEditError

from .typescript_adapter import TypeScriptAdapter, ParseError, file_kind_for_path

from .registry import Registry, default_registry

from .config import (
    EngineConfig, load_config, get_default_config, save_config, find_config_file, get_rule_severity
)

from .runner import RuleEngine, analyze, fix

from .schema import analysis_to_dict, analysis_to_json

__all__ = [
    # Types
    "OffsetRange", "Diagnostic", "HighlightRange", "Edit", "AnalysisResult",
    "RuleMeta", "RuleContext", "Rule", "Severity", "FileKind",

    # Positions and edits
    "PositionIndex", "offset_to_line_column",
    "apply_edits", "validate_edits", "EditError", "InvalidEditError", "OverlappingEditError",

    # Parsing
    "TypeScriptAdapter", "ParseError", "file_kind_for_path",

    # Registry
    "Registry", "default_registry",

    # Config
    "EngineConfig", "load_config", "get_default_config", "save_config", "find_config_file", "get_rule_severity",

    # Engine
    "RuleEngine", "analyze", "fix", "analysis_to_dict", "analysis_to_json"
]
