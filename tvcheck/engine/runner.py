"""
Rule engine for tvcheck.

This module provides the analysis entry point: parse one source text once,
run every applicable rule against the tree in declared order, and merge the
results. A rule that raises only loses its own contribution; a parse
failure yields an empty result.
"""

import logging
import time
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .config import EngineConfig, get_default_config, get_rule_severity
from .edits import apply_edits
from .positions import PositionIndex
from .registry import Registry, default_registry
from .types import AnalysisResult, Diagnostic, Edit, HighlightRange, Rule, RuleContext, RuleOutput
from .typescript_adapter import ParseError, TypeScriptAdapter, normalize_file_kind

logger = logging.getLogger(__name__)


class RuleEngine:
    """Runs the registered rules over one source text at a time.

    The engine keeps no state between ``analyze`` calls beyond its
    configuration and the lazily created parsers.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 registry: Optional[Registry] = None,
                 adapter: Optional[TypeScriptAdapter] = None):
        self.config = config or get_default_config()
        self.registry = registry if registry is not None else default_registry()
        self.adapter = adapter or TypeScriptAdapter(
            reject_syntax_errors=self.config.reject_syntax_errors
        )

    def rules_for(self, file_kind: str) -> List[Rule]:
        """Rules that run on ``file_kind``, in declared order."""
        return self.registry.get_enabled_rules(self.config.enabled_rules, normalize_file_kind(file_kind))

    def analyze(self, source_text: str, file_kind: str) -> AnalysisResult:
        """Analyze one source text.

        Args:
            source_text: Full text of the file
            file_kind: "ts" or "tsx"

        Returns:
            AnalysisResult with diagnostics, highlights and edits

        Raises:
            ValueError: ``file_kind`` is not a supported kind
        """
        file_kind = normalize_file_kind(file_kind)
        rules = self.rules_for(file_kind)
        result = AnalysisResult()

        start_time = time.time()
        try:
            tree = self.adapter.parse(source_text, file_kind)
        except ParseError as e:
            logger.warning("Skipping analysis of %s source: %s", file_kind, e)
            return result
        parse_ms = (time.time() - start_time) * 1000

        positions = PositionIndex(source_text)
        logger.debug("Running %d rules on %s source: %s", len(rules), file_kind,
                     [rule.meta.id for rule in rules])

        for rule in rules:
            context = RuleContext(
                file_kind=file_kind,
                text=source_text,
                tree=tree,
                positions=positions,
                config=self.config.rule_config(rule.meta.id),
            )
            outputs = self._run_rule(rule, context)
            result.extend(self._apply_severity(item) for item in outputs)

        if self.config.highlight_diagnostics:
            result.highlights.extend(
                HighlightRange(range=diagnostic.range, rule_id=diagnostic.rule_id)
                for diagnostic in result.diagnostics
            )

        logger.debug("Analysis finished: %d diagnostics, %d highlights, %d edits "
                     "(parse %.1fms, total %.1fms)",
                     len(result.diagnostics), len(result.highlights), len(result.edits),
                     parse_ms, (time.time() - start_time) * 1000)
        return result

    def _run_rule(self, rule: Rule, context: RuleContext) -> List[RuleOutput]:
        """Collect a rule's outputs; a failing rule contributes nothing."""
        rule_id = getattr(rule.meta, 'id', 'unknown')
        try:
            outputs = list(rule.visit(context))
        except Exception as e:
            logger.warning("Rule '%s' failed: %s", rule_id, e, exc_info=True)
            return []

        bound = len(context.text)
        valid = []
        for item in outputs:
            start, end = (item.start, item.end) if isinstance(item, Edit) else (item.range.start, item.range.end)
            if not 0 <= start <= end <= bound:
                logger.warning("Rule '%s' produced out-of-range output %r; dropping it", rule_id, item)
                continue
            valid.append(item)
        logger.debug("Rule '%s' produced %d outputs", rule_id, len(valid))
        return valid

    def _apply_severity(self, item: RuleOutput) -> RuleOutput:
        """Apply configured severity overrides to diagnostics."""
        if not isinstance(item, Diagnostic):
            return item
        severity = get_rule_severity(item.rule_id, self.config, item.severity)
        if severity != item.severity:
            return replace(item, severity=severity)
        return item

    def fix(self, source_text: str, file_kind: str) -> str:
        """Analyze and return the text with every proposed edit applied."""
        result = self.analyze(source_text, file_kind)
        return apply_edits(source_text, result.edits)


# Default-config engine; holds parsers only, never analysis results
_default_engine: Optional[RuleEngine] = None

# Engines for caller-supplied configs, keyed by config identity
_config_engines: Dict[int, Tuple[EngineConfig, RuleEngine]] = {}
_CONFIG_ENGINE_LIMIT = 16


def _engine_for(config: Optional[EngineConfig]) -> RuleEngine:
    """Reuse one engine per config object; a config is not expected to change once passed in."""
    global _default_engine
    if config is None:
        if _default_engine is None:
            _default_engine = RuleEngine()
        return _default_engine

    cached = _config_engines.get(id(config))
    if cached is not None and cached[0] is config:
        return cached[1]

    engine = RuleEngine(config)
    _config_engines[id(config)] = (config, engine)
    # Keep only the most recently created engines
    if len(_config_engines) > _CONFIG_ENGINE_LIMIT:
        for old_key in list(_config_engines)[:-_CONFIG_ENGINE_LIMIT]:
            del _config_engines[old_key]
    return engine


def analyze(source_text: str, file_kind: str, config: Optional[EngineConfig] = None) -> AnalysisResult:
    """Analyze ``source_text`` of the given kind with the built-in rules."""
    return _engine_for(config).analyze(source_text, file_kind)


def fix(source_text: str, file_kind: str, config: Optional[EngineConfig] = None) -> str:
    """Apply every edit the built-in rules propose for ``source_text``."""
    return _engine_for(config).fix(source_text, file_kind)
