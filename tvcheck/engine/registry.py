"""
Registry for rules.

Rules are kept in registration order, which is the order the engine runs
them in and the order their outputs appear in an analysis result.
"""

import fnmatch
import logging
from typing import Dict, Iterable, List, Optional

from .types import Rule

logger = logging.getLogger(__name__)


class Registry:
    """Ordered collection of rules, selectable by file kind and id pattern."""

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self._rules: List[Rule] = []
        self._rule_index: Dict[str, Rule] = {}  # id -> rule
        for rule in rules or ():
            self.register_rule(rule)

    def register_rule(self, rule: Rule) -> None:
        """Register a rule in the registry."""
        if rule.meta.id in self._rule_index:
            # Skip duplicate registration silently to avoid import noise
            return

        self._rules.append(rule)
        self._rule_index[rule.meta.id] = rule

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Get rule by id."""
        return self._rule_index.get(rule_id)

    def get_all_rules(self) -> List[Rule]:
        """Get all registered rules."""
        return self._rules.copy()

    def get_rule_ids(self) -> List[str]:
        """Get all registered rule IDs."""
        return list(self._rule_index.keys())

    def get_rules_for_kind(self, file_kind: str) -> List[Rule]:
        """Get all rules that run on a file kind, in registration order."""
        return [rule for rule in self._rules if file_kind in rule.meta.kinds]

    def get_enabled_rules(self, enabled_patterns: List[str], file_kind: str) -> List[Rule]:
        """Get rules for a file kind whose id matches any of the patterns."""
        if not enabled_patterns:
            return []

        kind_rules = self.get_rules_for_kind(file_kind)
        if enabled_patterns == ["*"]:
            return kind_rules

        enabled_rules = []
        for rule in kind_rules:
            for pattern in enabled_patterns:
                if fnmatch.fnmatch(rule.meta.id, pattern):
                    enabled_rules.append(rule)
                    break  # Don't add the same rule multiple times
        return enabled_rules

    def __len__(self) -> int:
        return len(self._rules)

    def clear(self) -> None:
        """Clear all registered rules (mainly for testing)."""
        self._rules.clear()
        self._rule_index.clear()


def default_registry() -> Registry:
    """A fresh registry holding the built-in rules in their declared order."""
    from ..rules import RULES

    registry = Registry(RULES)
    logger.debug("Loaded %d built-in rules", len(registry))
    return registry
