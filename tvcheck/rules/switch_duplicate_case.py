"""
Switch Duplicate Case Rule

Groups the case clauses of each switch by the exact source text of their
condition. Every member of a group with more than one clause is reported,
first occurrence included. Conditions are compared as text, so `1` and
`0x1` are different.

Rule ID: switch.duplicate_case
Category: switch
Severity: warning
Languages: ts, tsx
"""

from typing import Dict, Iterable, List

from ..engine.types import RuleMeta, RuleContext, RuleOutput


class SwitchDuplicateCaseRule:
    """Rule to report case conditions that repeat within one switch."""

    meta = RuleMeta(
        id="switch.duplicate_case",
        category="switch",
        description="Case conditions must be unique within a switch",
        kinds=("ts", "tsx"),
        default_severity="warning",
    )

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        for node in ctx.walk_nodes():
            if node.type != "switch_statement":
                continue
            body = node.child_by_field_name("body")
            if body is None:
                continue

            # Insertion order keeps groups in order of first occurrence
            groups: Dict[str, List] = {}
            for clause in body.named_children:
                if clause.type != "switch_case":
                    continue
                condition = clause.child_by_field_name("value")
                if condition is None:
                    continue
                groups.setdefault(ctx.text_of(condition), []).append(condition)

            for text, conditions in groups.items():
                if len(conditions) < 2:
                    continue
                for condition in conditions:
                    yield ctx.diagnostic(self, condition, f"duplicate case condition: '{text}'")
