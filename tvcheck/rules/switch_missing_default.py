"""
Switch Missing Default Rule

Reports switch statements with no `default` clause, ranged over the
`switch` keyword.

Rule ID: switch.missing_default
Category: switch
Severity: warning
Languages: ts, tsx
"""

from typing import Iterable

from ..engine.types import RuleMeta, RuleContext, RuleOutput


class SwitchMissingDefaultRule:
    """Rule to require a default clause in every switch."""

    meta = RuleMeta(
        id="switch.missing_default",
        category="switch",
        description="Switch statements must have a default case",
        kinds=("ts", "tsx"),
        default_severity="warning",
    )

    MESSAGE = "switch statement is missing a default case"

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        for node in ctx.walk_nodes():
            if node.type != "switch_statement":
                continue

            body = node.child_by_field_name("body")
            keyword = node.children[0] if node.children else None
            if body is None or keyword is None or keyword.type != "switch":
                continue

            if not any(clause.type == "switch_default" for clause in body.named_children):
                yield ctx.diagnostic(self, keyword, self.MESSAGE)
