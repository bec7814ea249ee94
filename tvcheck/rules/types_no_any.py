"""
Types No Any Rule

Flags parameters and variable declarations whose explicit type annotation is
exactly `any`. The comparison is on annotation text only, so `any[]`,
`Array<any>` or an alias of `any` are not reported.

Rule ID: types.no_any
Category: types
Severity: error
Languages: ts
"""

from typing import Iterable

from ..engine.types import RuleMeta, RuleContext, RuleOutput
from ..engine.typescript_adapter import annotation_type

PARAMETER_KINDS = {"required_parameter", "optional_parameter"}


class TypesNoAnyRule:
    """Rule to forbid explicit `any` annotations on parameters and variables."""

    meta = RuleMeta(
        id="types.no_any",
        category="types",
        description="Forbids parameters and variables annotated with 'any'",
        kinds=("ts",),
        default_severity="error",
    )

    MESSAGE = "use of type 'any' is forbidden"

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        """Visit the file and check parameter and variable annotations."""
        if not ctx.tree:
            return

        for node in ctx.walk_nodes():
            node_type = node.type

            # Parameters report the whole parameter, name included
            if node_type in PARAMETER_KINDS:
                if self._any_type(ctx, node) is not None:
                    yield ctx.diagnostic(self, node, self.MESSAGE)

            # Variables (and catch bindings) report just the annotation
            elif node_type in ("variable_declarator", "catch_clause"):
                type_node = self._any_type(ctx, node)
                if type_node is not None:
                    yield ctx.diagnostic(self, type_node, self.MESSAGE)

    def _any_type(self, ctx: RuleContext, node):
        """The annotated type node when it reads exactly `any`."""
        type_node = annotation_type(node.child_by_field_name("type"))
        if type_node is not None and ctx.text_of(type_node) == "any":
            return type_node
        return None
