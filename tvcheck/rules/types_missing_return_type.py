"""
Types Missing Return Type Rule

Flags function and method declarations that contain a `return` statement but
declare no return type. By default any `return` below the declaration counts,
including those inside nested functions; set `scope_returns_to_body` to stop
the search at nested function boundaries.

Rule ID: types.missing_return_type
Category: types
Severity: error
Languages: ts
"""

from typing import Iterable

from ..engine.types import RuleMeta, RuleContext, RuleOutput
from ..engine.typescript_adapter import FUNCTION_KINDS, is_accessor_or_constructor, iter_descendants

DECLARATION_KINDS = {"function_declaration", "generator_function_declaration", "method_definition"}

# Nested classes open new method bodies too
SCOPE_BOUNDARIES = FUNCTION_KINDS | {"class", "class_declaration", "abstract_class_declaration"}


class TypesMissingReturnTypeRule:
    """Rule to require an explicit return type on functions that return."""

    meta = RuleMeta(
        id="types.missing_return_type",
        category="types",
        description="Requires an explicit return type on functions containing a return statement",
        kinds=("ts",),
        default_severity="error",
    )

    MESSAGE = "missing explicit return type"

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        scoped = bool(ctx.option("scope_returns_to_body", False))

        for node in ctx.walk_nodes():
            if node.type not in DECLARATION_KINDS:
                continue
            if node.child_by_field_name("return_type") is not None:
                continue

            name = node.child_by_field_name("name")
            if name is None:
                continue
            if node.type == "method_definition" and is_accessor_or_constructor(node, ctx.text_of(name)):
                continue

            if self._contains_return(node, scoped):
                yield ctx.diagnostic(self, name, self.MESSAGE)

    def _contains_return(self, node, scoped: bool) -> bool:
        if not scoped:
            candidates = iter_descendants(node)
        else:
            body = node.child_by_field_name("body")
            if body is None:
                return False
            candidates = iter_descendants(body, SCOPE_BOUNDARIES)
        return any(child.type == "return_statement" for child in candidates)
