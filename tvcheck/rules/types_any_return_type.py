"""
Types Any Return Type Rule

Flags function and method declarations whose declared return type is
exactly `any`. Overload signatures count as declarations.

Rule ID: types.any_return_type
Category: types
Severity: error
Languages: ts
"""

from typing import Iterable

from ..engine.types import RuleMeta, RuleContext, RuleOutput
from ..engine.typescript_adapter import annotation_type, is_accessor_or_constructor

DECLARATION_KINDS = {"function_declaration", "generator_function_declaration", "function_signature"}
METHOD_KINDS = {"method_definition", "method_signature", "abstract_method_signature"}


class TypesAnyReturnTypeRule:
    """Rule to forbid `any` as a declared return type."""

    meta = RuleMeta(
        id="types.any_return_type",
        category="types",
        description="Forbids functions and methods declared to return 'any'",
        kinds=("ts",),
        default_severity="error",
    )

    MESSAGE = "return type 'any' is forbidden"

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        for node in ctx.walk_nodes():
            if not self._is_declaration(node):
                continue

            name = node.child_by_field_name("name")
            return_type = annotation_type(node.child_by_field_name("return_type"))
            if name is None or return_type is None:
                continue
            if node.type in METHOD_KINDS and is_accessor_or_constructor(node, ctx.text_of(name)):
                continue

            if ctx.text_of(return_type) == "any":
                yield ctx.diagnostic(self, name, self.MESSAGE)

    def _is_declaration(self, node) -> bool:
        if node.type in DECLARATION_KINDS or node.type == "method_definition":
            return True
        # Interface members are signatures, not declarations; class overloads are
        if node.type in ("method_signature", "abstract_method_signature"):
            return node.parent is not None and node.parent.type == "class_body"
        return False
