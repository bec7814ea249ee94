"""
Naming Handler Prefix Rule

Identifiers that mention `handle` (case-insensitive) must start with it.
Names are taken from syntax tree nodes only, so comments and string literals
never produce findings. Checked shapes:

- function declaration and named function expression names
- variable declarator names
- called identifiers, including the property of a member call (`this.x()`)
  and the class of a `new` expression
- object properties whose value is a function (`onClickHandle: function () {}`)
- class and object method names, interface and abstract method signatures

Rule ID: naming.handler_prefix
Category: naming
Severity: error
Languages: ts, tsx
"""

from typing import Any, Iterable, Iterator, Optional, Set, Tuple

from ..engine.types import RuleMeta, RuleContext, RuleOutput

NAMED_FUNCTION_KINDS = {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "method_definition",
    "method_signature",
    "abstract_method_signature",
    "function_signature",
}
# Callee field per invocation kind
CALLEE_FIELDS = {"call_expression": "function", "new_expression": "constructor"}
FUNCTION_VALUE_KINDS = {"function_expression", "function", "arrow_function"}
NAME_KINDS = {"identifier", "property_identifier", "private_property_identifier"}


class NamingHandlerPrefixRule:
    """Rule to keep handler-like names prefixed with `handle`."""

    meta = RuleMeta(
        id="naming.handler_prefix",
        category="naming",
        description="Names containing 'handle' must start with 'handle'",
        kinds=("ts", "tsx"),
        default_severity="error",
    )

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        prefix = str(ctx.option("prefix", "handle")).lower()
        message = f"handler name must start with '{prefix}'"
        # Scoped to this pass only
        reported: Set[Tuple[int, int]] = set()

        for name in self._candidate_names(ctx):
            key = (name.start_byte, name.end_byte)
            if key in reported:
                continue

            text = ctx.text_of(name)
            lowered = text.lower()
            if prefix in lowered and not lowered.startswith(prefix):
                reported.add(key)
                yield ctx.diagnostic(self, name, message)

    def _candidate_names(self, ctx: RuleContext) -> Iterator:
        for node in ctx.walk_nodes():
            name = self._name_of(node)
            if name is not None and name.type in NAME_KINDS:
                yield name

    def _name_of(self, node) -> Optional[Any]:
        node_type = node.type
        if node_type in NAMED_FUNCTION_KINDS or node_type == "variable_declarator":
            return node.child_by_field_name("name")

        if node_type in CALLEE_FIELDS:
            callee = node.child_by_field_name(CALLEE_FIELDS[node_type])
            if callee is None:
                return None
            if callee.type == "member_expression":
                return callee.child_by_field_name("property")
            return callee

        if node_type == "pair":
            value = node.child_by_field_name("value")
            if value is not None and value.type in FUNCTION_VALUE_KINDS:
                return node.child_by_field_name("key")

        return None
