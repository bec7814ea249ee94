"""
React Map Key Rule

Highlights `.map(...)` calls whose callback returns a JSX element without a
`key` attribute. The callback must be a function or arrow function; for a
block body the last statement must be `return <jsx>`, and expression bodies
(`item => <li/>`) are inspected too unless `inspect_expression_bodies` is
off. Only the element's own top-level attributes are considered. Fragments
cannot carry a key and are left alone.

Produces highlight ranges over the `map` token and no diagnostic text.

Rule ID: react.map_key
Category: react
Languages: tsx
"""

from typing import Any, Iterable, Optional

from ..engine.types import HighlightRange, RuleMeta, RuleContext, RuleOutput
from ..engine.typescript_adapter import first_named_child, named_children, unwrap_parens

CALLBACK_KINDS = {"arrow_function", "function_expression", "function"}


class ReactMapKeyRule:
    """Rule to mark list renders that forget the `key` prop."""

    meta = RuleMeta(
        id="react.map_key",
        category="react",
        description="JSX returned from a .map callback needs a key attribute",
        kinds=("tsx",),
        default_severity="warning",
    )

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        inspect_expressions = bool(ctx.option("inspect_expression_bodies", True))

        for node in ctx.walk_nodes():
            method = self._map_method(ctx, node)
            if method is None:
                continue

            arguments = node.child_by_field_name("arguments")
            callback = first_named_child(arguments) if arguments is not None else None
            if callback is None or callback.type not in CALLBACK_KINDS:
                continue

            element = self._returned_jsx(callback, inspect_expressions)
            if element is not None and not self._has_key(ctx, element):
                yield HighlightRange(range=ctx.span(method), rule_id=self.meta.id)

    def _map_method(self, ctx: RuleContext, node):
        """The `map` property token of a `<expr>.map(...)` call."""
        if node.type != "call_expression":
            return None
        function = node.child_by_field_name("function")
        if function is None or function.type != "member_expression":
            return None
        prop = function.child_by_field_name("property")
        if prop is None or ctx.text_of(prop) != "map":
            return None
        return prop

    def _returned_jsx(self, callback, inspect_expressions: bool) -> Optional[Any]:
        body = callback.child_by_field_name("body")
        if body is None:
            return None

        if body.type == "statement_block":
            statements = named_children(body)
            if not statements or statements[-1].type != "return_statement":
                return None
            returned = first_named_child(statements[-1])
        elif inspect_expressions:
            returned = body
        else:
            return None

        returned = unwrap_parens(returned)
        if returned is None or returned.type not in ("jsx_element", "jsx_self_closing_element"):
            return None
        return returned

    def _has_key(self, ctx: RuleContext, element) -> bool:
        if element.type == "jsx_element":
            tag = element.child_by_field_name("open_tag") or first_named_child(element)
        else:
            tag = element
        # Fragments have no tag name and cannot take attributes
        if tag is None or tag.child_by_field_name("name") is None:
            return True

        for attribute in tag.named_children:
            if attribute.type != "jsx_attribute":
                continue
            name = first_named_child(attribute)
            if name is not None and ctx.text_of(name) == "key":
                return True
        return False
