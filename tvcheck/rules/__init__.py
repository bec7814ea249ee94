"""
tvcheck Rules Package

This package contains the rules that analyze TypeScript and TSX sources.
``RULES`` lists them in the order the engine runs them; that order is also
the order of their outputs in an analysis result.

To add a new rule:
1. Create a Python file in this directory (e.g., my_rule.py)
2. Define your rule class implementing the Rule protocol
3. Append an instance to ``RULES`` below

Example rule structure:

```python
from ..engine.types import RuleMeta, RuleContext

class MyRule:
    meta = RuleMeta(
        id="my.rule",
        category="style",
        description="Detects my specific issue",
        kinds=("ts", "tsx"),
    )

    def visit(self, ctx: RuleContext):
        for node in ctx.walk_nodes():
            if node.type == "debugger_statement":
                yield ctx.diagnostic(self, node, "debugger statement left in code")
```
"""

from typing import List

from ..engine.types import Rule
from .types_no_any import TypesNoAnyRule
from .types_missing_return_type import TypesMissingReturnTypeRule
from .types_any_return_type import TypesAnyReturnTypeRule
from .imports_folder_path import ImportsFolderPathRule
from .naming_handler_prefix import NamingHandlerPrefixRule
from .switch_missing_default import SwitchMissingDefaultRule
from .switch_duplicate_case import SwitchDuplicateCaseRule
from .react_map_key import ReactMapKeyRule

# Declared run order: .ts-only type rules, shared rules, then .tsx-only rules
RULES: List[Rule] = [
    TypesNoAnyRule(),
    TypesMissingReturnTypeRule(),
    TypesAnyReturnTypeRule(),
    ImportsFolderPathRule(),
    NamingHandlerPrefixRule(),
    SwitchMissingDefaultRule(),
    SwitchDuplicateCaseRule(),
    ReactMapKeyRule(),
]

__all__ = [
    "RULES",
    "TypesNoAnyRule",
    "TypesMissingReturnTypeRule",
    "TypesAnyReturnTypeRule",
    "ImportsFolderPathRule",
    "NamingHandlerPrefixRule",
    "SwitchMissingDefaultRule",
    "SwitchDuplicateCaseRule",
    "ReactMapKeyRule",
]
