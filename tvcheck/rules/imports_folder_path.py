"""
Imports Folder Path Rule

Checks import specifiers in two independent ways:

1. A relative specifier nested at least two segments deep that ends in a file
   extension (outside `/components/`) is reported: imports must reference a
   folder, not a file.
2. A specifier starting with `../` is rewritten to `./` + specifier. This is
   a literal prefix rewrite, not path normalization; `./../x` no longer starts
   with `../` so a second pass leaves it alone.

Style sheet imports (`.scss` by default) are skipped entirely.

Rule ID: imports.folder_path
Category: imports
Severity: error
Languages: ts, tsx
Autofix: safe
"""

import re
from typing import Any, Iterable, Optional

from ..engine.types import Edit, OffsetRange, RuleMeta, RuleContext, RuleOutput

FILE_EXTENSION = re.compile(r"\.[a-zA-Z]+$")
EXEMPT_SEGMENT = "/components/"


class ImportsFolderPathRule:
    """Rule to keep relative imports pointing at folders."""

    meta = RuleMeta(
        id="imports.folder_path",
        category="imports",
        description="Imports must reference folders; '../' specifiers are prefixed with './'",
        kinds=("ts", "tsx"),
        default_severity="error",
    )

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        if not ctx.tree:
            return

        skip_suffixes = ctx.option("skip_suffixes", [".scss"]) or ()
        # A single suffix may be given as a bare string
        if isinstance(skip_suffixes, str):
            skip_suffixes = (skip_suffixes,)
        skip_suffixes = tuple(skip_suffixes)

        for node in ctx.walk_nodes():
            if node.type != "import_statement":
                continue

            source = self._string_source(node)
            if source is None:
                continue

            quoted = ctx.span(source)
            # Inner range excludes the quote characters
            inner = OffsetRange(quoted.start + 1, quoted.end - 1)
            path = inner.slice(ctx.text)

            if skip_suffixes and path.endswith(skip_suffixes):
                continue

            if self._references_file(path):
                name_start = path.rfind("/") + 1
                name_end = len(path)
                # One extra character past the file name takes in the closing quote
                yield ctx.diagnostic(
                    self,
                    OffsetRange(inner.start + name_start, inner.start + name_end + 1),
                    f"import must reference a folder, not a file: {path}",
                )

            if path.startswith("../"):
                yield Edit(start=inner.start, end=inner.end, new_text=f"./{path}", rule_id=self.meta.id)

    def _string_source(self, node) -> Optional[Any]:
        """The quoted module specifier of an import, if it is a plain string."""
        source = node.child_by_field_name("source")
        if source is None or source.type != "string":
            return None
        if source.end_byte - source.start_byte < 2:
            return None
        return source

    def _references_file(self, path: str) -> bool:
        return (
            bool(FILE_EXTENSION.search(path))
            and path.startswith(("./", "../"))
            and EXEMPT_SEGMENT not in path
            and len(path.split("/")) > 2
        )
