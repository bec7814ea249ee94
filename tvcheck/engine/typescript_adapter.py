"""
TypeScript language adapter for tree-sitter.

Owns one parser per file kind (the TypeScript grammar for ``ts``, the TSX
grammar for ``tsx``) and the small set of node helpers the rules share.
"""
import logging
import os
from typing import Any, Iterator, List, Optional, Tuple

import tree_sitter

from .types import FILE_KINDS

logger = logging.getLogger(__name__)

# Node kinds that open a new function body
FUNCTION_KINDS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
})

# Accessor and constructor members are not plain methods
ACCESSOR_KEYWORDS = frozenset({"get", "set"})


class ParseError(Exception):
    """Raised when source text cannot be turned into a usable syntax tree."""


def file_kind_for_path(path: str) -> Optional[str]:
    """Map a file path to its file kind, or None for unsupported files."""
    ext = os.path.splitext(path)[1].lower()
    if ext == ".ts":
        return "ts"
    if ext == ".tsx":
        return "tsx"
    return None


def normalize_file_kind(file_kind: str) -> str:
    """Accept "ts", ".ts", "TSX" and friends; reject anything else."""
    kind = (file_kind or "").lower().lstrip(".")
    if kind not in FILE_KINDS:
        raise ValueError(f"Unsupported file kind: {file_kind!r} (expected one of {FILE_KINDS})")
    return kind


class TypeScriptAdapter:
    """Tree-sitter adapter for TypeScript and TSX sources."""

    def __init__(self, reject_syntax_errors: bool = True):
        """Initialize the adapter; grammars are loaded on first use."""
        self.reject_syntax_errors = reject_syntax_errors
        self._parsers = {}

    @property
    def language_id(self) -> str:
        """Return the language identifier."""
        return "typescript"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        """Return supported file extensions."""
        return (".ts", ".tsx")

    def _load_language(self, file_kind: str):
        from tree_sitter_typescript import language_tsx, language_typescript

        if file_kind == "tsx":
            return tree_sitter.Language(language_tsx())
        return tree_sitter.Language(language_typescript())

    def _get_parser(self, file_kind: str):
        """Get or create the parser for a file kind."""
        parser = self._parsers.get(file_kind)
        if parser is None:
            try:
                parser = tree_sitter.Parser()
                parser.language = self._load_language(file_kind)
            except ImportError as e:
                raise ParseError(f"tree-sitter-typescript not available: {e}") from e
            except Exception as e:
                raise ParseError(f"Could not initialize {file_kind} parser: {e}") from e
            logger.debug("Initialized %s parser", file_kind)
            self._parsers[file_kind] = parser
        return parser

    def parse(self, text: str, file_kind: str = "ts") -> Any:
        """Parse text and return a tree-sitter tree.

        Raises:
            ParseError: no parser is available, the parser failed, or the tree
                has syntax errors while ``reject_syntax_errors`` is set
        """
        file_kind = normalize_file_kind(file_kind)
        parser = self._get_parser(file_kind)
        try:
            tree = parser.parse(text.encode("utf-8"))
        except Exception as e:
            raise ParseError(f"Parser failed: {e}") from e

        if tree is None or tree.root_node is None:
            raise ParseError("Parser returned no tree")
        if self.reject_syntax_errors and tree.root_node.has_error:
            raise ParseError(f"Source has syntax errors at {first_error_byte(tree.root_node)}")
        return tree


def first_error_byte(node) -> Optional[int]:
    """Byte offset of the first ERROR or missing node, if any."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current.start_byte
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


# Node helpers shared by rules

def named_children(node) -> List[Any]:
    """Named children with comments filtered out."""
    return [child for child in node.named_children if child.type != "comment"]


def first_named_child(node) -> Optional[Any]:
    children = named_children(node)
    return children[0] if children else None


def unwrap_parens(node):
    """Strip any number of parenthesized_expression wrappers."""
    while node is not None and node.type == "parenthesized_expression":
        node = first_named_child(node)
    return node


def annotation_type(annotation) -> Optional[Any]:
    """The type node inside a ``: T`` annotation."""
    if annotation is None:
        return None
    if annotation.type == "type_annotation":
        return first_named_child(annotation)
    return annotation


def is_accessor_or_constructor(node, name_text: str) -> bool:
    """True for ``get``/``set`` accessors and ``constructor`` members."""
    if name_text == "constructor":
        return True
    name = node.child_by_field_name("name")
    for child in node.children:
        if child == name:
            break
        if child.type in ACCESSOR_KEYWORDS:
            return True
    return False


def iter_descendants(node, stop_at=frozenset()) -> Iterator[Any]:
    """Yield descendants of ``node``; do not enter nodes whose kind is in ``stop_at``."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        if current.type not in stop_at:
            stack.extend(reversed(current.children))
