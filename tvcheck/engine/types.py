"""
Core types for the tvcheck engine.

This module provides shared dataclasses and types used across the engine,
the TypeScript adapter, and rules.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Literal, Optional, Protocol, Tuple, Union


# Type aliases for clarity
Severity = Literal["error", "warning"]
FileKind = Literal["ts", "tsx"]

SEVERITIES: Tuple[str, ...] = ("error", "warning")
FILE_KINDS: Tuple[str, ...] = ("ts", "tsx")


@dataclass(frozen=True)
class OffsetRange:
    """Half-open character range ``[start, end)`` into the analyzed text."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        """Inclusive containment, matching editor range semantics."""
        return self.start <= offset <= self.end

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True)
class Diagnostic:
    """A positioned message produced by a rule."""
    range: OffsetRange
    message: str
    rule_id: str
    severity: Severity

    def _replace(self, **kwargs):
        """Provide NamedTuple-like _replace method for compatibility."""
        return replace(self, **kwargs)


@dataclass(frozen=True)
class HighlightRange:
    """A span to mark visually; carries no message text."""
    range: OffsetRange
    rule_id: str = ""


@dataclass(frozen=True)
class Edit:
    """Replace ``text[start:end]`` with ``new_text``."""
    start: int
    end: int
    new_text: str
    rule_id: str = ""


RuleOutput = Union[Diagnostic, HighlightRange, Edit]


@dataclass
class AnalysisResult:
    """Everything one analysis pass produced, in declared rule order."""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    highlights: List[HighlightRange] = field(default_factory=list)
    edits: List[Edit] = field(default_factory=list)

    def add(self, item: RuleOutput) -> None:
        if isinstance(item, Diagnostic):
            self.diagnostics.append(item)
        elif isinstance(item, HighlightRange):
            self.highlights.append(item)
        elif isinstance(item, Edit):
            self.edits.append(item)
        else:
            raise TypeError(f"unsupported rule output: {item!r}")

    def extend(self, items: Iterable[RuleOutput]) -> None:
        for item in items:
            self.add(item)

    def message_at(self, offset: int) -> Optional[str]:
        """Message of the first diagnostic covering ``offset``, if any."""
        for diagnostic in self.diagnostics:
            if diagnostic.range.contains(offset):
                return diagnostic.message
        return None

    def is_empty(self) -> bool:
        return not (self.diagnostics or self.highlights or self.edits)


@dataclass(frozen=True)
class RuleMeta:
    """Metadata about a rule.

    Attributes:
        id: Unique rule identifier (e.g., "types.no_any")
        category: Rule category for grouping
        description: Human-readable description
        kinds: File kinds the rule runs on ("ts", "tsx")
        default_severity: Severity used unless the config overrides it
        needs_raw_text: Whether the rule reads the source text directly
    """
    id: str
    category: str
    description: str = ""
    kinds: Tuple[str, ...] = ("ts", "tsx")
    default_severity: Severity = "error"
    needs_raw_text: bool = False


@dataclass
class RuleContext:
    """Context passed to rules during execution.

    Holds one immutable source unit: the text, its tree, and the position
    index built from that same text. Offsets handed to rules through
    ``span`` are character offsets into ``text``.
    """
    file_kind: str
    text: str
    tree: Any
    positions: Any  # PositionIndex
    config: Dict[str, Any] = field(default_factory=dict)

    @property
    def root(self):
        return self.tree.root_node

    def option(self, name: str, default: Any = None) -> Any:
        return self.config.get(name, default)

    def span(self, node) -> OffsetRange:
        """Character range of a tree node."""
        to_offset = self.positions.byte_to_offset
        return OffsetRange(to_offset(node.start_byte), to_offset(node.end_byte))

    def text_of(self, node) -> str:
        """Exact source text of a tree node."""
        return self.span(node).slice(self.text)

    def walk_nodes(self, start_node=None) -> Iterator[Any]:
        """Walk all nodes below ``start_node`` (the root by default) in source order."""
        if self.tree is None:
            return
        stack = [start_node if start_node is not None else self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def diagnostic(self, rule: "Rule", node_or_range, message: str) -> Diagnostic:
        """Build a diagnostic for ``rule`` over a node or an explicit range."""
        if isinstance(node_or_range, OffsetRange):
            span = node_or_range
        else:
            span = self.span(node_or_range)
        return Diagnostic(
            range=span,
            message=message,
            rule_id=rule.meta.id,
            severity=rule.meta.default_severity,
        )


class Rule(Protocol):
    """Protocol for all rules in the engine.

    Rules analyze one source unit and yield diagnostics, highlights and
    edits. They hold no state between calls.
    """
    meta: RuleMeta

    def visit(self, ctx: RuleContext) -> Iterable[RuleOutput]:
        """Visit a file and yield this rule's outputs.

        Args:
            ctx: Rule context containing text, tree, positions and rule config

        Returns:
            Iterable of diagnostics, highlight ranges and edits
        """
        ...
