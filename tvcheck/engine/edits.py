"""
Edit application for the tvcheck engine.

Rules propose offset-addressed replacements against the text they analyzed.
``apply_edits`` applies a whole set of them in one pass, working from the
highest offset down so earlier replacements never shift later ones.
"""

import logging
from typing import Iterable, List, Sequence

from .types import Edit

logger = logging.getLogger(__name__)


class EditError(ValueError):
    """Raised when a set of edits cannot be applied to a text."""


class InvalidEditError(EditError):
    """An edit range falls outside the text or is inverted."""


class OverlappingEditError(EditError):
    """Two edits touch the same characters."""

    def __init__(self, first: Edit, second: Edit):
        self.first = first
        self.second = second
        super().__init__(
            f"overlapping edit: [{first.start}, {first.end}) conflicts with "
            f"[{second.start}, {second.end})"
        )


def validate_edits(text: str, edits: Iterable[Edit]) -> List[Edit]:
    """Check every edit against ``text`` and return them sorted by position.

    Raises:
        InvalidEditError: an edit lies outside ``[0, len(text)]`` or has start > end
        OverlappingEditError: two edits overlap, or two insertions share an offset
    """
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))
    for edit in ordered:
        if not 0 <= edit.start <= edit.end <= len(text):
            raise InvalidEditError(
                f"edit [{edit.start}, {edit.end}) is outside text of length {len(text)}"
            )

    for previous, current in zip(ordered, ordered[1:]):
        if previous.end > current.start:
            raise OverlappingEditError(previous, current)
        # Two insertions at one offset have no defined order
        if previous.start == previous.end == current.start == current.end:
            raise OverlappingEditError(previous, current)
    return ordered


def apply_edits(text: str, edits: Sequence[Edit]) -> str:
    """Return ``text`` with all ``edits`` applied.

    The input text is never modified. Either every edit is applied or, on a
    conflict, none is and an ``EditError`` propagates to the caller.
    """
    if not edits:
        return text

    ordered = validate_edits(text, edits)
    result = text
    for edit in reversed(ordered):
        result = result[:edit.start] + edit.new_text + result[edit.end:]

    logger.debug("Applied %d edits (%d -> %d chars)", len(ordered), len(text), len(result))
    return result
