"""Shared fixtures: parse real TypeScript/TSX and run a single rule over it."""

import pytest

from tvcheck.engine.positions import PositionIndex
from tvcheck.engine.types import Diagnostic, Edit, HighlightRange, RuleContext
from tvcheck.engine.typescript_adapter import TypeScriptAdapter

_adapter = TypeScriptAdapter()


def make_context(text, file_kind="ts", config=None):
    """Build a RuleContext over a freshly parsed tree."""
    tree = _adapter.parse(text, file_kind)
    return RuleContext(
        file_kind=file_kind,
        text=text,
        tree=tree,
        positions=PositionIndex(text),
        config=dict(config or {}),
    )


def run_rule(rule, text, file_kind="ts", config=None):
    """Run ``rule`` over ``text`` and return all of its outputs."""
    return list(rule.visit(make_context(text, file_kind, config)))


@pytest.fixture
def context():
    return make_context


@pytest.fixture
def diagnostics():
    """Run a rule and keep only its diagnostics."""
    def _run(rule, text, file_kind="ts", config=None):
        return [item for item in run_rule(rule, text, file_kind, config) if isinstance(item, Diagnostic)]
    return _run


@pytest.fixture
def highlights():
    """Run a rule and keep only its highlight ranges."""
    def _run(rule, text, file_kind="tsx", config=None):
        return [item for item in run_rule(rule, text, file_kind, config) if isinstance(item, HighlightRange)]
    return _run


@pytest.fixture
def edits():
    """Run a rule and keep only its edits."""
    def _run(rule, text, file_kind="ts", config=None):
        return [item for item in run_rule(rule, text, file_kind, config) if isinstance(item, Edit)]
    return _run
