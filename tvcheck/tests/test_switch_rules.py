"""Tests for the switch.missing_default and switch.duplicate_case rules."""

from tvcheck.rules.switch_duplicate_case import SwitchDuplicateCaseRule
from tvcheck.rules.switch_missing_default import SwitchMissingDefaultRule


class TestSwitchMissingDefaultRule:
    """Test cases for switches without a default clause."""

    def setup_method(self):
        self.rule = SwitchMissingDefaultRule()

    def test_missing_default_reported_on_keyword(self, diagnostics):
        code = "switch(x){case 1: break;}"
        found = diagnostics(self.rule, code)

        assert len(found) == 1
        assert found[0].message == "switch statement is missing a default case"
        assert found[0].severity == "warning"
        assert (found[0].range.start, found[0].range.end) == (0, 6)

    def test_default_present_is_clean(self, diagnostics):
        assert diagnostics(self.rule, "switch(x){case 1: break; default: break;}") == []

    def test_default_in_middle_is_clean(self, diagnostics):
        assert diagnostics(self.rule, "switch (x) { default: go(); case 2: stop(); }") == []

    def test_nested_switches_checked_independently(self, diagnostics):
        code = (
            "switch (a) {\n"
            "  case 1:\n"
            "    switch (b) { case 2: break; }\n"
            "    break;\n"
            "  default:\n"
            "    break;\n"
            "}\n"
        )
        found = diagnostics(self.rule, code)

        assert len(found) == 1
        assert found[0].range.start == code.index("switch (b)")

    def test_empty_switch_is_reported(self, diagnostics):
        assert len(diagnostics(self.rule, "switch (x) {}", "tsx")) == 1


class TestSwitchDuplicateCaseRule:
    """Test cases for repeated case conditions."""

    def setup_method(self):
        self.rule = SwitchDuplicateCaseRule()

    def test_every_duplicate_is_reported(self, diagnostics):
        code = "switch(x){case 1: a(); case 1: b(); default: c();}"
        found = diagnostics(self.rule, code)

        assert len(found) == 2
        assert all(d.message == "duplicate case condition: '1'" for d in found)
        assert [d.range.start for d in found] == [15, 28]

    def test_unique_conditions_are_clean(self, diagnostics):
        assert diagnostics(self.rule, "switch (x) { case 1: case 2: case '1': break; }") == []

    def test_comparison_is_textual(self, diagnostics):
        assert diagnostics(self.rule, "switch (x) { case 1: break; case 0x1: break; }") == []

    def test_groups_in_order_of_first_occurrence(self, diagnostics):
        code = "switch (k) { case 'b': case 'a': case 'b': case 'a': case 'a': break; }"
        found = diagnostics(self.rule, code)

        assert [d.message for d in found] == [
            "duplicate case condition: ''b''",
            "duplicate case condition: ''b''",
            "duplicate case condition: ''a''",
            "duplicate case condition: ''a''",
            "duplicate case condition: ''a''",
        ]

    def test_separate_switches_do_not_share_groups(self, diagnostics):
        code = "switch (a) { case 1: break; }\nswitch (b) { case 1: break; }"
        assert diagnostics(self.rule, code) == []

    def test_repeat_then_distinct_case(self, diagnostics):
        code = "switch(x){case 1: break; case 1: break; case 2: break;}"
        found = diagnostics(self.rule, code)

        assert len(found) == 2
        assert [d.range.slice(code) for d in found] == ["1", "1"]
