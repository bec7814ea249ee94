"""Tests for JSON output of analyses."""

import json

from tvcheck.engine.runner import RuleEngine
from tvcheck.engine.schema import (
    PROTOCOL_VERSION, analysis_to_dict, analysis_to_json, validate_range,
)


class TestAnalysisToDict:
    """Test cases for the output protocol."""

    def setup_method(self):
        self.engine = RuleEngine()

    def test_diagnostic_positions(self):
        code = "const a = 1;\nswitch (a) { case 1: break; }\n"
        result = self.engine.analyze(code, "ts")
        payload = analysis_to_dict(result, code)

        assert payload["tvcheck.protocol"] == PROTOCOL_VERSION
        assert len(payload["diagnostics"]) == 1
        diagnostic = payload["diagnostics"][0]
        assert diagnostic["rule_id"] == "switch.missing_default"
        assert diagnostic["severity"] == "warning"
        assert diagnostic["start"] == 13
        assert diagnostic["range"] == {"startLine": 1, "startCol": 0, "endLine": 1, "endCol": 6}
        assert validate_range(diagnostic["range"]) == []

    def test_edits_and_highlights(self):
        code = 'import x from "../x";\nconst l = xs.map(v => <li>{v}</li>);\n'
        payload = analysis_to_dict(self.engine.analyze(code, "tsx"), code)

        assert payload["edits"][0]["new_text"] == "./../x"
        assert payload["edits"][0]["range"]["startCol"] == 15
        assert payload["highlights"][0]["range"]["startLine"] == 1
        assert payload["diagnostics"] == []

    def test_json_round_trip(self):
        code = "switch(x){case 1: break;}"
        text = analysis_to_json(self.engine.analyze(code, "ts"), code)
        assert json.loads(text)["diagnostics"][0]["end"] == 6


def test_validate_range_reports_problems():
    errors = validate_range({"startLine": -1, "startCol": 0, "endLine": 0, "extra": 1})
    assert len(errors) == 3
