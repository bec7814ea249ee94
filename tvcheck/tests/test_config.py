"""Tests for configuration loading."""

import logging

from tvcheck.engine.config import (
    EngineConfig, find_config_file, get_default_config, get_rule_severity, load_config,
    save_config,
)


class TestLoadConfig:
    """Test cases for load_config and friends."""

    def test_defaults(self):
        config = get_default_config()

        assert config.enabled_rules == ["*"]
        assert config.reject_syntax_errors is True
        assert config.highlight_diagnostics is False
        assert config.rule_config("naming.handler_prefix") == {"prefix": "handle"}
        assert config.rule_config("imports.folder_path") == {"skip_suffixes": [".scss"]}

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "absent.yml"))
        assert config.enabled_rules == ["*"]

    def test_file_values_merge_over_defaults(self, tmp_path):
        path = tmp_path / ".tvcheck.yml"
        path.write_text(
            "enabled_rules:\n"
            "  - 'switch.*'\n"
            "rule_severities:\n"
            "  switch.missing_default: error\n"
            "rule_configs:\n"
            "  naming.handler_prefix:\n"
            "    prefix: 'on'\n",
            encoding="utf-8",
        )
        config = load_config(str(path))

        assert config.enabled_rules == ["switch.*"]
        assert config.rule_severities == {"switch.missing_default": "error"}
        assert config.rule_config("naming.handler_prefix") == {"prefix": "on"}
        # Untouched rules keep their defaults
        assert config.rule_config("react.map_key") == {"inspect_expression_bodies": True}

    def test_unknown_keys_and_bad_severities_are_ignored(self, tmp_path, caplog):
        path = tmp_path / "tvcheck.yaml"
        path.write_text(
            "colour: blue\n"
            "rule_severities:\n"
            "  types.no_any: fatal\n"
            "  switch.duplicate_case: error\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING, logger="tvcheck.engine.config"):
            config = load_config(str(path))

        assert not hasattr(config, "colour")
        assert config.rule_severities == {"switch.duplicate_case": "error"}
        assert "colour" in caplog.text
        assert "fatal" in caplog.text

    def test_broken_yaml_falls_back(self, tmp_path):
        path = tmp_path / ".tvcheck.yml"
        path.write_text("enabled_rules: [unclosed\n", encoding="utf-8")
        assert load_config(str(path)).enabled_rules == ["*"]

    def test_non_mapping_falls_back(self, tmp_path):
        path = tmp_path / ".tvcheck.yml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        assert load_config(str(path)).enabled_rules == ["*"]

    def test_save_then_load(self, tmp_path):
        config = EngineConfig(
            enabled_rules=["types.*"],
            highlight_diagnostics=True,
            rule_severities={"types.no_any": "warning"},
        )
        path = tmp_path / "nested" / ".tvcheck.yml"
        save_config(config, str(path))
        loaded = load_config(str(path))

        assert loaded.enabled_rules == ["types.*"]
        assert loaded.highlight_diagnostics is True
        assert loaded.rule_severities == {"types.no_any": "warning"}

    def test_find_config_walks_up(self, tmp_path):
        (tmp_path / ".tvcheck.yml").write_text("{}\n", encoding="utf-8")
        nested = tmp_path / "src" / "components"
        nested.mkdir(parents=True)
        source = nested / "App.tsx"
        source.write_text("", encoding="utf-8")

        assert find_config_file(str(nested)) == str(tmp_path / ".tvcheck.yml")
        assert find_config_file(str(source)) == str(tmp_path / ".tvcheck.yml")

    def test_get_rule_severity(self):
        config = EngineConfig(rule_severities={"a.rule": "warning", "b.rule": "loud"})

        assert get_rule_severity("a.rule", config) == "warning"
        assert get_rule_severity("b.rule", config, "error") == "error"
        assert get_rule_severity("c.rule", config, "warning") == "warning"

    def test_rule_config_is_a_copy(self):
        config = EngineConfig(rule_configs={"x": {"k": 1}})
        config.rule_config("x")["k"] = 2
        assert config.rule_configs["x"]["k"] == 1

    def _load(self, tmp_path, body):
        path = tmp_path / ".tvcheck.yml"
        path.write_text(body, encoding="utf-8")
        return load_config(str(path))

    def test_severities_must_be_a_mapping(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="tvcheck.engine.config"):
            config = self._load(tmp_path, "rule_severities: [1, 2]\n")

        assert config.rule_severities == {}
        assert "rule_severities must be a mapping" in caplog.text

    def test_rule_config_entries_must_be_mappings(self, tmp_path):
        config = self._load(tmp_path, "rule_configs:\n  imports.folder_path: 5\n")
        assert config.rule_config("imports.folder_path") == {"skip_suffixes": [".scss"]}

    def test_enabled_rules_must_be_a_list(self, tmp_path):
        config = self._load(tmp_path, "enabled_rules: 'switch.*'\n")
        assert config.enabled_rules == ["*"]

        config = self._load(tmp_path, "enabled_rules: ['switch.*', 3]\n")
        assert config.enabled_rules == ["*"]

    def test_flags_must_be_booleans(self, tmp_path):
        config = self._load(tmp_path, "highlight_diagnostics: 'yes please'\n")
        assert config.highlight_diagnostics is False

    def test_null_sections_keep_defaults(self, tmp_path):
        config = self._load(tmp_path, "rule_severities:\nrule_configs:\n")
        assert config.rule_severities == {}
        assert config.rule_config("naming.handler_prefix") == {"prefix": "handle"}
