"""
Configuration management for the tvcheck engine.

This module provides configuration loading with sensible defaults for
rule selection, severities, and per-rule options.
"""

import copy
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from .types import SEVERITIES

logger = logging.getLogger(__name__)

CONFIG_NAMES = [".tvcheck.yml", ".tvcheck.yaml", "tvcheck.yml", "tvcheck.yaml"]

DEFAULTS: Dict[str, Any] = {
    "enabled_rules": ["*"],
    "reject_syntax_errors": True,
    "highlight_diagnostics": False,
    "rule_severities": {},
    "rule_configs": {
        "types.missing_return_type": {
            "scope_returns_to_body": False
        },
        "imports.folder_path": {
            "skip_suffixes": [".scss"]
        },
        "naming.handler_prefix": {
            "prefix": "handle"
        },
        "react.map_key": {
            "inspect_expression_bodies": True
        }
    }
}


@dataclass
class EngineConfig:
    """Configuration for the tvcheck engine."""

    # Rule id glob patterns; "*" runs everything applicable
    enabled_rules: List[str] = None

    # Treat trees with syntax errors as parse failures
    reject_syntax_errors: bool = True

    # Mirror every diagnostic range into the highlight list
    highlight_diagnostics: bool = False

    # Rule severity overrides (rule_id -> severity)
    rule_severities: Dict[str, str] = None

    # Rule-specific configuration
    rule_configs: Dict[str, Dict[str, Any]] = None

    def __post_init__(self):
        if self.enabled_rules is None:
            object.__setattr__(self, 'enabled_rules', ["*"])
        if self.rule_severities is None:
            object.__setattr__(self, 'rule_severities', {})
        if self.rule_configs is None:
            object.__setattr__(self, 'rule_configs', {})

    def rule_config(self, rule_id: str) -> Dict[str, Any]:
        """Options for one rule (a copy; rules may not mutate config)."""
        return dict(self.rule_configs.get(rule_id, {}))


def _merge(defaults: Dict[str, Any], file_config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge a parsed config file over ``defaults``.

    Raises:
        ValueError: a known key holds a value of the wrong shape
    """
    merged = copy.deepcopy(defaults)
    for key, value in file_config.items():
        if key not in merged:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        if key == "rule_configs":
            for rule_id, rule_config in _mapping(key, value).items():
                merged["rule_configs"].setdefault(rule_id, {}).update(
                    _mapping(f"rule_configs.{rule_id}", rule_config)
                )
        elif key == "rule_severities":
            for rule_id, severity in _mapping(key, value).items():
                if severity not in SEVERITIES:
                    logger.warning("Ignoring severity %r for rule %s", severity, rule_id)
                    continue
                merged["rule_severities"][rule_id] = severity
        elif key == "enabled_rules":
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ValueError(f"enabled_rules must be a list of strings, got {value!r}")
            merged[key] = value
        elif not isinstance(value, bool):
            raise ValueError(f"{key} must be true or false, got {value!r}")
        else:
            merged[key] = value
    return merged


def _mapping(key: str, value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be a mapping, got {value!r}")
    return value


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        EngineConfig instance
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top level of config must be a mapping")
            return EngineConfig(**_merge(DEFAULTS, file_config))
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning("Failed to load config from %s: %s; using defaults", config_path, e)

    return EngineConfig(**copy.deepcopy(DEFAULTS))


def get_default_config() -> EngineConfig:
    """Get default configuration without loading from file."""
    return load_config(None)


def save_config(config: EngineConfig, config_path: str) -> None:
    """
    Save configuration to file.

    Args:
        config: EngineConfig to save
        config_path: Path where to save the config
    """
    config_dict = {
        "enabled_rules": config.enabled_rules,
        "reject_syntax_errors": config.reject_syntax_errors,
        "highlight_diagnostics": config.highlight_diagnostics,
        "rule_severities": config.rule_severities,
        "rule_configs": config.rule_configs
    }

    parent = os.path.dirname(config_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for .tvcheck.yml, .tvcheck.yaml, tvcheck.yml, tvcheck.yaml
    in that order in each directory.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)
    if os.path.isfile(current_path):
        current_path = os.path.dirname(current_path)

    while True:
        for config_name in CONFIG_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None


def get_rule_severity(rule_id: str, config: EngineConfig, default_severity: str = "error") -> str:
    """
    Get the configured severity for a rule, falling back to default.

    Args:
        rule_id: Rule identifier (e.g., "switch.missing_default")
        config: Engine configuration
        default_severity: Fallback severity if not configured

    Returns:
        Severity level ("error" or "warning")
    """
    severity = config.rule_severities.get(rule_id) if config.rule_severities else None
    if severity in SEVERITIES:
        return severity
    return default_severity
