"""Shared test utilities for building layers and config files."""

from pathlib import Path

import yaml

from stdguard.config import LayerType, PropertySource
from stdguard.rules import OverrideAction, OverrideDirective, Severity


def layer(layer_type: LayerType = LayerType.PROJECT, path: Path | None = None, **properties):
    return PropertySource(layer_type=layer_type, path=path, properties=dict(properties))


def disable(rule_id: str) -> OverrideDirective:
    return OverrideDirective(rule_id=rule_id, action=OverrideAction.DISABLE)


def enable(rule_id: str) -> OverrideDirective:
    return OverrideDirective(rule_id=rule_id, action=OverrideAction.ENABLE)


def set_severity(rule_id: str, severity: Severity) -> OverrideDirective:
    return OverrideDirective(
        rule_id=rule_id, action=OverrideAction.SET_SEVERITY, severity=severity
    )


def create_yaml_config(config_dir: Path, filename: str, config_data: dict) -> Path:
    config_path = config_dir / filename
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


def create_project_config(project_dir: Path, config_data: dict) -> Path:
    return create_yaml_config(project_dir / ".stdguard", "config.yml", config_data)
