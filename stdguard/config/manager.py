"""Orchestrates loading, resolution, guardrails and rule loading."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..environment import EnvironmentProbe, detect_environment, environment_properties
from ..guardrails import GuardrailValidator
from ..rules import OverrideDirective, RuleTable
from .exceptions import UnknownRuleWarning
from .loader import ConfigurationLoader
from .resolver import ConfigResolver
from .ruleset import RuleSetLoader
from .types import EffectiveConfig, LayerType, PropertySource

logger = logging.getLogger(__name__)


@dataclass
class BuildSettings:
    """Everything one build invocation needs, produced once up front."""

    probe: EnvironmentProbe
    sources: list[PropertySource]
    config: EffectiveConfig
    rules: RuleTable | None = None
    warnings: list[UnknownRuleWarning] = field(default_factory=list)


class ConfigurationManager:
    """Runs probe, layer loading, resolution, guardrails and rule loading in order."""

    def __init__(self, loader: ConfigurationLoader | None = None):
        self.loader = loader or ConfigurationLoader()
        self.rule_set_loader = RuleSetLoader()

    def build_layers(
        self,
        probe: EnvironmentProbe,
        command_line_properties: Mapping[str, str] | None = None,
        command_line_overrides: list[OverrideDirective] | None = None,
    ) -> list[PropertySource]:
        """Assemble every layer, lowest precedence first."""
        file_sources = self.loader.load_all_configurations()

        default_sources = [s for s in file_sources if s.layer_type == LayerType.DEFAULT]
        other_sources = [s for s in file_sources if s.layer_type != LayerType.DEFAULT]

        environment_source = PropertySource(
            layer_type=LayerType.ENVIRONMENT, properties=environment_properties(probe)
        )
        command_line_source = PropertySource(
            layer_type=LayerType.COMMAND_LINE,
            properties=dict(command_line_properties or {}),
            overrides=list(command_line_overrides or []),
        )

        return [*default_sources, environment_source, *other_sources, command_line_source]

    def load_settings(
        self,
        command_line_properties: Mapping[str, str] | None = None,
        command_line_overrides: list[OverrideDirective] | None = None,
        rule_table_paths: list[Path] | None = None,
        toolchain_version: str | None = None,
        ci_override: str | None = None,
        environ: Mapping[str, str] | None = None,
        load_rules: bool = True,
    ) -> BuildSettings:
        """
        Produce the settings for one build invocation.

        The guardrail check runs after properties resolve and before the rule
        table is touched, so a failing environment never gets a partial rule
        set.

        Raises:
            ConfigError: If any layer or property value is malformed
            GuardrailError: If an environment precondition is not met
        """
        probe = detect_environment(
            environ, toolchain_version=toolchain_version, ci_override=ci_override
        )
        sources = self.build_layers(probe, command_line_properties, command_line_overrides)

        config = ConfigResolver(sources).resolve_all()
        GuardrailValidator.from_config(config).validate(probe)

        settings = BuildSettings(probe=probe, sources=sources, config=config)
        if not load_rules:
            return settings

        rule_sources = list(sources)
        for path in rule_table_paths or []:
            # Extra tables only declare rules, keep the command line layer last
            rule_sources.insert(-1, self.loader.load_rule_table_file(path))

        result = self.rule_set_loader.load(rule_sources)
        settings.rules = result.table
        settings.warnings = result.warnings
        return settings
