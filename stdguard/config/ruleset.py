"""Rule table loading and override application."""

import logging
from dataclasses import dataclass, field

from ..rules import OverrideDirective, RuleEntry, RuleTable
from .exceptions import ConfigError, UnknownRuleWarning
from .types import PropertySource

logger = logging.getLogger(__name__)


@dataclass
class RuleSetResult:
    table: RuleTable
    warnings: list[UnknownRuleWarning] = field(default_factory=list)

    def severities(self, include_disabled: bool = True):
        return self.table.severities(include_disabled=include_disabled)


class RuleSetLoader:
    """Builds the rule table and applies override directives in order."""

    def build_table(self, sources: list[PropertySource]) -> RuleTable:
        """
        Collect rule entries from every source into one table.

        Raises:
            ConfigError: If the same rule id is declared twice
        """
        table = RuleTable()
        declared_in: dict[str, str] = {}

        for source in sources:
            for entry in source.rules:
                if entry.id in table:
                    raise ConfigError(
                        f"Duplicate rule id '{entry.id}', already declared in "
                        f"{declared_in[entry.id]}",
                        layer=source.display_name,
                        source_path=str(source.path) if source.path else None,
                    )
                # Copy so override application never touches the loaded source
                table.add(
                    RuleEntry(
                        id=entry.id,
                        default_severity=entry.default_severity,
                        rationale=entry.rationale,
                    )
                )
                declared_in[entry.id] = source.location

        return table

    def apply_overrides(
        self, table: RuleTable, overrides: list[OverrideDirective]
    ) -> list[UnknownRuleWarning]:
        """
        Apply overrides in the order given; the last one per rule id wins.

        Overrides naming a rule that is not in the table are skipped and
        reported as warnings so newer configuration keeps working against an
        older rule table.

        Returns:
            One warning per override that referenced an unknown rule
        """
        warnings = []

        for directive in overrides:
            entry = table.get(directive.rule_id)
            if entry is None:
                warnings.append(
                    UnknownRuleWarning(
                        rule_id=directive.rule_id,
                        action=directive.action.value,
                        layer=directive.layer,
                    )
                )
                continue

            entry.override_severity = directive.target_severity(entry)
            logger.debug(
                f"Override {directive.describe()} -> {entry.id}={entry.severity.value}"
            )

        return warnings

    def load(
        self, sources: list[PropertySource], overrides: list[OverrideDirective] | None = None
    ) -> RuleSetResult:
        """
        Build the rule table from `sources` and apply overrides.

        Layer overrides are applied in source order, followed by `overrides`.
        Unknown rule warnings are logged together once loading is complete.
        """
        table = self.build_table(sources)

        directives = [directive for source in sources for directive in source.overrides]
        directives.extend(overrides or [])

        warnings = self.apply_overrides(table, directives)
        if warnings:
            logger.warning(
                f"{len(warnings)} override(s) referenced unknown rules:\n"
                + "\n".join(f"  {warning}" for warning in warnings)
            )

        logger.debug(f"Loaded {len(table)} rules, {len(table.active_rules)} active")
        return RuleSetResult(table=table, warnings=warnings)
