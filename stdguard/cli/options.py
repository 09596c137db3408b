"""Options and error handling shared by the stdguard commands."""

import logging
import sys
from pathlib import Path

import click

from ..config import ConfigError, GuardrailError
from ..config.manager import BuildSettings, ConfigurationManager
from ..rules import OverrideAction, OverrideDirective, Severity
from ..utils import setup_logging

logger = logging.getLogger(__name__)

GUARDRAIL_EXIT_CODE = 1
CONFIG_EXIT_CODE = 2

COMMAND_LINE_LAYER = "command line"


def parse_property_argument(value: str) -> tuple[str, str]:
    """Parse `KEY=VALUE`, the same shape as msbuild's `-p:` switch."""
    name, sep, raw = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected KEY=VALUE, got '{value}'", param_hint="--property")
    return name.strip(), raw.strip()


def parse_override_argument(value: str) -> OverrideDirective:
    """Parse `enable:RULE`, `disable:RULE` or `RULE=SEVERITY`."""
    if "=" in value:
        rule_id, _, severity_name = value.partition("=")
        if not rule_id.strip():
            raise click.BadParameter(f"missing rule id in '{value}'", param_hint="--override")
        try:
            severity = Severity(severity_name.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in Severity)
            raise click.BadParameter(
                f"unknown severity '{severity_name}' (valid: {valid})", param_hint="--override"
            ) from None
        return OverrideDirective(
            rule_id=rule_id.strip(),
            action=OverrideAction.SET_SEVERITY,
            severity=severity,
            layer=COMMAND_LINE_LAYER,
        )

    action_name, sep, rule_id = value.partition(":")
    if not sep or not rule_id.strip():
        raise click.BadParameter(
            f"expected enable:RULE, disable:RULE or RULE=SEVERITY, got '{value}'",
            param_hint="--override",
        )
    try:
        action = OverrideAction(action_name.strip().lower())
    except ValueError:
        raise click.BadParameter(
            f"unknown override action '{action_name}'", param_hint="--override"
        ) from None
    if action is OverrideAction.SET_SEVERITY:
        raise click.BadParameter("use RULE=SEVERITY to set a severity", param_hint="--override")

    return OverrideDirective(rule_id=rule_id.strip(), action=action, layer=COMMAND_LINE_LAYER)


_SETTINGS_OPTIONS = [
    click.option(
        "--property",
        "-p",
        "properties",
        multiple=True,
        metavar="KEY=VALUE",
        help="Set a property in the command line layer (repeatable)",
    ),
    click.option(
        "--override",
        "-o",
        "overrides",
        multiple=True,
        metavar="DIRECTIVE",
        help="Rule override: enable:RULE, disable:RULE or RULE=SEVERITY (repeatable, ordered)",
    ),
    click.option(
        "--rule-table",
        "rule_tables",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Additional rule table file (repeatable)",
    ),
    click.option(
        "--toolchain-version",
        envvar="STDGUARD_TOOLCHAIN_VERSION",
        help="Toolchain version to check against MinimumToolchainVersion",
    ),
    click.option(
        "--ci-vendor",
        envvar="STDGUARD_CI_VENDOR",
        help="Treat the build as CI for this vendor, ignoring CI environment variables",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Enable verbose (debug) logging"),
]


def settings_options(func):
    """Attach the options every command uses to build its settings."""
    for option in reversed(_SETTINGS_OPTIONS):
        func = option(func)
    return func


def load_settings_or_exit(
    properties: tuple[str, ...],
    overrides: tuple[str, ...],
    rule_tables: tuple[Path, ...],
    toolchain_version: str | None,
    ci_vendor: str | None,
    verbose: bool,
    load_rules: bool = True,
) -> BuildSettings:
    """
    Run the configuration pipeline, turning fatal errors into exit codes.

    Guardrail failures exit with 1 and configuration errors with 2, each
    with a one-line diagnostic on stderr.
    """
    if verbose:
        setup_logging("DEBUG")

    command_line_properties = dict(parse_property_argument(value) for value in properties)
    command_line_overrides = [parse_override_argument(value) for value in overrides]

    try:
        return ConfigurationManager().load_settings(
            command_line_properties=command_line_properties,
            command_line_overrides=command_line_overrides,
            rule_table_paths=list(rule_tables),
            toolchain_version=toolchain_version,
            ci_override=ci_vendor,
            load_rules=load_rules,
        )
    except GuardrailError as e:
        logger.debug(f"Guardrail '{e.precondition}' failed", exc_info=True)
        click.echo(f"stdguard: error: {e}", err=True)
        sys.exit(GUARDRAIL_EXIT_CODE)
    except ConfigError as e:
        logger.debug("Configuration error", exc_info=True)
        click.echo(f"stdguard: error: {_single_line(str(e))}", err=True)
        sys.exit(CONFIG_EXIT_CODE)


def _single_line(message: str) -> str:
    return "; ".join(line.strip() for line in message.splitlines() if line.strip())
