"""Rules command: resolved analyzer severities for the analyzer front end."""

import click

from ..rules import RuleEntry, RuleTable
from .options import load_settings_or_exit, settings_options

EDITORCONFIG_HEADER = ["# Generated by stdguard", "[*.cs]"]


def format_rule(entry: RuleEntry) -> str:
    line = f"{entry.id}: {entry.severity.value}"
    if entry.overridden:
        line += f" (default: {entry.default_severity.value})"
    if entry.rationale:
        line += f" - {entry.rationale}"
    return line


def format_text(table: RuleTable, active_only: bool) -> list[str]:
    lines = [
        f"Total Rules: {len(table)}",
        f"Active Rules: {len(table.active_rules)}",
        "",
    ]
    for entry in table:
        if active_only and not entry.enabled:
            continue
        lines.append(format_rule(entry))
    return lines


def format_editorconfig(table: RuleTable, active_only: bool) -> list[str]:
    lines = list(EDITORCONFIG_HEADER)
    for rule_id, severity in table.severities(include_disabled=not active_only):
        lines.append(f"dotnet_diagnostic.{rule_id}.severity = {severity.editorconfig_value}")
    return lines


@click.command()
@settings_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "editorconfig"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("--active-only", is_flag=True, help="Omit rules resolved to 'off'")
@click.help_option("-h", "--help")
def rules(output_format, active_only, **settings_kwargs):
    """Show resolved analyzer rule severities."""
    settings = load_settings_or_exit(**settings_kwargs)

    match output_format:
        case "editorconfig":
            lines = format_editorconfig(settings.rules, active_only)
        case _:
            lines = format_text(settings.rules, active_only)
            if settings.warnings:
                lines.append("")
                lines.append("Unknown Rule Overrides:")
                lines.extend(f"  {warning}" for warning in settings.warnings)

    click.echo("\n".join(lines))
