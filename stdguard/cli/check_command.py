"""Check command: run the environment guardrails and nothing else."""

import click

from ..guardrails import MINIMUM_VERSION_PROPERTY
from .options import load_settings_or_exit, settings_options


@click.command()
@settings_options
@click.help_option("-h", "--help")
def check(**settings_kwargs):
    """Verify environment preconditions before a build."""
    settings = load_settings_or_exit(load_rules=False, **settings_kwargs)

    lines = settings.probe.describe()
    minimum = settings.config.value(MINIMUM_VERSION_PROPERTY)
    if minimum is not None:
        lines.append(f"Minimum toolchain: {minimum}")
    lines.append("Guardrails: passed")

    click.echo("\n".join(lines))
