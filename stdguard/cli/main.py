"""Main CLI entry point for stdguard."""

import sys

import click

from .. import __version__
from ..utils import setup_logging
from .check_command import check
from .properties_command import properties
from .rules_command import rules


@click.group(invoke_without_command=True)
@click.pass_context
@click.help_option("-h", "--help")
@click.version_option(__version__, "-V", "--version", prog_name="stdguard")
def main(ctx):
    """stdguard - Resolve coding standards properties, analyzer rules and build guardrails.

    Properties are layered package defaults, CI environment, org, project and
    command line, with later layers winning. Every command resolves them first.
    """
    setup_logging()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(1)


main.add_command(check)
main.add_command(properties)
main.add_command(rules)
