"""Properties command: show the effective configuration and where each value came from."""

import click

from ..config import EffectiveConfig, PropertySource, ResolvedProperty
from .options import load_settings_or_exit, settings_options


def format_sources(sources: list[PropertySource]) -> list[str]:
    lines = ["Configuration Sources:"]
    for source in sources:
        if source.path is None:
            lines.append(f"  ✓ {source.display_name}: {len(source.properties)} properties")
        else:
            lines.append(f"  ✓ {source.display_name}: {source.path}")
    return lines


def format_property(prop: ResolvedProperty) -> str:
    return f"{prop.name} = {prop.value}  [{prop.location}]"


def format_properties(config: EffectiveConfig) -> list[str]:
    lines = ["Effective Properties:"]
    for name in sorted(config, key=str.lower):
        lines.append(f"  {format_property(config[name])}")
    return lines


@click.command()
@settings_options
@click.option("--show-sources", is_flag=True, help="List the layers that contributed values")
@click.help_option("-h", "--help")
def properties(show_sources, **settings_kwargs):
    """Show effective build properties with their provenance."""
    settings = load_settings_or_exit(load_rules=False, **settings_kwargs)

    lines = []
    if show_sources:
        lines.extend(format_sources(settings.sources))
        lines.append("")
    lines.extend(format_properties(settings.config))

    click.echo("\n".join(lines))
