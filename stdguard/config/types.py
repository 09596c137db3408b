"""Core data types for configuration system."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from ..rules import OverrideDirective, RuleEntry
from .properties import parse_bool


class LayerType(Enum):
    """Configuration layers, lowest precedence first."""

    BUILTIN = "builtin"
    DEFAULT = "default"
    ENVIRONMENT = "environment"
    ORG = "org"
    PROJECT = "project"
    COMMAND_LINE = "command_line"

    @property
    def display_name(self) -> str:
        """Human-friendly name for this layer."""
        return {
            LayerType.BUILTIN: "Built-in",
            LayerType.DEFAULT: "Default",
            LayerType.ENVIRONMENT: "Environment",
            LayerType.ORG: "Org",
            LayerType.PROJECT: "Project",
            LayerType.COMMAND_LINE: "Command line",
        }[self]


@dataclass
class PropertySource:
    """One configuration layer: where it came from and what it defines."""

    layer_type: LayerType
    path: Path | None = None
    exists: bool = True
    properties: dict[str, str] = field(default_factory=dict)
    overrides: list[OverrideDirective] = field(default_factory=list)
    rules: list[RuleEntry] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.layer_type.display_name

    @property
    def location(self) -> str:
        """Layer name plus file path, for diagnostics."""
        if self.path is None:
            return self.display_name
        return f"{self.display_name} ({self.path})"


@dataclass(frozen=True)
class ResolvedProperty:
    name: str
    value: str
    layer: LayerType
    source_path: Path | None = None

    @property
    def location(self) -> str:
        if self.source_path is None:
            return self.layer.display_name
        return f"{self.layer.display_name} ({self.source_path})"


class EffectiveConfig(Mapping[str, ResolvedProperty]):
    """Final merged view of all layers.

    Read-only once built. Values are kept as the raw strings the winning layer
    supplied; typed accessors parse on read.
    """

    def __init__(self, properties: Mapping[str, ResolvedProperty]):
        self._properties = MappingProxyType(dict(properties))

    def __getitem__(self, name: str) -> ResolvedProperty:
        return self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        values = {name: prop.value for name, prop in self._properties.items()}
        return f"EffectiveConfig({values!r})"

    def value(self, name: str, default: str | None = None) -> str | None:
        prop = self._properties.get(name)
        return prop.value if prop is not None else default

    def get_bool(self, name: str, default: bool | None = None) -> bool | None:
        prop = self._properties.get(name)
        if prop is None:
            return default
        return parse_bool(prop.value, key=name, layer=prop.location)

    def provenance(self, name: str) -> LayerType | None:
        prop = self._properties.get(name)
        return prop.layer if prop is not None else None

    def as_dict(self) -> dict[str, str]:
        return {name: prop.value for name, prop in self._properties.items()}
