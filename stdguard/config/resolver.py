"""Property resolution across configuration layers."""

import logging

from .properties import PROPERTY_DEFINITIONS, PropertyDefinition, parse_bool, validate_property
from .types import EffectiveConfig, LayerType, PropertySource, ResolvedProperty

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves properties over layers ordered lowest to highest precedence.

    Resolution never mutates the layers, so resolving the same key twice
    always gives the same answer.
    """

    def __init__(
        self,
        layers: list[PropertySource],
        definitions: dict[str, PropertyDefinition] | None = None,
    ):
        self.layers = list(layers)
        self.definitions = PROPERTY_DEFINITIONS if definitions is None else definitions

    def resolve(self, key: str) -> ResolvedProperty | None:
        """
        Resolve a single property.

        Args:
            key: Property name, matched exactly

        Returns:
            The value from the highest layer defining the key, the documented
            default when no layer does, or None when the key is undefined
        """
        for layer in reversed(self.layers):
            if key in layer.properties:
                return ResolvedProperty(
                    name=key,
                    value=layer.properties[key],
                    layer=layer.layer_type,
                    source_path=layer.path,
                )

        definition = self.definitions.get(key)
        if definition is not None and definition.default is not None:
            return ResolvedProperty(name=key, value=definition.default, layer=LayerType.BUILTIN)

        return None

    def resolve_bool(self, key: str) -> bool | None:
        """
        Resolve a boolean property.

        Raises:
            ConfigError: If the winning value is not a recognised boolean
        """
        resolved = self.resolve(key)
        if resolved is None:
            return None
        return parse_bool(resolved.value, key=key, layer=resolved.location)

    def keys(self) -> list[str]:
        """All keys any layer or definition can resolve, in first-seen order."""
        seen: dict[str, None] = {}
        for name, definition in self.definitions.items():
            if definition.default is not None:
                seen[name] = None
        for layer in self.layers:
            for name in layer.properties:
                seen[name] = None
        return list(seen)

    def resolve_all(self) -> EffectiveConfig:
        """
        Resolve every known key into an EffectiveConfig.

        Typed properties are validated here so a bad value fails the run up
        front instead of when something first reads it.

        Raises:
            ConfigError: If a typed property has an unparseable value
        """
        resolved = {}
        for key in self.keys():
            prop = self.resolve(key)
            if prop is None:
                continue
            validate_property(key, prop.value, layer=prop.location)
            resolved[key] = prop

        logger.debug(f"Resolved {len(resolved)} properties over {len(self.layers)} layers")
        return EffectiveConfig(resolved)
