"""Configuration loading and resolution for stdguard."""

from .exceptions import ConfigError, GuardrailError, StandardsError, UnknownRuleWarning
from .loader import ConfigurationLoader
from .models import LayerFile, OverrideModel, RuleEntryModel
from .properties import PROPERTY_DEFINITIONS, PropertyDefinition, PropertyKind, parse_bool
from .resolver import ConfigResolver
from .ruleset import RuleSetLoader, RuleSetResult
from .types import EffectiveConfig, LayerType, PropertySource, ResolvedProperty

__all__ = [
    "ConfigError",
    "ConfigResolver",
    "ConfigurationLoader",
    "EffectiveConfig",
    "GuardrailError",
    "LayerFile",
    "LayerType",
    "OverrideModel",
    "PROPERTY_DEFINITIONS",
    "PropertyDefinition",
    "PropertyKind",
    "PropertySource",
    "ResolvedProperty",
    "RuleEntryModel",
    "RuleSetLoader",
    "RuleSetResult",
    "StandardsError",
    "UnknownRuleWarning",
    "parse_bool",
]
