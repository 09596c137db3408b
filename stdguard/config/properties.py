"""Known build properties, their kinds and documented defaults."""

import re
from dataclasses import dataclass
from enum import Enum

from .exceptions import ConfigError

TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})

_VERSION_RE = re.compile(r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-+].*)?\s*$")

Version = tuple[int, int, int]


class PropertyKind(Enum):
    BOOL = "bool"
    STRING = "string"
    VERSION = "version"


@dataclass(frozen=True)
class PropertyDefinition:
    name: str
    kind: PropertyKind
    default: str | None = None
    description: str = ""


PROPERTY_DEFINITIONS: dict[str, PropertyDefinition] = {
    definition.name: definition
    for definition in [
        PropertyDefinition(
            "TreatWarningsAsErrors",
            PropertyKind.BOOL,
            "false",
            "Fail the build on any analyzer warning",
        ),
        PropertyDefinition(
            "EnforceCodeStyleInBuild",
            PropertyKind.BOOL,
            "false",
            "Report IDE code style rules during build",
        ),
        PropertyDefinition(
            "GenerateDocumentationFile",
            PropertyKind.BOOL,
            "false",
            "Emit XML documentation so documentation rules can run",
        ),
        PropertyDefinition("Nullable", PropertyKind.STRING, None, "Nullable reference context"),
        PropertyDefinition("LangVersion", PropertyKind.STRING, None, "Language version"),
        PropertyDefinition("AnalysisLevel", PropertyKind.STRING, None, "Analyzer rule set level"),
        PropertyDefinition(
            "ContinuousIntegrationBuild",
            PropertyKind.BOOL,
            "false",
            "Build runs on a CI server",
        ),
        PropertyDefinition("Deterministic", PropertyKind.BOOL, "false", "Deterministic output"),
        PropertyDefinition(
            "MinimumToolchainVersion",
            PropertyKind.VERSION,
            None,
            "Lowest toolchain version the standards support",
        ),
        PropertyDefinition(
            "EnableToolchainGuardrail",
            PropertyKind.BOOL,
            "true",
            "Abort when the toolchain is older than MinimumToolchainVersion",
        ),
    ]
}


def parse_bool(raw: str, key: str, layer: str | None = None) -> bool:
    """
    Parse a boolean property value.

    Accepts true/false, 1/0 and yes/no in any case. Anything else is an error;
    there is no fallback to a default.

    Raises:
        ConfigError: If the value is not a recognised boolean
    """
    normalized = raw.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigError("Invalid boolean value", key=key, layer=layer, value=raw)


def parse_version(raw: str) -> Version:
    """
    Parse a `major.minor.patch` version into a comparable tuple.

    Missing minor or patch components count as zero and any pre-release or
    build suffix is ignored.

    Raises:
        ValueError: If the string is not a version
    """
    match = _VERSION_RE.match(raw)
    if not match:
        raise ValueError(f"Invalid version '{raw}'")
    major, minor, patch = match.groups()
    return int(major), int(minor or 0), int(patch or 0)


def format_version(version: Version) -> str:
    return ".".join(str(part) for part in version)


def validate_property(name: str, raw: str, layer: str | None = None) -> None:
    """Check a value against its definition; unknown properties are free-form strings."""
    definition = PROPERTY_DEFINITIONS.get(name)
    if definition is None:
        return

    match definition.kind:
        case PropertyKind.BOOL:
            parse_bool(raw, key=name, layer=layer)
        case PropertyKind.VERSION:
            try:
                parse_version(raw)
            except ValueError as e:
                raise ConfigError("Invalid version value", key=name, layer=layer, value=raw) from e
        case PropertyKind.STRING:
            pass
