from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    OFF = "off"
    SUGGESTION = "suggestion"
    WARNING = "warning"
    ERROR = "error"

    @property
    def editorconfig_value(self) -> str:
        """Value used in `dotnet_diagnostic.<id>.severity` entries."""
        return "none" if self is Severity.OFF else self.value


# Severity an `enable` directive restores when the rule ships switched off
ENABLED_FALLBACK_SEVERITY = Severity.WARNING


class OverrideAction(Enum):
    ENABLE = "enable"
    DISABLE = "disable"
    SET_SEVERITY = "set_severity"


@dataclass
class OverrideDirective:
    rule_id: str
    action: OverrideAction
    severity: Severity | None = None
    layer: str | None = None

    def target_severity(self, entry: "RuleEntry") -> Severity:
        """Severity this directive assigns, independent of earlier overrides."""
        match self.action:
            case OverrideAction.DISABLE:
                return Severity.OFF
            case OverrideAction.ENABLE:
                if entry.default_severity is Severity.OFF:
                    return ENABLED_FALLBACK_SEVERITY
                return entry.default_severity
            case OverrideAction.SET_SEVERITY:
                if self.severity is None:
                    raise ValueError(f"Override for '{self.rule_id}' is missing a severity")
                return self.severity

    def describe(self) -> str:
        if self.action is OverrideAction.SET_SEVERITY and self.severity is not None:
            return f"{self.rule_id}={self.severity.value}"
        return f"{self.action.value}:{self.rule_id}"


@dataclass
class RuleEntry:
    id: str
    default_severity: Severity
    rationale: str = ""
    override_severity: Severity | None = None

    @property
    def severity(self) -> Severity:
        if self.override_severity is not None:
            return self.override_severity
        return self.default_severity

    @property
    def enabled(self) -> bool:
        return self.severity is not Severity.OFF

    @property
    def overridden(self) -> bool:
        return self.override_severity is not None


class RuleTable:
    """Rule entries keyed by identifier.

    Identifiers are case-sensitive and unique. Insertion order is kept so
    listings follow the order rules were declared in.
    """

    def __init__(self, entries: list[RuleEntry] | None = None):
        self._entries: dict[str, RuleEntry] = {}
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: RuleEntry) -> None:
        if entry.id in self._entries:
            raise ValueError(f"Duplicate rule id '{entry.id}'")
        self._entries[entry.id] = entry

    def get(self, rule_id: str) -> RuleEntry | None:
        return self._entries.get(rule_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._entries

    def __getitem__(self, rule_id: str) -> RuleEntry:
        return self._entries[rule_id]

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def ids(self) -> list[str]:
        return list(self._entries)

    @property
    def active_rules(self) -> list[RuleEntry]:
        return [entry for entry in self._entries.values() if entry.enabled]

    def severities(self, include_disabled: bool = True) -> list[tuple[str, Severity]]:
        """(rule id, resolved severity) pairs for the analyzer front end."""
        return [
            (entry.id, entry.severity)
            for entry in self._entries.values()
            if include_disabled or entry.enabled
        ]
