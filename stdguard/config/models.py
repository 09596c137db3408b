"""Pydantic models for configuration validation."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..rules import OverrideAction, OverrideDirective, RuleEntry, Severity


def _validate_rule_id(rule_id: str) -> str:
    """
    Validate a rule identifier.

    Args:
        rule_id: Identifier as written in the configuration

    Returns:
        The identifier, unchanged (ids are case-sensitive)

    Raises:
        ValueError: If the identifier is empty or contains whitespace
    """
    if not rule_id or not rule_id.strip():
        raise ValueError("Rule id must be a non-empty string")
    if any(char.isspace() for char in rule_id):
        raise ValueError(f"Rule id '{rule_id}' must not contain whitespace")
    return rule_id


def _normalize_severity(value: Any) -> Any:
    # YAML 1.1 reads a bare `off` as False
    if value is False:
        return Severity.OFF.value
    if isinstance(value, str):
        normalized = value.strip().lower()
        return Severity.OFF.value if normalized == "none" else normalized
    return value


def _normalize_property_value(name: str, value: Any) -> str:
    # bool must be checked before int, YAML gives us both
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise ValueError(f"Property '{name}' must be a scalar value, got {type(value).__name__}")


class RuleEntryModel(BaseModel):
    """Rule table entry."""

    id: str
    severity: Severity
    rationale: str = ""

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v: Any) -> Any:
        return _normalize_severity(v)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        return _validate_rule_id(v)

    def to_entry(self) -> RuleEntry:
        return RuleEntry(id=self.id, default_severity=self.severity, rationale=self.rationale)


class OverrideModel(BaseModel):
    """Override directive for a single rule."""

    rule: str
    action: OverrideAction | None = None
    severity: Severity | None = None

    @field_validator("rule")
    @classmethod
    def validate_rule(cls, v: str) -> str:
        return _validate_rule_id(v)

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v: Any) -> Any:
        return _normalize_severity(v)

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v: Any) -> Any:
        """Accept `set-severity` as well as `set_severity`."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    @model_validator(mode="after")
    def validate_action_and_severity(self) -> "OverrideModel":
        """Infer set_severity from a bare severity and reject contradictory fields."""
        if self.action is None:
            if self.severity is None:
                raise ValueError(f"Override for '{self.rule}' needs an 'action' or a 'severity'")
            self.action = OverrideAction.SET_SEVERITY

        if self.action is OverrideAction.SET_SEVERITY and self.severity is None:
            raise ValueError(
                f"Override for '{self.rule}' with action set_severity needs a 'severity'"
            )

        if self.action is not OverrideAction.SET_SEVERITY and self.severity is not None:
            raise ValueError(
                f"Override for '{self.rule}' cannot combine action '{self.action.value}' "
                "with a severity"
            )

        return self

    def to_directive(self, layer: str | None = None) -> OverrideDirective:
        return OverrideDirective(
            rule_id=self.rule, action=self.action, severity=self.severity, layer=layer
        )


class LayerFile(BaseModel):
    """Top-level structure of a layer or rule table file."""

    properties: dict[str, str] = Field(default_factory=dict)
    overrides: list[OverrideModel] = Field(default_factory=list)
    rules: list[RuleEntryModel] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def normalize_properties(cls, v: Any) -> Any:
        """Coerce YAML scalars to the string values build properties carry."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("'properties' must be a mapping of name to value")

        normalized = {}
        for name, value in v.items():
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"Property name '{name}' must be a non-empty string")
            normalized[name] = _normalize_property_value(name, value)
        return normalized

    @field_validator("overrides", "rules", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("rules")
    @classmethod
    def validate_unique_rules(cls, v: list[RuleEntryModel]) -> list[RuleEntryModel]:
        seen = set()
        for entry in v:
            if entry.id in seen:
                raise ValueError(f"Duplicate rule id '{entry.id}' in rule table")
            seen.add(entry.id)
        return v
