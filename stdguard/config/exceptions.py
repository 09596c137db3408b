"""Error types raised while resolving standards configuration."""

from dataclasses import dataclass


class StandardsError(Exception):
    """Base class for errors that abort a standards resolution run."""


class ConfigError(StandardsError):
    """Malformed or unparseable configuration value.

    Only fixable by editing the offending file or command line, so the
    message always names the key, the layer that supplied it and the raw value
    when they are known.
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        layer: str | None = None,
        value: str | None = None,
        source_path: str | None = None,
    ):
        self.key = key
        self.layer = layer
        self.value = value
        self.source_path = source_path

        details = []
        if key is not None:
            details.append(f"key '{key}'")
        if layer is not None:
            details.append(f"layer {layer}")
        if source_path is not None:
            details.append(f"file {source_path}")
        if value is not None:
            details.append(f"value '{value}'")

        full_message = f"{message} ({', '.join(details)})" if details else message
        super().__init__(full_message)


class GuardrailError(StandardsError):
    """An environment precondition is not met; the build must stop."""

    def __init__(
        self,
        message: str,
        precondition: str,
        detected: str | None = None,
        required: str | None = None,
    ):
        self.precondition = precondition
        self.detected = detected
        self.required = required
        super().__init__(message)


@dataclass(frozen=True)
class UnknownRuleWarning:
    """An override referenced a rule id missing from the rule table."""

    rule_id: str
    action: str
    layer: str | None = None

    def __str__(self) -> str:
        origin = f" from {self.layer}" if self.layer else ""
        return f"Unknown rule '{self.rule_id}' in {self.action} override{origin}; ignored"
