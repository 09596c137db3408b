"""Environment preconditions checked before any rule is loaded."""

import logging

from .config.exceptions import ConfigError, GuardrailError
from .config.properties import format_version, parse_version
from .config.types import EffectiveConfig
from .environment import EnvironmentProbe

logger = logging.getLogger(__name__)

MINIMUM_VERSION_PROPERTY = "MinimumToolchainVersion"
GUARDRAIL_ENABLED_PROPERTY = "EnableToolchainGuardrail"


class GuardrailValidator:
    """Fails fast when the environment cannot build with these standards."""

    def __init__(
        self,
        minimum_version: str | None,
        enabled: bool = True,
        minimum_version_layer: str | None = None,
    ):
        self.minimum_version = minimum_version
        self.enabled = enabled
        self.minimum_version_layer = minimum_version_layer

    @classmethod
    def from_config(cls, config: EffectiveConfig) -> "GuardrailValidator":
        minimum = config.get(MINIMUM_VERSION_PROPERTY)
        return cls(
            minimum_version=minimum.value if minimum is not None else None,
            enabled=config.get_bool(GUARDRAIL_ENABLED_PROPERTY, default=True),
            minimum_version_layer=minimum.location if minimum is not None else None,
        )

    def validate(self, probe: EnvironmentProbe) -> None:
        """
        Check the probe against the configured preconditions.

        Raises:
            GuardrailError: If the detected toolchain is older than required
            ConfigError: If the required version itself is malformed
        """
        if not self.enabled:
            logger.info(f"Toolchain guardrail disabled by {GUARDRAIL_ENABLED_PROPERTY}")
            return

        if self.minimum_version is None:
            logger.debug("No minimum toolchain version configured")
            return

        try:
            required = parse_version(self.minimum_version)
        except ValueError as e:
            raise ConfigError(
                "Invalid version value",
                key=MINIMUM_VERSION_PROPERTY,
                layer=self.minimum_version_layer,
                value=self.minimum_version,
            ) from e

        if probe.toolchain_version is None:
            logger.warning(
                f"Toolchain version not detected, skipping minimum version check "
                f"({format_version(required)})"
            )
            return

        try:
            detected = parse_version(probe.toolchain_version)
        except ValueError as e:
            raise GuardrailError(
                f"Detected toolchain version '{probe.toolchain_version}' is not a valid version",
                precondition="toolchain version",
                detected=probe.toolchain_version,
                required=self.minimum_version,
            ) from e

        if detected < required:
            raise GuardrailError(
                f"Toolchain version {probe.toolchain_version} is older than the required "
                f"minimum {self.minimum_version}",
                precondition="toolchain version",
                detected=probe.toolchain_version,
                required=self.minimum_version,
            )

        logger.debug(
            f"Toolchain version {probe.toolchain_version} satisfies minimum {self.minimum_version}"
        )
