"""Detection of toolchain and CI facts for the current process."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

EXPLICIT_OVERRIDE_SIGNAL = "explicit override"

# Highest priority first; an explicit override always outranks these
CI_SIGNALS: list[tuple[str, str]] = [
    ("GITHUB_ACTIONS", "github-actions"),
    ("TF_BUILD", "azure-pipelines"),
    ("CI", "generic"),
]

TOOLCHAIN_VERSION_ENV = "STDGUARD_TOOLCHAIN_VERSION"
CI_VENDOR_ENV = "STDGUARD_CI_VENDOR"


@dataclass(frozen=True)
class EnvironmentProbe:
    """Facts gathered once per invocation; never mutated afterwards."""

    toolchain_version: str | None = None
    is_ci: bool = False
    ci_vendor: str | None = None
    ci_signal: str | None = None
    detected_signals: tuple[str, ...] = ()

    @property
    def has_conflicting_signals(self) -> bool:
        return len(self.detected_signals) > 1

    def describe(self) -> list[str]:
        lines = [f"Toolchain: {self.toolchain_version or 'not detected'}"]
        if self.is_ci:
            lines.append(f"CI: {self.ci_vendor} (signal: {self.ci_signal})")
        else:
            lines.append("CI: not detected")
        if self.has_conflicting_signals:
            lines.append(f"CI signals present: {', '.join(self.detected_signals)}")
        return lines


def detect_environment(
    environ: Mapping[str, str] | None = None,
    toolchain_version: str | None = None,
    ci_override: str | None = None,
) -> EnvironmentProbe:
    """
    Build an EnvironmentProbe from environment variables.

    CI variables are checked for presence only. When several are present the
    first in priority order wins: explicit override, GITHUB_ACTIONS, TF_BUILD,
    then the generic CI flag.

    Args:
        environ: Environment to inspect, defaults to os.environ
        toolchain_version: Explicit toolchain version, wins over the environment
        ci_override: Explicit CI vendor, wins over every CI signal

    Returns:
        Immutable probe describing the environment
    """
    if environ is None:
        environ = os.environ

    version = toolchain_version or environ.get(TOOLCHAIN_VERSION_ENV) or None
    override = ci_override or environ.get(CI_VENDOR_ENV) or None

    detected = []
    if override:
        detected.append(EXPLICIT_OVERRIDE_SIGNAL)
    detected.extend(name for name, _ in CI_SIGNALS if name in environ)

    if override:
        vendor, signal = override, EXPLICIT_OVERRIDE_SIGNAL
    else:
        vendor, signal = next(
            ((vendor, name) for name, vendor in CI_SIGNALS if name in environ),
            (None, None),
        )

    if len(detected) > 1:
        logger.debug(f"Multiple CI signals present ({', '.join(detected)}), using {signal}")

    probe = EnvironmentProbe(
        toolchain_version=version,
        is_ci=signal is not None,
        ci_vendor=vendor,
        ci_signal=signal,
        detected_signals=tuple(detected),
    )
    logger.debug(f"Detected environment: {probe}")
    return probe


def environment_properties(probe: EnvironmentProbe) -> dict[str, str]:
    """Property values implied by the detected environment."""
    if not probe.is_ci:
        return {}
    return {
        "ContinuousIntegrationBuild": "true",
        "Deterministic": "true",
        "TreatWarningsAsErrors": "true",
    }
