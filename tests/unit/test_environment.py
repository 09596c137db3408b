"""Tests for environment detection."""

import pytest

from stdguard.environment import (
    EXPLICIT_OVERRIDE_SIGNAL,
    EnvironmentProbe,
    detect_environment,
    environment_properties,
)


class TestDetectEnvironment:
    def test_no_signals(self):
        probe = detect_environment({})

        assert probe.is_ci is False
        assert probe.ci_vendor is None
        assert probe.ci_signal is None
        assert probe.detected_signals == ()
        assert probe.toolchain_version is None

    @pytest.mark.parametrize(
        "environ,vendor,signal",
        [
            ({"GITHUB_ACTIONS": "true"}, "github-actions", "GITHUB_ACTIONS"),
            ({"TF_BUILD": "True"}, "azure-pipelines", "TF_BUILD"),
            ({"CI": "1"}, "generic", "CI"),
        ],
    )
    def test_single_signal(self, environ, vendor, signal):
        probe = detect_environment(environ)

        assert probe.is_ci is True
        assert probe.ci_vendor == vendor
        assert probe.ci_signal == signal

    def test_presence_only_ignores_value(self):
        probe = detect_environment({"GITHUB_ACTIONS": "false"})

        assert probe.is_ci is True
        assert probe.ci_signal == "GITHUB_ACTIONS"

    def test_conflicting_signals_follow_priority_order(self):
        probe = detect_environment({"CI": "true", "TF_BUILD": "True", "GITHUB_ACTIONS": "true"})

        assert probe.ci_vendor == "github-actions"
        assert probe.ci_signal == "GITHUB_ACTIONS"
        assert probe.detected_signals == ("GITHUB_ACTIONS", "TF_BUILD", "CI")
        assert probe.has_conflicting_signals is True

    def test_tf_build_beats_generic_ci(self):
        probe = detect_environment({"CI": "true", "TF_BUILD": "True"})

        assert probe.ci_signal == "TF_BUILD"

    def test_explicit_override_beats_everything(self):
        probe = detect_environment({"GITHUB_ACTIONS": "true"}, ci_override="jenkins")

        assert probe.ci_vendor == "jenkins"
        assert probe.ci_signal == EXPLICIT_OVERRIDE_SIGNAL
        assert probe.detected_signals == (EXPLICIT_OVERRIDE_SIGNAL, "GITHUB_ACTIONS")

    def test_explicit_override_from_environment(self):
        probe = detect_environment({"STDGUARD_CI_VENDOR": "gitlab", "CI": "true"})

        assert probe.ci_vendor == "gitlab"
        assert probe.ci_signal == EXPLICIT_OVERRIDE_SIGNAL

    def test_toolchain_version_from_environment(self):
        probe = detect_environment({"STDGUARD_TOOLCHAIN_VERSION": "8.0.100"})

        assert probe.toolchain_version == "8.0.100"

    def test_explicit_toolchain_version_wins(self):
        probe = detect_environment(
            {"STDGUARD_TOOLCHAIN_VERSION": "8.0.100"}, toolchain_version="9.0.0"
        )

        assert probe.toolchain_version == "9.0.0"

    def test_detection_is_deterministic(self):
        environ = {"CI": "true", "TF_BUILD": "True"}

        assert detect_environment(environ) == detect_environment(environ)

    def test_probe_is_frozen(self):
        probe = detect_environment({})

        with pytest.raises(AttributeError):
            probe.is_ci = True


class TestEnvironmentProperties:
    def test_ci_sets_build_properties(self):
        probe = EnvironmentProbe(is_ci=True, ci_vendor="generic", ci_signal="CI")

        assert environment_properties(probe) == {
            "ContinuousIntegrationBuild": "true",
            "Deterministic": "true",
            "TreatWarningsAsErrors": "true",
        }

    def test_local_build_sets_nothing(self):
        assert environment_properties(EnvironmentProbe()) == {}


class TestDescribe:
    def test_describe_local(self):
        lines = EnvironmentProbe(toolchain_version="8.0.100").describe()

        assert lines == ["Toolchain: 8.0.100", "CI: not detected"]

    def test_describe_conflict(self):
        probe = detect_environment({"CI": "true", "GITHUB_ACTIONS": "true"})

        lines = probe.describe()

        assert "CI: github-actions (signal: GITHUB_ACTIONS)" in lines
        assert "CI signals present: GITHUB_ACTIONS, CI" in lines
