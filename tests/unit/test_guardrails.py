"""Tests for the toolchain guardrail."""

import pytest

from stdguard.config import ConfigError, ConfigResolver, GuardrailError, LayerType
from stdguard.environment import EnvironmentProbe
from stdguard.guardrails import GuardrailValidator
from tests.utils import layer


class TestGuardrailValidator:
    def test_older_toolchain_fails_with_both_versions(self):
        validator = GuardrailValidator(minimum_version="8.0.0")

        with pytest.raises(GuardrailError) as exc_info:
            validator.validate(EnvironmentProbe(toolchain_version="7.0.0"))

        error = exc_info.value
        assert "7.0.0" in str(error)
        assert "8.0.0" in str(error)
        assert error.detected == "7.0.0"
        assert error.required == "8.0.0"
        assert error.precondition == "toolchain version"
        assert "\n" not in str(error)

    @pytest.mark.parametrize("detected", ["8.0.0", "8.0.100", "9.0.0", "8.1"])
    def test_equal_or_newer_toolchain_passes(self, detected):
        GuardrailValidator(minimum_version="8.0.0").validate(
            EnvironmentProbe(toolchain_version=detected)
        )

    def test_comparison_is_numeric_not_lexical(self):
        GuardrailValidator(minimum_version="9.0.0").validate(
            EnvironmentProbe(toolchain_version="10.0.0")
        )

    def test_prerelease_suffix_ignored(self):
        GuardrailValidator(minimum_version="8.0.0").validate(
            EnvironmentProbe(toolchain_version="8.0.100-rc.2")
        )

    def test_undetected_toolchain_is_skipped(self, caplog):
        with caplog.at_level("WARNING"):
            GuardrailValidator(minimum_version="8.0.0").validate(EnvironmentProbe())

        assert "not detected" in caplog.text

    def test_no_minimum_configured(self):
        GuardrailValidator(minimum_version=None).validate(
            EnvironmentProbe(toolchain_version="1.0.0")
        )

    def test_disabled_guardrail_skips_check(self):
        GuardrailValidator(minimum_version="8.0.0", enabled=False).validate(
            EnvironmentProbe(toolchain_version="7.0.0")
        )

    def test_malformed_minimum_is_config_error(self):
        validator = GuardrailValidator(minimum_version="latest")

        with pytest.raises(ConfigError) as exc_info:
            validator.validate(EnvironmentProbe(toolchain_version="8.0.0"))

        assert exc_info.value.key == "MinimumToolchainVersion"

    def test_malformed_minimum_names_its_layer(self):
        validator = GuardrailValidator(
            minimum_version="latest",
            minimum_version_layer="Project (/repo/.stdguard/config.yml)",
        )

        with pytest.raises(ConfigError) as exc_info:
            validator.validate(EnvironmentProbe(toolchain_version="8.0.0"))

        assert exc_info.value.layer == "Project (/repo/.stdguard/config.yml)"
        assert exc_info.value.value == "latest"

    def test_malformed_detected_version_is_guardrail_error(self):
        validator = GuardrailValidator(minimum_version="8.0.0")

        with pytest.raises(GuardrailError, match="not a valid version"):
            validator.validate(EnvironmentProbe(toolchain_version="unknown"))

    def test_from_config(self):
        config = ConfigResolver(
            [
                layer(
                    LayerType.PROJECT,
                    MinimumToolchainVersion="8.0.0",
                    EnableToolchainGuardrail="no",
                )
            ]
        ).resolve_all()

        validator = GuardrailValidator.from_config(config)

        assert validator.minimum_version == "8.0.0"
        assert validator.enabled is False
        assert validator.minimum_version_layer == "Project"
