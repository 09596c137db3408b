"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from stdguard.config import LayerType, PropertySource
from stdguard.rules import RuleEntry, Severity


@pytest.fixture
def temp_config_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_env(temp_config_dir):
    """Point every config location at empty temp dirs and drop CI/toolchain variables."""
    org_dir = temp_config_dir / "org"
    project_dir = temp_config_dir / "project"
    org_dir.mkdir()
    project_dir.mkdir()

    env = {
        "STDGUARD_ORG_CONFIG": str(org_dir),
        "STDGUARD_PROJECT_DIR": str(project_dir),
        "HOME": str(temp_config_dir),
    }
    with patch.dict(os.environ, env, clear=True):
        yield {"org": org_dir, "project": project_dir}


@pytest.fixture
def sample_rule_source():
    return PropertySource(
        layer_type=LayerType.DEFAULT,
        rules=[
            RuleEntry("CA1062", Severity.WARNING, "Validate arguments of public methods"),
            RuleEntry("CA2007", Severity.OFF, "ConfigureAwait"),
            RuleEntry("SA1600", Severity.SUGGESTION, "Elements must be documented"),
        ],
    )
