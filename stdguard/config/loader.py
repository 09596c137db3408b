"""Configuration loading from multiple sources."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import LayerFile
from .types import LayerType, PropertySource

logger = logging.getLogger(__name__)

ORG_CONFIG_ENV = "STDGUARD_ORG_CONFIG"
PROJECT_DIR_ENV = "STDGUARD_PROJECT_DIR"
CONFIG_FILENAME = "config.yml"


class LayerFileYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric scalars as written.

    Build properties are strings, so `9.10` must stay `9.10` instead of
    becoming the float 9.1, and `010` must not turn into 10.
    """


def _construct_scalar_text(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


LayerFileYamlLoader.add_constructor("tag:yaml.org,2002:int", _construct_scalar_text)
LayerFileYamlLoader.add_constructor("tag:yaml.org,2002:float", _construct_scalar_text)


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into `location: message` lines."""
    details = []
    for item in error.errors():
        location = " -> ".join(str(x) for x in item["loc"]) if item["loc"] else "root"
        details.append(f"{location}: {item['msg']}")
    return "\n".join(details)


class ConfigurationLoader:
    """Loads configuration layers from their fixed locations."""

    def find_default_config(self) -> PropertySource:
        """Find the default configuration shipped with the package."""
        default_path = Path(__file__).parent / "default.yml"

        return PropertySource(
            layer_type=LayerType.DEFAULT, path=default_path, exists=default_path.exists()
        )

    def find_org_config(self) -> PropertySource:
        """Find org-level configuration, checking environment variable override."""
        env_config_dir = os.getenv(ORG_CONFIG_ENV)

        if env_config_dir:
            validated_dir = self._validate_path(env_config_dir, ORG_CONFIG_ENV)
            config_path = validated_dir / CONFIG_FILENAME
        else:
            config_path = Path.home() / ".config" / "stdguard" / CONFIG_FILENAME

        return PropertySource(
            layer_type=LayerType.ORG, path=config_path, exists=config_path.exists()
        )

    def find_project_config(self) -> PropertySource:
        """Find project-level configuration using STDGUARD_PROJECT_DIR or current directory."""
        project_dir_env = os.getenv(PROJECT_DIR_ENV)
        if project_dir_env:
            project_root = self._validate_path(project_dir_env, PROJECT_DIR_ENV, check_exists=True)
        else:
            project_root = Path.cwd()

        config_path = project_root / ".stdguard" / CONFIG_FILENAME

        return PropertySource(
            layer_type=LayerType.PROJECT, path=config_path, exists=config_path.exists()
        )

    def discover_file_sources(self) -> list[PropertySource]:
        """Discover file-backed layers in precedence order."""
        return [self.find_default_config(), self.find_org_config(), self.find_project_config()]

    def load_yaml_file(self, source: PropertySource) -> PropertySource | None:
        """
        Load and validate a layer file.

        Returns the source populated with its properties, overrides and rule
        entries, or None when the file does not exist or is empty.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML or does
                not match the layer file schema
        """
        if not source.exists or source.path is None:
            logger.debug(f"Configuration file does not exist: {source.path}")
            return None

        try:
            with open(source.path, encoding="utf-8") as f:
                data = yaml.load(f, Loader=LayerFileYamlLoader)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse YAML: {e}",
                layer=source.display_name,
                source_path=str(source.path),
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Cannot read configuration file: {e}",
                layer=source.display_name,
                source_path=str(source.path),
            ) from e

        if data is None:
            logger.warning(f"Configuration file is empty: {source.path}")
            return None

        if not isinstance(data, dict):
            raise ConfigError(
                "Configuration file must contain a YAML mapping",
                layer=source.display_name,
                source_path=str(source.path),
            )

        try:
            layer_file = LayerFile.model_validate(data)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid configuration:\n{format_validation_error(e)}",
                layer=source.display_name,
                source_path=str(source.path),
            ) from e

        logger.debug(f"Successfully loaded configuration from: {source.path}")
        return PropertySource(
            layer_type=source.layer_type,
            path=source.path,
            exists=True,
            properties=dict(layer_file.properties),
            overrides=[override.to_directive(source.location) for override in layer_file.overrides],
            rules=[entry.to_entry() for entry in layer_file.rules],
        )

    def load_rule_table_file(self, path: Path) -> PropertySource:
        """Load an extra rule table file; it must exist."""
        source = PropertySource(layer_type=LayerType.COMMAND_LINE, path=path, exists=path.exists())
        if not source.exists:
            raise ConfigError("Rule table file not found", source_path=str(path))

        loaded = self.load_yaml_file(source)
        if loaded is None:
            return source

        if loaded.properties or loaded.overrides:
            logger.warning(f"Rule table file {path} only contributes 'rules'; other keys ignored")
        return PropertySource(
            layer_type=loaded.layer_type, path=loaded.path, exists=True, rules=loaded.rules
        )

    def load_all_configurations(self) -> list[PropertySource]:
        """Load all available file layers in precedence order."""
        configurations = []

        for source in self.discover_file_sources():
            config = self.load_yaml_file(source)
            if config is not None:
                configurations.append(config)

        return configurations

    def _validate_path(
        self, path_string: str, env_var_name: str, check_exists: bool = False
    ) -> Path:
        """
        Validate a directory path taken from an environment variable.

        Relative paths and `..` components are rejected outright rather than
        resolved, and every failure is a ConfigError naming the variable.

        Args:
            path_string: Raw path string from environment variable
            env_var_name: Name of environment variable for error messages
            check_exists: Raise when the path is not an existing directory

        Returns:
            Validated Path object

        Raises:
            ConfigError: If path is invalid or potentially unsafe
        """
        raw_path = Path(path_string).expanduser()

        if not raw_path.is_absolute():
            raise ConfigError(f"{env_var_name} must be an absolute path", value=path_string)

        if ".." in raw_path.parts:
            raise ConfigError(
                f"{env_var_name} cannot contain '..' path components", value=path_string
            )

        try:
            path = raw_path.resolve()
        except (OSError, RuntimeError) as e:
            raise ConfigError(f"Invalid {env_var_name} path: {e}", value=path_string) from e

        if check_exists and not path.is_dir():
            raise ConfigError(f"{env_var_name} directory does not exist", value=path_string)

        logger.debug(f"Validated {env_var_name}: {path}")
        return path
