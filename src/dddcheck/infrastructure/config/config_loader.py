"""Configuration loader with support for YAML files and environment variables."""

import os
from pathlib import Path
from typing import Optional, Dict, Any, get_args, get_origin

import yaml
from pydantic import ValidationError

from ...domain.exceptions import ConfigurationError
from .config_models import DddCheckConfig


class ConfigLoader:
    """
    Load and manage dddcheck configuration.

    Configuration is loaded in the following order (later sources override earlier):
    1. Default configuration (embedded in code)
    2. Global configuration (~/.dddcheck/config.yaml)
    3. Project configuration (./dddcheck.yaml or ./.dddcheck.yaml)
    4. User-specified configuration file
    5. Environment variables (DDDCHECK_<SECTION>_<KEY>)
    """

    ENV_PREFIX = "DDDCHECK_"

    @classmethod
    def default_config_paths(cls) -> list[Path]:
        """Locations searched for configuration files, lowest precedence first."""
        return [
            Path.home() / ".dddcheck" / "config.yaml",
            Path("./dddcheck.yaml"),
            Path("./.dddcheck.yaml"),
        ]

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> DddCheckConfig:
        """
        Load configuration from multiple sources.

        Args:
            config_path: Optional path to configuration file

        Returns:
            DddCheckConfig instance

        Raises:
            FileNotFoundError: If config_path does not exist
            ConfigurationError: If a file is not valid YAML or values are invalid
        """
        config_dict: Dict[str, Any] = {}

        for path in cls.default_config_paths():
            if path.exists():
                config_dict = cls._merge_dicts(config_dict, cls._load_yaml_file(path))

        if config_path:
            user_path = Path(config_path)
            if not user_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            config_dict = cls._merge_dicts(config_dict, cls._load_yaml_file(user_path))

        config_dict = cls._merge_dicts(config_dict, cls._load_from_env())

        try:
            return DddCheckConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_yaml_file(path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Args:
            path: Path to YAML file

        Returns:
            Configuration dictionary
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {path} must be a mapping")
        return data

    @staticmethod
    def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Recursively merge two dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary with overrides

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    @classmethod
    def _load_from_env(cls) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        The first segment after the prefix names the section, the rest is
        the key, so keys may contain underscores:
        - DDDCHECK_SCAN_MAX_WORKERS -> scan.max_workers
        - DDDCHECK_LOGGING_LEVEL -> logging.level

        Returns:
            Configuration dictionary from environment
        """
        config: Dict[str, Any] = {}
        sections = set(DddCheckConfig.model_fields) - {"markers"}

        for key, value in os.environ.items():
            if not key.startswith(cls.ENV_PREFIX):
                continue

            section, _, field_name = key[len(cls.ENV_PREFIX):].lower().partition('_')
            if section not in sections or not field_name:
                continue

            section_model = DddCheckConfig.model_fields[section].annotation
            field_info = section_model.model_fields.get(field_name)
            annotation = field_info.annotation if field_info is not None else None

            config.setdefault(section, {})[field_name] = cls._convert_env_value(value, annotation)

        return config

    @staticmethod
    def _convert_env_value(value: str, annotation: Any = None) -> Any:
        """
        Convert environment variable string to the target field's type.

        List fields always become lists, even from a single value. String
        fields are kept verbatim. Anything else is guessed from the text.

        Args:
            value: String value from environment
            annotation: Annotation of the target field, if known

        Returns:
            Converted value
        """
        if get_origin(annotation) is list:
            return [item.strip() for item in value.split(',') if item.strip()]

        if annotation is str or str in get_args(annotation):
            return value

        if value.lower() in ('true', 'yes'):
            return True
        if value.lower() in ('false', 'no'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        # List (comma-separated)
        if ',' in value:
            return [item.strip() for item in value.split(',') if item.strip()]

        return value

    @staticmethod
    def create_default_config(path: Optional[str] = None) -> Path:
        """
        Create a default configuration file.

        Args:
            path: Optional path for config file. If not provided, creates in ~/.dddcheck/

        Returns:
            Path to created configuration file
        """
        if path:
            config_path = Path(path)
            config_path.parent.mkdir(parents=True, exist_ok=True)
        else:
            config_dir = Path.home() / ".dddcheck"
            config_dir.mkdir(parents=True, exist_ok=True)
            config_path = config_dir / "config.yaml"

        yaml_content = DddCheckConfig().to_yaml()

        config_path.write_text(f"""# dddcheck configuration
#
# Override these settings with environment variables (DDDCHECK_<SECTION>_<KEY>)
# or by passing --config at runtime. Extra marker kinds go under `markers:`
# as entries with kind, package_path, type_name and optional field_name.

{yaml_content}""", encoding="utf-8")

        return config_path

    @classmethod
    def get_config_info(cls) -> Dict[str, Any]:
        """
        Get information about configuration sources.

        Returns:
            Dictionary with configuration information
        """
        info = {
            "default_paths": [str(p) for p in cls.default_config_paths()],
            "existing_configs": [],
            "env_overrides": [],
        }

        for path in cls.default_config_paths():
            if path.exists():
                info["existing_configs"].append(str(path))

        for key in os.environ.keys():
            if key.startswith(cls.ENV_PREFIX):
                info["env_overrides"].append(key)

        return info
