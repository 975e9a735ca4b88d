"""Configuration loader with YAML parsing and environment variable substitution."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional
from .models import ExporterConfig


class ConfigLoader:
    """Load and validate exporter configuration."""

    @staticmethod
    def load_from_file(config_path: str) -> ExporterConfig:
        """
        Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ExporterConfig: Validated configuration object

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            pydantic.ValidationError: If configuration validation fails
        """
        return ExporterConfig(**ConfigLoader._read_raw(config_path))

    @staticmethod
    def load(
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None
    ) -> ExporterConfig:
        """
        Load configuration from an optional file and apply section overrides.

        Overrides come from command-line flags; None values are ignored so
        that unset flags keep the file (or default) value.

        Args:
            config_path: Optional path to YAML configuration file
            overrides: Mapping of section name to field values,
                e.g. {"target": {"pid": "1234"}}

        Returns:
            ExporterConfig: Validated configuration object

        Raises:
            FileNotFoundError: If config_path is given but doesn't exist
            pydantic.ValidationError: If configuration validation fails
        """
        raw_config: Dict[str, Any] = ConfigLoader._read_raw(config_path) if config_path else {}

        for section, values in (overrides or {}).items():
            set_values = {k: v for k, v in values.items() if v is not None}
            if not set_values:
                continue
            merged = dict(raw_config.get(section) or {})
            merged.update(set_values)
            raw_config[section] = merged

        return ExporterConfig(**raw_config)

    @staticmethod
    def _read_raw(config_path: str) -> Dict[str, Any]:
        """Read a YAML file into a dict with ${VAR} placeholders substituted."""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        return ConfigLoader._substitute_env_vars(raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj
