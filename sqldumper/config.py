"""
Configuration loading for sqldumper.
"""

import os
import re
from typing import Any

import yaml


class ConfigLoader:
    """Loads configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f)

        return self._resolve_env_vars(config or {})

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_connection(self) -> dict[str, Any]:
        """Get connection settings. Validation happens when the dump starts."""
        return self.config.get('connection')

    def get_dump_settings(self) -> dict[str, Any]:
        """Get dump settings."""
        return self.config.get('dump') or {}

    def get_output_settings(self) -> dict[str, Any]:
        """Get output settings."""
        return self.config.get('output') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}

    def as_dump_config(self) -> dict[str, Any]:
        """Get the mapping consumed by ``sqldumper.dump``."""
        return {
            'connection': self.get_connection(),
            'dump': self.get_dump_settings(),
        }
