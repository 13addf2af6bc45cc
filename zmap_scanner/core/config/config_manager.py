"""Configuration manager for zmap_scanner."""

import copy
import os
import yaml
from typing import Dict, Any, Optional, List
from pathlib import Path

from ..exceptions import ConfigFileNotFoundError, ConfigFileFormatError


DEFAULT_CONFIG: Dict[str, Any] = {
    'system': {
        'environment': 'development',
        'logs_dir': None,
    },
    'scanner': {
        'binary_path': None,
        'timeout': None,
        'options': {},
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file_rotation': True,
        'max_file_size': '10MB',
        'backup_count': 5,
    },
}


class ConfigManager:
    """Manages configuration loading and validation for zmap_scanner."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to a YAML configuration file

        Raises:
            ConfigFileNotFoundError: If ``config_path`` does not exist
            ConfigFileFormatError: If the file is not a YAML mapping
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._load_configuration()

    def _load_configuration(self) -> None:
        """Load configuration from multiple sources in order of priority."""
        # Start with built-in defaults
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        # Override with user-specified configuration
        if self.config_path:
            user_config = self._load_config_file(Path(self.config_path))
            if user_config:
                self._deep_merge(self.config, user_config)

        # Override with environment variables
        self._load_environment_variables()

    def _load_config_file(self, file_path: Path) -> Optional[Dict[str, Any]]:
        """Load configuration from YAML file.

        Args:
            file_path: Path to configuration file

        Returns:
            Configuration dictionary or None if the file is empty
        """
        if not file_path.exists():
            raise ConfigFileNotFoundError(str(file_path))

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigFileFormatError(str(file_path), str(e)) from e
        except IOError as e:
            raise ConfigFileFormatError(str(file_path), f"cannot read file: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigFileFormatError(str(file_path), "top level must be a mapping")
        return data

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> None:
        """Deep merge update dictionary into base dictionary.

        Args:
            base: Base dictionary to merge into
            update: Dictionary with updates to merge
        """
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _load_environment_variables(self) -> None:
        """Load configuration overrides from environment variables."""
        env_mappings = {
            'ZMAP_SCANNER_BINARY_PATH': ('scanner', 'binary_path'),
            'ZMAP_SCANNER_TIMEOUT': ('scanner', 'timeout'),
            'ZMAP_SCANNER_LOG_LEVEL': ('logging', 'level'),
            'ZMAP_SCANNER_ENV': ('system', 'environment'),
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                self._set_nested_value(self.config, config_path, self._convert_env_value(value))

    def _set_nested_value(self, config: Dict[str, Any], path: tuple, value: Any) -> None:
        current = config
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type.

        Args:
            value: String value from environment variable

        Returns:
            Converted value (bool, int, float, or str)
        """
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key.

        Args:
            key: Dot-separated configuration key (e.g., 'scanner.timeout')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        current = self.config

        for k in keys:
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return default

        return current

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot-separated key.

        Args:
            key: Dot-separated configuration key
            value: Value to set
        """
        keys = key.split('.')
        current = self.config

        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section.

        Args:
            section: Section name

        Returns:
            Configuration section dictionary
        """
        return self.config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from all sources."""
        self.config = {}
        self._load_configuration()

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of validation error messages
        """
        from .config_validator import ConfigValidator
        validator = ConfigValidator(self.config)
        return validator.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Get complete configuration as dictionary."""
        return copy.deepcopy(self.config)
