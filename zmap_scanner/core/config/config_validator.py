"""Configuration validator for zmap_scanner."""

from typing import Dict, Any, List


class ConfigValidator:
    """Validates zmap_scanner configuration for correctness."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize validator with configuration.

        Args:
            config: Configuration dictionary to validate
        """
        self.config = config
        self.errors: List[str] = []

    def validate(self) -> List[str]:
        """Validate complete configuration.

        Returns:
            List of validation error messages
        """
        self.errors = []

        self._validate_system_config()
        self._validate_scanner_config()
        self._validate_logging_config()

        return self.errors

    def _validate_system_config(self) -> None:
        """Validate system configuration section."""
        system = self.config.get('system', {})

        environment = system.get('environment')
        valid_envs = ['development', 'testing', 'production']
        if environment not in valid_envs:
            self.errors.append(f"Environment must be one of: {valid_envs}")

        logs_dir = system.get('logs_dir')
        if logs_dir is not None and not isinstance(logs_dir, str):
            self.errors.append("system.logs_dir must be a string")

    def _validate_scanner_config(self) -> None:
        """Validate scanner configuration section."""
        scanner = self.config.get('scanner', {})

        binary_path = scanner.get('binary_path')
        if binary_path is not None and (not isinstance(binary_path, str) or not binary_path):
            self.errors.append("scanner.binary_path must be a non-empty string")

        timeout = scanner.get('timeout')
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                self.errors.append("scanner.timeout must be a positive number")

        options = scanner.get('options', {})
        if options is None:
            return
        if not isinstance(options, dict):
            self.errors.append("scanner.options must be a mapping")
            return

        from ...options import OPTION_FACTORIES
        for key in options:
            if key not in OPTION_FACTORIES:
                self.errors.append(f"scanner.options.{key} is not a known scan option")

    def _validate_logging_config(self) -> None:
        """Validate logging configuration section."""
        logging_config = self.config.get('logging', {})

        level = logging_config.get('level')
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if level not in valid_levels:
            self.errors.append(f"logging.level must be one of: {valid_levels}")

        file_rotation = logging_config.get('file_rotation')
        if not isinstance(file_rotation, bool):
            self.errors.append("logging.file_rotation must be a boolean")

        max_size = logging_config.get('max_file_size')
        if not isinstance(max_size, str) or not self._validate_size_format(max_size):
            self.errors.append("logging.max_file_size must be a valid size string (e.g., '10MB')")

        backup_count = logging_config.get('backup_count')
        if isinstance(backup_count, bool) or not isinstance(backup_count, int) or backup_count < 0:
            self.errors.append("logging.backup_count must be a non-negative integer")

    def _validate_size_format(self, size: str) -> bool:
        """Validate size format string such as '10MB'."""
        if not size:
            return False

        # Check longer units first to avoid partial matches
        valid_units = ['GB', 'MB', 'KB', 'B']
        for unit in valid_units:
            if size.upper().endswith(unit):
                number_part = size[:-len(unit)]
                try:
                    float(number_part)
                    return True
                except ValueError:
                    return False

        return False

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return len(self.validate()) == 0
