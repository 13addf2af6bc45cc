"""Logger manager for centralized logging configuration."""

import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Any, Optional

from .structured_formatter import StructuredFormatter


ROOT_LOGGER_NAME = 'zmap_scanner'
LOG_FILE_NAME = 'zmap_scanner.log'


class LoggerManager:
    """Configures the ``zmap_scanner`` logger hierarchy.

    Library modules only call ``logging.getLogger('zmap_scanner.<part>')``;
    applications that want console or file output create one LoggerManager.
    """

    def __init__(self, config: Dict[str, Any]):
        """Initialize logger manager with configuration.

        Args:
            config: Configuration dictionary containing ``system`` and
                ``logging`` sections, e.g. ``ConfigManager.to_dict()``
        """
        self.config = config
        self.logging_config = config.get('logging', {})
        self.loggers: Dict[str, logging.Logger] = {}
        self._setup_logging()

    def _setup_logging(self) -> None:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(self._get_log_level())

        # Clear existing handlers
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)

        self._add_console_handler(root_logger)

        logs_dir = self.config.get('system', {}).get('logs_dir')
        if logs_dir:
            self._add_file_handler(root_logger, Path(logs_dir))

        self.loggers['root'] = root_logger

    def _get_log_level(self) -> int:
        level_name = str(self.logging_config.get('level', 'INFO')).upper()
        return getattr(logging, level_name, logging.INFO)

    def _add_console_handler(self, logger: logging.Logger) -> None:
        console_handler = logging.StreamHandler()

        # Use structured formatter for console in production
        if self.config.get('system', {}).get('environment') == 'production':
            console_handler.setFormatter(StructuredFormatter())
        else:
            format_str = self.logging_config.get(
                'format',
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            console_handler.setFormatter(logging.Formatter(format_str))

        console_handler.setLevel(self._get_log_level())
        logger.addHandler(console_handler)

    def _add_file_handler(self, logger: logging.Logger, logs_dir: Path) -> None:
        """Add a file handler writing JSON lines into ``logs_dir``.

        Args:
            logger: Logger to add handler to
            logs_dir: Directory for log files, created if missing
        """
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / LOG_FILE_NAME

        if self.logging_config.get('file_rotation', True):
            max_bytes = self._parse_size(self.logging_config.get('max_file_size', '10MB'))
            backup_count = self.logging_config.get('backup_count', 5)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')

        # Always use structured format for file logs
        file_handler.setFormatter(StructuredFormatter())
        file_handler.setLevel(self._get_log_level())

        logger.addHandler(file_handler)

    def _parse_size(self, size_str: str) -> int:
        """Parse size string such as '10MB' to bytes, 10MB if unparseable."""
        size_str = size_str.upper()
        multipliers = {
            'GB': 1024 * 1024 * 1024,
            'MB': 1024 * 1024,
            'KB': 1024,
            'B': 1,
        }

        for unit, multiplier in multipliers.items():
            if size_str.endswith(unit):
                number_str = size_str[:-len(unit)]
                try:
                    return int(float(number_str) * multiplier)
                except ValueError:
                    break

        return 10 * 1024 * 1024

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get logger by name.

        Args:
            name: Child name below ``zmap_scanner``; the package logger if None

        Returns:
            Logger instance
        """
        key = name or 'root'
        if key in self.loggers:
            return self.loggers[key]

        logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        self.loggers[key] = logger
        return logger

    def set_level(self, level: str) -> None:
        """Set logging level for all managed loggers and their handlers."""
        log_level = getattr(logging, level.upper(), logging.INFO)

        for logger in self.loggers.values():
            logger.setLevel(log_level)
            for handler in logger.handlers:
                handler.setLevel(log_level)

    def shutdown(self) -> None:
        """Close and detach all handlers installed by this manager."""
        for logger in self.loggers.values():
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)
