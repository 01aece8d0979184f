# src/infrastructure/logging/log_manager.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Dict, Any, Optional, Union


DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LogManager:
    """
    Centralized logging configuration manager.
    """
    def __init__(self):
        """Initialize the log manager."""
        self.root_logger = logging.getLogger()
        self.loggers = {}  # name -> logger
        self.handlers = {}  # name -> handler
        self.initialized = False

    def initialize(self, config: Dict[str, Any]):
        """
        Initialize logging system based on configuration.

        Args:
            config: The ``logging`` section of a reel configuration
        """
        if self.initialized:
            return

        log_level = self._get_log_level(config.get('level', 'INFO'))
        formatter = logging.Formatter(
            config.get('format', DEFAULT_FORMAT),
            config.get('date_format', DEFAULT_DATE_FORMAT)
        )

        self._previous_root_level = self.root_logger.level
        self.root_logger.setLevel(log_level)
        for handler in list(self.root_logger.handlers):
            self.root_logger.removeHandler(handler)

        if config.get('console', True):
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self._get_log_level(config.get('console_level', log_level)))
            console_handler.setFormatter(formatter)
            self.root_logger.addHandler(console_handler)
            self.handlers['console'] = console_handler

        file_config = config.get('file', {})
        if file_config.get('enabled', False):
            file_path = file_config.get('path', 'logs/reel.log')

            log_dir = os.path.dirname(file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = RotatingFileHandler(
                file_path,
                maxBytes=file_config.get('max_bytes', 10 * 1024 * 1024),  # 10 MB
                backupCount=file_config.get('backup_count', 5)
            )
            file_handler.setLevel(self._get_log_level(file_config.get('level', log_level)))
            file_handler.setFormatter(formatter)
            self.root_logger.addHandler(file_handler)
            self.handlers['file'] = file_handler

        # Parents first, so a child's level is applied after its parent's
        logger_configs = config.get('loggers', {})
        for logger_name in sorted(logger_configs, key=lambda name: len(name.split('.'))):
            logger_config = logger_configs[logger_name] or {}
            logger = logging.getLogger(logger_name)
            logger.setLevel(self._get_log_level(logger_config.get('level', log_level)))
            logger.propagate = logger_config.get('propagate', True)
            self.loggers[logger_name] = logger

            self.root_logger.debug(
                f"Configured logger '{logger_name}' with level={logging.getLevelName(logger.level)}, "
                f"propagate={logger.propagate}"
            )

        self.root_logger.debug("Logging system initialized")
        self.initialized = True

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger by name.

        Args:
            name: Logger name, e.g. "domain.reel.positioner"

        Returns:
            Logger instance
        """
        return logging.getLogger(name)

    def shutdown(self):
        """Detach and close every handler and undo the logger levels this manager set."""
        for handler in self.handlers.values():
            self.root_logger.removeHandler(handler)
            handler.close()
        for logger in self.loggers.values():
            logger.setLevel(logging.NOTSET)
            logger.propagate = True
        if self.initialized:
            self.root_logger.setLevel(self._previous_root_level)
        self.handlers.clear()
        self.loggers.clear()
        self.initialized = False

    def _get_log_level(self, level_name: Union[str, int]) -> int:
        """
        Convert a log level name to its numeric value.

        Args:
            level_name: Level name (DEBUG, INFO, etc.) or numeric value

        Returns:
            Numeric log level, INFO for unknown names
        """
        if isinstance(level_name, int):
            return level_name

        level = logging.getLevelName(level_name.upper())
        return level if isinstance(level, int) else logging.INFO


# Singleton instance
log_manager = LogManager()


def initialize_logging(config: Optional[Dict[str, Any]] = None) -> LogManager:
    """
    Initialize the logging system from the ``logging`` config section.

    Args:
        config: Logging configuration; console-only INFO logging when omitted

    Returns:
        The shared LogManager
    """
    if config is None:
        config = {'level': 'INFO', 'console': True}

    log_manager.initialize(config)
    return log_manager
