"""
Logging configuration for ASCII Studio.

This module provides centralized logging setup and
configuration for the application.
"""

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Dict, Any


def setup_logging(config: Dict[str, Any]):
    """
    Setup logging configuration.

    Args:
        config: Configuration dictionary
    """
    level = getattr(logging, str(config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler with rotation
    log_file = config.get('LOG_FILE')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.get('LOG_MAX_BYTES', 10485760),  # 10MB
            backupCount=config.get('LOG_BACKUP_COUNT', 5)
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Configure specific loggers
    configure_loggers()


def configure_loggers():
    """Quiet chatty third-party loggers."""
    for name in ('werkzeug', 'LiteLLM', 'litellm', 'httpx', 'httpcore', 'urllib3'):
        logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """Structured logger for better log formatting."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def info(self, message: str, **kwargs):
        """Log info message with structured data."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with structured data."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with structured data."""
        self._log(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message with structured data."""
        self._log(logging.DEBUG, message, **kwargs)

    def _log(self, level: int, message: str, **kwargs):
        """Log message with structured data appended as key=value pairs."""
        extra = {
            'timestamp': datetime.utcnow().isoformat(),
            **kwargs
        }

        if kwargs:
            fields = ' '.join(f"{key}={_format_field(value)}" for key, value in kwargs.items())
            message = f"{message} | {fields}"

        self.logger.log(level, message, extra=extra)


def _format_field(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return StructuredLogger(name)
