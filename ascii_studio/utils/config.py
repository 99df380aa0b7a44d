"""
Configuration management for ASCII Studio.

This module provides configuration loading and management
for the application. Settings are read from the environment
(and a .env file) once, when a Config object is created.
"""

import os
from typing import Optional, List
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_bool(name: str, default: str = 'false') -> bool:
    return (_env(name, default) or default).lower() == 'true'


def _env_float(name: str, default: float) -> float:
    return float(_env(name, str(default)))


@dataclass
class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY: str = field(default_factory=lambda: _env('SECRET_KEY', 'dev-secret-key-change-in-production'))
    DEBUG: bool = field(default_factory=lambda: _env_bool('DEBUG'))
    TESTING: bool = field(default_factory=lambda: _env_bool('TESTING'))

    # API settings
    API_TITLE: str = 'ASCII Studio'
    API_VERSION: str = '1.0.0'

    # Logging
    LOG_LEVEL: str = field(default_factory=lambda: _env('LOG_LEVEL', 'INFO').upper())
    LOG_FILE: Optional[str] = field(default_factory=lambda: _env('LOG_FILE'))
    LOG_MAX_BYTES: int = field(default_factory=lambda: int(_env('LOG_MAX_BYTES', '10485760')))  # 10MB
    LOG_BACKUP_COUNT: int = field(default_factory=lambda: int(_env('LOG_BACKUP_COUNT', '5')))
    LOG_REQUESTS: bool = field(default_factory=lambda: _env_bool('LOG_REQUESTS', 'true'))

    # Generation
    GENERATION_TEMPERATURE: float = field(default_factory=lambda: _env_float('GENERATION_TEMPERATURE', 0.7))
    RETRY_BACKOFF_SECONDS: float = field(default_factory=lambda: _env_float('RETRY_BACKOFF_SECONDS', 3.0))

    # Volcengine Ark (OpenAI-compatible)
    ARK_API_KEY: Optional[str] = field(default_factory=lambda: _env('ARK_API_KEY'))
    ARK_BASE_URL: Optional[str] = field(default_factory=lambda: _env('ARK_BASE_URL'))
    ARK_MODEL: Optional[str] = field(default_factory=lambda: _env('ARK_MODEL'))
    ARK_FALLBACK_MODEL: Optional[str] = field(default_factory=lambda: _env('ARK_FALLBACK_MODEL'))
    ARK_TIMEOUT: float = field(default_factory=lambda: _env_float('ARK_TIMEOUT', 30.0))

    # Google Gemini
    GEMINI_API_KEY: Optional[str] = field(default_factory=lambda: _env('GEMINI_API_KEY'))
    GEMINI_BASE_URL: Optional[str] = field(default_factory=lambda: _env('GEMINI_BASE_URL'))
    GEMINI_MODEL: Optional[str] = field(default_factory=lambda: _env('GEMINI_MODEL'))
    GEMINI_FALLBACK_MODEL: Optional[str] = field(default_factory=lambda: _env('GEMINI_FALLBACK_MODEL'))

    # OpenAI
    OPENAI_API_KEY: Optional[str] = field(default_factory=lambda: _env('OPENAI_API_KEY'))
    OPENAI_BASE_URL: Optional[str] = field(default_factory=lambda: _env('OPENAI_BASE_URL'))
    OPENAI_MODEL: Optional[str] = field(default_factory=lambda: _env('OPENAI_MODEL'))
    OPENAI_FALLBACK_MODEL: Optional[str] = field(default_factory=lambda: _env('OPENAI_FALLBACK_MODEL'))

    # CORS settings
    CORS_ORIGINS: List[str] = field(default_factory=lambda: (_env('CORS_ORIGINS', '*')).split(','))

    @property
    def generation_temperature(self) -> float:
        """Temperature clamped to the range that keeps stylistic variety."""
        return min(0.8, max(0.3, self.GENERATION_TEMPERATURE))


@dataclass
class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG: bool = True
    LOG_LEVEL: str = 'DEBUG'


@dataclass
class ProductionConfig(Config):
    """Production configuration."""
    DEBUG: bool = False
    LOG_LEVEL: str = 'WARNING'


@dataclass
class TestingConfig(Config):
    """Testing configuration. Never picks up real provider keys."""
    TESTING: bool = True
    DEBUG: bool = True
    LOG_LEVEL: str = 'CRITICAL'
    LOG_FILE: Optional[str] = None
    RETRY_BACKOFF_SECONDS: float = 0.0
    ARK_API_KEY: Optional[str] = None
    GEMINI_API_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None


def get_config(config_name: str = None) -> Config:
    """
    Get configuration based on environment.

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Configuration object
    """
    if config_name is None:
        config_name = (_env('APP_ENV') or _env('FLASK_ENV') or 'development').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    config_class = config_map.get(config_name, DevelopmentConfig)
    return config_class()


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors
    """
    errors = []

    if not (config.ARK_API_KEY or config.GEMINI_API_KEY or config.OPENAI_API_KEY):
        errors.append("At least one of ARK_API_KEY, GEMINI_API_KEY or OPENAI_API_KEY must be configured")

    if config.SECRET_KEY == 'dev-secret-key-change-in-production' and config.DEBUG is False:
        errors.append("SECRET_KEY must be changed in production")

    if not 0.3 <= config.GENERATION_TEMPERATURE <= 0.8:
        errors.append("GENERATION_TEMPERATURE should be between 0.3 and 0.8; it will be clamped")

    if config.RETRY_BACKOFF_SECONDS < 0:
        errors.append("RETRY_BACKOFF_SECONDS must not be negative")

    return errors
