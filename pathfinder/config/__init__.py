"""Configuration management for Pathfinder."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_app_config, load_config
from .models import (
    AdvancedConfig,
    AppConfig,
    LLMConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PipelineConfig,
    ProviderName,
    ProvidersConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_app_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ProvidersConfig",
    "PipelineConfig",
    "LLMConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "ProviderName",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
