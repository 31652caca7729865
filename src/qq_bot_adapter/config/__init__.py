"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    AdapterConfig,
    BotConfig,
    FileLoggingConfig,
    LoggingConfig,
    ParserConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "AdapterConfig",
    # Sections
    "BotConfig",
    "ParserConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
