"""Utility functions and helpers.

- errors: Adapter exception hierarchy
- logging: Structured logging with secret sanitization
- security: Secret redaction
"""

from qq_bot_adapter.utils.errors import (
    AdapterError,
    ChannelUnavailableError,
    EventBuildError,
    UnsupportedEventError,
)
from qq_bot_adapter.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    register_secret,
    unbind_context,
)
from qq_bot_adapter.utils.security import RedactionError, SecretRedactor

__all__ = [
    # Errors
    "AdapterError",
    "ChannelUnavailableError",
    "EventBuildError",
    "UnsupportedEventError",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "register_secret",
    "unbind_context",
    # Security
    "RedactionError",
    "SecretRedactor",
]
