"""Exceptions raised by the adapter.

Parsing never raises for content coming from a well-formed payload; these
errors cover event construction and the outbound helpers.
"""

from __future__ import annotations


class AdapterError(Exception):
    """Base exception for all adapter errors."""


class EventBuildError(AdapterError):
    """An event could not be built from the supplied attributes."""


class UnsupportedEventError(AdapterError):
    """The dispatch type does not describe a message event.

    Attributes:
        dispatch_type: The platform event name that was rejected.
    """

    def __init__(self, dispatch_type: str) -> None:
        super().__init__(f"Unsupported dispatch type: {dispatch_type}")
        self.dispatch_type = dispatch_type


class ChannelUnavailableError(AdapterError):
    """The channel for a guild message could not be resolved."""
