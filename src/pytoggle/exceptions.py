"""Custom exception hierarchy for pytoggle."""

from __future__ import annotations


class ToggleError(Exception):
    """Base exception for all pytoggle errors."""


class ToggleConfigError(ToggleError):
    """Invalid construction-time configuration (e.g. a non-callable callback)."""

    def __init__(self, message: str, *, option: str = "") -> None:
        self.option = option
        super().__init__(message)


class ToggleSchemaError(ToggleError):
    """State schema is malformed (duplicate or empty field names)."""


class ToggleConsumerError(ToggleError):
    """A consumer was rendered without an attached, open provider.

    Raised by :class:`pytoggle.provider.ToggleConsumer` so that a consumer
    placed outside of any provider fails loudly instead of silently
    rendering the default context value.
    """
