"""Lifecycle callback dispatch."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pytoggle.config import ToggleConfig
from pytoggle.state.events import StateChanges

_logger = logging.getLogger(__name__)


class EventNotifier:
    """Invoke the configured callbacks with a stable payload shape.

    ``state_changed`` fires on every transition; ``toggled`` and
    ``was_reset`` are only called from their matching public operations
    and always receive the merged, override-aware value. Callback
    exceptions propagate to the caller of the public operation.
    """

    def __init__(self, config: ToggleConfig) -> None:
        self._config = config

    def state_changed(self, changes: StateChanges, helpers: Mapping[str, Any]) -> None:
        _logger.debug("on_state_change type=%s changes=%s", changes.type, changes.data)
        self._config.on_state_change(changes, helpers)

    def toggled(self, on: bool) -> None:
        self._config.on_toggle(on)

    def was_reset(self, on: bool) -> None:
        self._config.on_reset(on)
