"""Construction-time configuration for pytoggle."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable, Mapping
from typing import Any

from pytoggle.exceptions import ToggleConfigError
from pytoggle.state.events import StateChanges
from pytoggle.state.policy import StateReducer, identity_reducer


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _noop_value(_value: bool) -> None:
    return None


def _noop_state_change(_changes: StateChanges, _helpers: Mapping[str, Any]) -> None:
    return None


@dataclasses.dataclass(frozen=True)
class ToggleConfig:
    """Toggle configuration.

    Parameters
    ----------
    initial_on : bool
        Seed value for the ``on`` field. Also captured as the value
        :meth:`pytoggle.Toggle.reset` restores.
    on_reset : callable
        ``callback(final_on)`` invoked after every ``reset()``.
    on_state_change : callable
        ``callback(all_changes, helpers)`` invoked after every transition,
        including transitions whose fields are all controlled.
    on_toggle : callable
        ``callback(final_on)`` invoked after every ``toggle()``.
    state_reducer : callable
        ``reducer(merged_state, proposed_changes)`` governing every
        transition. Defaults to the identity reducer.
    """

    initial_on: bool = False
    on_reset: Callable[[bool], Any] = _noop_value
    on_state_change: Callable[[StateChanges, Mapping[str, Any]], Any] = _noop_state_change
    on_toggle: Callable[[bool], Any] = _noop_value
    state_reducer: StateReducer = identity_reducer

    def __post_init__(self) -> None:
        for name in ("on_reset", "on_state_change", "on_toggle", "state_reducer"):
            if not callable(getattr(self, name)):
                raise ToggleConfigError(f"{name} must be callable", option=name)

    @classmethod
    def from_env(cls, **overrides: Any) -> ToggleConfig:
        """Create configuration from environment variables.

        Reads ``PYTOGGLE_INITIAL_ON``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ToggleConfig
            Populated configuration.
        """
        config_kwargs: dict[str, Any] = {}
        if "initial_on" not in overrides:
            config_kwargs["initial_on"] = _env_bool(os.environ.get("PYTOGGLE_INITIAL_ON"), False)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
