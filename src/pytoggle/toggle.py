"""The toggle primitive: uncontrolled by default, controllable on demand."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pytoggle._multiplex import call_all
from pytoggle.config import ToggleConfig
from pytoggle.exceptions import ToggleConfigError
from pytoggle.notifier import EventNotifier
from pytoggle.state.events import ChangeType, ControlOverrides, StateChanges
from pytoggle.state.resolver import ControlResolver
from pytoggle.state.schema import TOGGLE_SCHEMA, StateSchema
from pytoggle.state.store import ChangeCommitter, StateStore

_T = TypeVar("_T")


class Toggle:
    """Boolean state container with control props and a pluggable reducer.

    Parameters
    ----------
    config : ToggleConfig or None
        Construction-time options. Built from *config_overrides* when omitted;
        when both are given, *config_overrides* replace the matching fields.
    on : bool or None
        Controlled value for ``on``. ``None`` leaves the field uncontrolled.
    overrides : mapping or ControlOverrides or None
        Additional override values. Keys outside the schema are carried but
        never interpreted.
    **config_overrides
        :class:`ToggleConfig` fields (``initial_on``, ``on_toggle`` ...).

    Examples
    --------
    >>> toggle = Toggle(initial_on=False)
    >>> toggle.toggle()
    >>> toggle.get_state()
    {'on': True}
    """

    schema: StateSchema = TOGGLE_SCHEMA

    def __init__(
        self,
        config: ToggleConfig | None = None,
        *,
        on: bool | None = None,
        overrides: Mapping[str, Any] | ControlOverrides | None = None,
        **config_overrides: Any,
    ) -> None:
        self._config = _build_config(config, config_overrides)
        self._initial_state: dict[str, Any] = {"on": self._config.initial_on}
        self._store = StateStore(self.schema, self._initial_state)
        controlled: dict[str, Any] = {} if on is None else {"on": on}
        self._resolver = ControlResolver(self.schema, ControlOverrides.of(overrides, **controlled))
        self._notifier = EventNotifier(self._config)
        self._committer = ChangeCommitter(
            self._store,
            self._resolver,
            self._notifier,
            helpers=self.get_state_and_helpers,
            reducer=self._config.state_reducer,
        )

    @property
    def config(self) -> ToggleConfig:
        return self._config

    @property
    def initial_state(self) -> dict[str, Any]:
        return dict(self._initial_state)

    def is_controlled(self, name: str) -> bool:
        return self._resolver.is_controlled(name)

    def get_state(self) -> dict[str, Any]:
        """Full merged view, independent of which fields are controlled."""
        return self._committer.merged_state()

    def receive_overrides(
        self,
        overrides: Mapping[str, Any] | ControlOverrides | None = None,
        **values: Any,
    ) -> None:
        """Replace the controlled values, as a parent re-render would.

        Subscribers registered through :meth:`subscribe` are re-run.
        """
        self._resolver.update(ControlOverrides.of(overrides, **values))
        self._committer.run_listeners()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call *listener* after every commit and override update."""
        return self._committer.add_commit_listener(listener)

    def toggle(self, *, type: str = ChangeType.TOGGLE, **options: Any) -> None:
        """Flip ``on`` and report the outcome to ``on_toggle``.

        Extra *options* travel with the change into the reducer and
        ``on_state_change`` but are never stored.
        """

        def _flip(state: dict[str, Any]) -> dict[str, Any]:
            return {**options, "type": type, "on": not state["on"]}

        self._committer.commit(_flip, lambda changes: self._notifier.toggled(self._outcome(changes)["on"]))

    def reset(self) -> None:
        """Restore the construction-time state and report it to ``on_reset``."""
        self._committer.commit(
            {"type": ChangeType.RESET, **self._initial_state},
            lambda changes: self._notifier.was_reset(self._outcome(changes)["on"]),
        )

    def get_toggler_props(self, overrides: Mapping[str, Any] | None = None, **props: Any) -> dict[str, Any]:
        """Build the prop bag for an element that toggles this instance.

        Caller-supplied props win, except ``on_click``: a caller handler is
        multiplexed ahead of the internal toggle, never substituted for it.
        """
        bag: dict[str, Any] = dict(overrides or {})
        bag.update(props)
        on_click = bag.pop("on_click", None)
        return {
            "on_click": call_all(on_click, lambda *_args, **_kwargs: self.toggle()),
            "aria_pressed": self.get_state()["on"],
            **bag,
        }

    def get_state_and_helpers(self) -> dict[str, Any]:
        return {
            **self.get_state(),
            "toggle": self.toggle,
            "reset": self.reset,
            "get_toggler_props": self.get_toggler_props,
        }

    def render(self, children: Callable[[dict[str, Any]], _T]) -> _T:
        """Render-prop entry point: hand merged state and helpers to *children*."""
        return children(self.get_state_and_helpers())

    def _outcome(self, changes: StateChanges) -> dict[str, Any]:
        # Controlled fields report the reduced target; the owner decides the real value.
        outcome = self.get_state()
        for name in self._resolver.controlled_fields():
            if name in changes:
                outcome[name] = changes.get(name)
        return outcome


def _build_config(config: ToggleConfig | None, overrides: dict[str, Any]) -> ToggleConfig:
    try:
        if config is None:
            return ToggleConfig(**overrides)
        if overrides:
            return dataclasses.replace(config, **overrides)
    except TypeError as err:
        raise ToggleConfigError(f"invalid toggle option: {err}") from err
    return config
