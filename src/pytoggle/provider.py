"""Provider variant: distribute merged state and helpers to subscribers.

A :class:`ToggleProvider` publishes one immutable :class:`ToggleContextValue`
per commit cycle. Every subscriber notified for a commit receives the same
object, and a commit that leaves the merged state unchanged publishes
nothing, so identity-comparing consumers never re-render spuriously.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from pytoggle.exceptions import ToggleConsumerError
from pytoggle.toggle import Toggle

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")

Subscriber = Callable[["ToggleContextValue"], Any]


def _noop(*_args: Any, **_kwargs: Any) -> None:
    return None


def _empty_props(*_args: Any, **_kwargs: Any) -> dict[str, Any]:
    return {}


def _readonly(state: Mapping[str, Any]) -> MappingProxyType:
    return MappingProxyType(dict(state))


class ToggleContextValue(BaseModel):
    """Merged state plus the public helpers, as seen by consumers."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    state: MappingProxyType = Field(default_factory=lambda: _readonly({}))
    toggle: Callable[..., Any] = _noop
    reset: Callable[..., Any] = _noop
    get_toggler_props: Callable[..., dict[str, Any]] = _empty_props

    @property
    def on(self) -> bool:
        return bool(self.state.get("on", False))


DEFAULT_CONTEXT_VALUE = ToggleContextValue(state=_readonly({"on": False}))
"""Value seen before any provider is attached: ``on`` is false, helpers do nothing."""


class ToggleProvider:
    """Publish a :class:`Toggle` to an explicit list of subscribers."""

    def __init__(self, toggle: Toggle) -> None:
        self._toggle = toggle
        self._subscribers: list[Subscriber] = []
        self._value = self._build_value()
        self._detach: Callable[[], None] | None = toggle.subscribe(self.publish)

    @property
    def closed(self) -> bool:
        return self._detach is None

    def value(self) -> ToggleContextValue:
        return self._value

    def subscribe(self, consumer: Subscriber) -> Callable[[], None]:
        """Register *consumer*; it is called with each newly published value."""
        self._subscribers.append(consumer)

        def _unsubscribe() -> None:
            if consumer in self._subscribers:
                self._subscribers.remove(consumer)

        return _unsubscribe

    def publish(self) -> bool:
        """Rebuild and broadcast the value if the merged state changed.

        Returns ``True`` when a new value was published.
        """
        state = self._toggle.get_state()
        if state == dict(self._value.state):
            _logger.debug("Merged state unchanged; keeping published value")
            return False

        value = self._build_value(state)
        self._value = value
        _logger.debug("Publishing state=%s to %d subscribers", state, len(self._subscribers))
        for consumer in list(self._subscribers):
            consumer(value)
        return True

    def close(self) -> None:
        """Detach from the toggle and drop every subscriber."""
        if self._detach is not None:
            self._detach()
            self._detach = None
        self._subscribers.clear()

    def _build_value(self, state: dict[str, Any] | None = None) -> ToggleContextValue:
        return ToggleContextValue(
            state=_readonly(self._toggle.get_state() if state is None else state),
            toggle=self._toggle.toggle,
            reset=self._toggle.reset,
            get_toggler_props=self._toggle.get_toggler_props,
        )


class ToggleConsumer:
    """Read the value published by a provider.

    Rendering a consumer that has no open provider raises
    :class:`ToggleConsumerError` instead of falling back to
    :data:`DEFAULT_CONTEXT_VALUE`.
    """

    def __init__(self, provider: ToggleProvider | None = None) -> None:
        self._provider = provider

    def render(self, children: Callable[[ToggleContextValue], _T]) -> _T:
        if self._provider is None or self._provider.closed:
            raise ToggleConsumerError("ToggleConsumer must be rendered within an open ToggleProvider")
        return children(self._provider.value())
