"""Internal state storage and the single-transition committer.

The committer is the only component allowed to mutate a :class:`StateStore`.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from pytoggle.state.events import StateChanges
from pytoggle.state.policy import (
    ChangeProposal,
    StateReducer,
    identity_reducer,
    partition_changes,
    resolve_changes,
    run_reducer,
)
from pytoggle.state.resolver import ControlResolver
from pytoggle.state.schema import StateSchema

_logger = logging.getLogger(__name__)


class StateChangeSink(Protocol):
    def state_changed(self, changes: StateChanges, helpers: Mapping[str, Any]) -> None: ...


class StateStore:
    """Internal (uncontrolled) values for one component instance.

    Only declared schema fields are ever stored.
    """

    def __init__(self, schema: StateSchema, initial: Mapping[str, Any] | None = None) -> None:
        self._schema = schema
        self._values: dict[str, Any] = schema.defaults()
        if initial:
            self._values.update({k: copy.deepcopy(v) for k, v in initial.items() if k in schema})

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    def apply(self, patch: Mapping[str, Any]) -> None:
        """Overwrite the patched fields; unknown keys are ignored."""
        for key, value in patch.items():
            if key in self._schema:
                self._values[key] = copy.deepcopy(value)


class ChangeCommitter:
    """Run one transition end to end.

    resolve -> reduce -> partition -> commit uncontrolled -> notify ->
    completion callback -> commit listeners. Exactly one reducer call and
    one notification happen per :meth:`commit`, even when every changed
    field is controlled and internal storage is left untouched.
    """

    def __init__(
        self,
        store: StateStore,
        resolver: ControlResolver,
        sink: StateChangeSink,
        *,
        helpers: Callable[[], Mapping[str, Any]],
        reducer: StateReducer = identity_reducer,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._sink = sink
        self._helpers = helpers
        self._reducer = reducer
        self._listeners: list[Callable[[], None]] = []

    def merged_state(self) -> dict[str, Any]:
        return self._resolver.get_state(self._store.snapshot())

    def add_commit_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Run *listener* after every commit. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def commit(
        self,
        changes: ChangeProposal,
        callback: Callable[[StateChanges], Any] | None = None,
    ) -> StateChanges:
        merged = self.merged_state()
        proposed = resolve_changes(changes, merged)
        all_changes = run_reducer(self._reducer, merged, proposed)

        controlled, uncontrolled = partition_changes(
            self._resolver.schema,
            all_changes,
            self._resolver.is_controlled,
        )
        if uncontrolled:
            self._store.apply(uncontrolled)
            _logger.debug("Committed type=%s fields=%s", all_changes.type, sorted(uncontrolled))
        else:
            _logger.debug(
                "No internal commit for type=%s; controlled fields=%s",
                all_changes.type,
                sorted(controlled),
            )

        self._sink.state_changed(all_changes, self._helpers())
        if callback is not None:
            callback(all_changes)
        self.run_listeners()
        return all_changes

    def run_listeners(self) -> None:
        for listener in list(self._listeners):
            listener()
