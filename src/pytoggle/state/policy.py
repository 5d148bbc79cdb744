"""Deterministic transition policy.

Pure functions only: nothing here reads or writes internal storage. The
committer composes them into a single transition.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pytoggle.state.events import StateChanges
from pytoggle.state.schema import StateSchema

ProposedChanges = StateChanges | Mapping[str, Any]
ChangeProposal = ProposedChanges | Callable[[dict[str, Any]], ProposedChanges]
StateReducer = Callable[[dict[str, Any], StateChanges], ProposedChanges]


def identity_reducer(state: dict[str, Any], changes: StateChanges) -> StateChanges:
    """Default reducer: accept the proposed changes unchanged."""
    return changes


def resolve_changes(changes: ChangeProposal, merged_state: dict[str, Any]) -> StateChanges:
    """Turn a literal or function-form proposal into a concrete object.

    Function-form proposals receive the merged (override-substituted) state.
    """
    if callable(changes):
        changes = changes(dict(merged_state))
    return StateChanges.from_mapping(changes)


def run_reducer(reducer: StateReducer, merged_state: dict[str, Any], changes: StateChanges) -> StateChanges:
    return StateChanges.from_mapping(reducer(dict(merged_state), changes))


def partition_changes(
    schema: StateSchema,
    changes: StateChanges,
    is_controlled: Callable[[str], bool],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split the schema fields carried by *changes* by control status.

    Returns ``(controlled, uncontrolled)``. Keys outside the schema land in
    neither bucket, as does the ``type`` tag.
    """
    controlled: dict[str, Any] = {}
    uncontrolled: dict[str, Any] = {}
    for name in schema.names():
        if name not in changes.data:
            continue
        if is_controlled(name):
            controlled[name] = changes.data[name]
        else:
            uncontrolled[name] = changes.data[name]
    return controlled, uncontrolled
