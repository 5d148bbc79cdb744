"""Per-field control resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pytoggle.state.events import ControlOverrides
from pytoggle.state.schema import StateSchema


class ControlResolver:
    """Decide, per schema field, where the authoritative value lives.

    A field is controlled when the current overrides supply a value for it
    and its descriptor is controllable. Controlled fields always read from
    the overrides; everything else reads from internal storage.
    """

    def __init__(self, schema: StateSchema, overrides: ControlOverrides | None = None) -> None:
        self._schema = schema
        self._overrides = overrides or ControlOverrides()

    @property
    def schema(self) -> StateSchema:
        return self._schema

    def update(self, overrides: ControlOverrides) -> None:
        """Replace the overrides used for subsequent evaluations."""
        self._overrides = overrides

    def is_controlled(self, name: str) -> bool:
        descriptor = self._schema.get(name)
        if descriptor is None or not descriptor.controllable:
            return False
        return self._overrides.is_supplied(name)

    def controlled_fields(self) -> tuple[str, ...]:
        return tuple(name for name in self._schema.names() if self.is_controlled(name))

    def get_state(self, internal: Mapping[str, Any]) -> dict[str, Any]:
        """Merged view: override for controlled fields, internal value otherwise."""
        merged: dict[str, Any] = {}
        for name in self._schema.names():
            if self.is_controlled(name):
                merged[name] = self._overrides.get(name)
            else:
                merged[name] = internal.get(name)
        return merged
