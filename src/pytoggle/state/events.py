"""Change and override payloads.

Every transition is described by a :class:`StateChanges` object. Callers
supply externally-owned values as :class:`ControlOverrides`. Only the
state layer is allowed to reconcile the two.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangeType(StrEnum):
    """Built-in change type tags. Callers may use any other string."""

    TOGGLE = "toggle"
    RESET = "reset"


class StateChanges(BaseModel):
    """A proposed (or reduced) partial state plus an optional type tag."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str | None = Field(default=None, description="Which operation produced the change")
    data: dict[str, Any] = Field(default_factory=dict, description="Partial state")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | StateChanges) -> StateChanges:
        """Split a flat ``{"type": ..., field: value}`` mapping."""
        if isinstance(mapping, StateChanges):
            return mapping
        data = dict(mapping)
        change_type = data.pop("type", None)
        return cls(type=None if change_type is None else str(change_type), data=data)

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the notification payload shape, ``type`` included."""
        return {"type": self.type, **self.data}

    def with_values(self, **values: Any) -> StateChanges:
        return self.model_copy(update={"data": {**self.data, **values}})

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self.data


class ControlOverrides(BaseModel):
    """Externally supplied values for the current evaluation cycle.

    A field counts as supplied when its key is present and its value is not
    ``None``. Keys outside the component's schema are carried verbatim and
    never interpreted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    values: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def of(cls, overrides: Mapping[str, Any] | ControlOverrides | None = None, **values: Any) -> ControlOverrides:
        if isinstance(overrides, ControlOverrides):
            if not values:
                return overrides
            overrides = overrides.values
        merged: dict[str, Any] = dict(overrides or {})
        merged.update(values)
        return cls(values=merged)

    def is_supplied(self, name: str) -> bool:
        return self.values.get(name) is not None

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)
