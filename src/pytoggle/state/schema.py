"""Statically declared state schemas.

A component declares its state fields up front as a :class:`StateSchema`.
The resolver, reducer pipeline and committer only ever iterate the declared
descriptors; keys outside the schema are never discovered dynamically.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from pytoggle.exceptions import ToggleSchemaError


class FieldDescriptor(BaseModel):
    """One declared state field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    controllable: bool = True
    default: Any = None

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("field name must be non-empty")
        if name == "type":
            raise ValueError("'type' is reserved for the change type tag")
        return name


class StateSchema:
    """Ordered, immutable collection of :class:`FieldDescriptor`."""

    def __init__(self, *fields: FieldDescriptor) -> None:
        names = [descriptor.name for descriptor in fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ToggleSchemaError(f"duplicate state fields: {', '.join(duplicates)}")
        if not fields:
            raise ToggleSchemaError("a state schema needs at least one field")
        self._fields: tuple[FieldDescriptor, ...] = fields
        self._by_name: dict[str, FieldDescriptor] = {d.name: d for d in fields}

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"StateSchema({', '.join(self.names())})"

    def names(self) -> tuple[str, ...]:
        return tuple(descriptor.name for descriptor in self._fields)

    def get(self, name: str) -> FieldDescriptor | None:
        return self._by_name.get(name)

    def defaults(self) -> dict[str, Any]:
        """Default value for every declared field, in declaration order."""
        return {descriptor.name: descriptor.default for descriptor in self._fields}


TOGGLE_SCHEMA = StateSchema(FieldDescriptor(name="on", default=False))
"""Schema of the toggle primitive: a single boolean ``on`` field."""
