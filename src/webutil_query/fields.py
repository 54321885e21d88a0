"""FieldRegistry: per-resource filterable/sortable/groupable columns."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class FieldConfig:
    """
    Server-side settings for one logical field.

    Attributes:
        physical_column: Column expression written into the SQL text,
            e.g. ``"u.name"``.
        allow_filter: Field may appear in a filter descriptor.
        allow_sort: Field may appear in a sort descriptor.
        allow_group: Field may appear in a group descriptor.
        value_transform: Optional callable applied to a validated filter
            value; returns the value to bind or raises to reject it.
    """

    physical_column: str
    allow_filter: bool = False
    allow_sort: bool = False
    allow_group: bool = False
    value_transform: Callable[[Any], Any] | None = None


class FieldRegistry(Mapping[str, FieldConfig]):
    """Read-only map of logical field name to ``FieldConfig``."""

    def __init__(self, fields: Mapping[str, FieldConfig] | None = None) -> None:
        self._fields: Mapping[str, FieldConfig] = MappingProxyType(dict(fields or {}))

    def lookup(self, name: str) -> FieldConfig | None:
        """Return the config for *name* or ``None`` if unknown."""
        return self._fields.get(name)

    def __getitem__(self, name: str) -> FieldConfig:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldRegistry({sorted(self._fields)!r})"
