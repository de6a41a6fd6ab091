"""Field-level reconciliation of one entity against remote-derived values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class FieldChange:
    field: str
    old_value: object
    new_value: object

    def __str__(self) -> str:
        return f"{self.field}: {self.old_value!r} -> {self.new_value!r}"


def apply_field_changes(entity: object, desired: Mapping[str, object]) -> list[FieldChange]:
    """Set every field of ``entity`` that differs from ``desired``.

    Returns the changes made; an empty list means the entity is clean and must
    not be written back.
    """

    changes: list[FieldChange] = []
    for name, new_value in desired.items():
        old_value = getattr(entity, name)
        if old_value == new_value:
            continue
        setattr(entity, name, new_value)
        changes.append(FieldChange(field=name, old_value=old_value, new_value=new_value))
    return changes
