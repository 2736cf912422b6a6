"""Sort descriptor and case-insensitive sorting of stored users."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, field_validator

from user_registry.domain.record import FIELD_NAMES, StoredUser


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortDescriptor(BaseModel):
    """Which column the list is sorted by, and in which direction."""

    column: str = "last_name"
    direction: SortDirection = SortDirection.ASCENDING

    @field_validator("column")
    @classmethod
    def _known_column(cls, v: str) -> str:
        if v not in FIELD_NAMES:
            raise ValueError(f"Unknown sort column: {v}")
        return v

    def toggled(self, column: str) -> SortDescriptor:
        """Header click: same column flips direction, a new column starts ascending."""
        if column == self.column:
            flipped = (
                SortDirection.DESCENDING
                if self.direction == SortDirection.ASCENDING
                else SortDirection.ASCENDING
            )
            return SortDescriptor(column=column, direction=flipped)
        return SortDescriptor(column=column)


def sort_users(users: Iterable[StoredUser], descriptor: SortDescriptor) -> list[StoredUser]:
    """
    Return a new list ordered by the descriptor's column, compared as lower-cased text.
    Ties keep their input order.
    """
    return sorted(
        users,
        key=lambda u: str(getattr(u, descriptor.column)).lower(),
        reverse=descriptor.direction == SortDirection.DESCENDING,
    )
