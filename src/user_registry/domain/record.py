"""User record models: draft data, stored record, education levels."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EducationLevel(str, Enum):
    """Allowed values for the education field."""

    PRIMARIA = "Primaria"
    SECUNDARIA = "Secundaria"
    PREPARATORIA = "Preparatoria"
    UNIVERSIDAD = "Universidad"
    POSGRADO = "Posgrado"


# Form order; also the set of sortable/updatable columns.
FIELD_NAMES: tuple[str, ...] = (
    "first_name",
    "last_name",
    "mother_last_name",
    "birth_date",
    "curp",
    "phone",
    "email",
    "education",
)


class InvalidRecordError(ValueError):
    """A record that fails validation was about to reach the store."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        detail = ", ".join(f"{k}: {v}" for k, v in errors.items())
        super().__init__(f"Invalid record ({detail})")


class UserData(BaseModel):
    """The eight registration fields. Empty strings mean unset (draft)."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    mother_last_name: str = Field(default="", alias="motherLastName")
    birth_date: str = Field(default="", alias="birthDate", description="ISO YYYY-MM-DD")
    curp: str = ""
    phone: str = ""
    email: str = ""
    education: str = ""

    def fields(self) -> dict[str, str]:
        """field_name -> value, snake_case keys."""
        return {name: getattr(self, name) for name in FIELD_NAMES}

    def to_document(self) -> dict[str, str]:
        """Document shape as stored remotely (camelCase keys)."""
        return self.model_dump(by_alias=True, include=set(FIELD_NAMES))

    @property
    def display_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name, self.mother_last_name) if p)

    @property
    def list_name(self) -> str:
        """Surnames first, as shown in the list and the delete dialog."""
        return " ".join(p for p in (self.last_name, self.mother_last_name, self.first_name) if p)

    @property
    def birth_date_value(self) -> date | None:
        """Birth date as a calendar date, or None if unset or unparseable."""
        if not self.birth_date:
            return None
        try:
            return date.fromisoformat(self.birth_date)
        except ValueError:
            return None


class StoredUser(UserData):
    """UserData plus the store-assigned id. The id never changes."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)

    def data(self) -> UserData:
        """Drop the id and return a plain, mutable UserData."""
        return UserData(**self.fields())
