"""Form state: value object and pure reducer over form events."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field

from user_registry.domain.record import FIELD_NAMES, StoredUser, UserData
from user_registry.domain.validators import normalize_input, validate_field


class FormEventType(str, Enum):
    FIELD_CHANGED = "field_changed"
    SUBMIT_ATTEMPTED = "submit_attempted"
    SUBMIT_ABORTED = "submit_aborted"
    FORM_RESET = "form_reset"
    EDIT_LOADED = "edit_loaded"


class FieldChanged(BaseModel):
    """User typed/selected a new value for one field."""

    type: FormEventType = FormEventType.FIELD_CHANGED
    field: str
    value: str


class SubmitAttempted(BaseModel):
    type: FormEventType = FormEventType.SUBMIT_ATTEMPTED


class SubmitAborted(BaseModel):
    """The submit handler failed; the draft stays for another attempt."""

    type: FormEventType = FormEventType.SUBMIT_ABORTED


class FormReset(BaseModel):
    type: FormEventType = FormEventType.FORM_RESET


class EditLoaded(BaseModel):
    """Initialise the form from an existing stored record."""

    type: FormEventType = FormEventType.EDIT_LOADED
    user: StoredUser


FormEvent = Union[FieldChanged, SubmitAttempted, SubmitAborted, FormReset, EditLoaded]


def _flags(value: bool) -> dict[str, bool]:
    return {name: value for name in FIELD_NAMES}


class FormState(BaseModel):
    """Draft record plus per-field touched flags and error messages."""

    draft: UserData = Field(default_factory=UserData)
    touched: dict[str, bool] = Field(default_factory=lambda: _flags(False))
    errors: dict[str, str] = Field(default_factory=dict)
    # Calendar value for the date widget, kept in sync with draft.birth_date
    birth_date: date | None = None
    # True from an accepted submit until the form is reset
    submitting: bool = False
    editing_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())


def visible_error(state: FormState, field: str) -> str:
    """Error to display for a field: only once it has been touched."""
    if state.touched.get(field):
        return state.errors.get(field, "")
    return ""


def reduce_form(state: FormState, event: FormEvent) -> FormState:
    """
    Pure transition: (state, event) -> new state. Input state is never mutated.
    Unknown fields in FieldChanged leave the state unchanged.
    """
    if isinstance(event, FieldChanged):
        if event.field not in FIELD_NAMES:
            return state
        value = normalize_input(event.field, event.value)
        draft = state.draft.model_copy(update={event.field: value})
        _, msg = validate_field(event.field, value)
        update: dict = {
            "draft": draft,
            "touched": {**state.touched, event.field: True},
            "errors": {**state.errors, event.field: msg},
        }
        if event.field == "birth_date":
            update["birth_date"] = draft.birth_date_value
        return state.model_copy(update=update)

    if isinstance(event, SubmitAttempted):
        if state.submitting:
            return state
        errors = {}
        for name in FIELD_NAMES:
            _, msg = validate_field(name, getattr(state.draft, name))
            errors[name] = msg
        return state.model_copy(
            update={
                "touched": _flags(True),
                "errors": errors,
                "submitting": not any(errors.values()),
            }
        )

    if isinstance(event, SubmitAborted):
        return state.model_copy(update={"submitting": False})

    if isinstance(event, FormReset):
        return FormState(editing_id=state.editing_id)

    if isinstance(event, EditLoaded):
        draft = event.user.data()
        return FormState(
            draft=draft,
            birth_date=draft.birth_date_value,
            editing_id=event.user.id,
        )

    return state
