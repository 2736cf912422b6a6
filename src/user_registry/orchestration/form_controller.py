"""Form controller: applies form events and runs the submit gate."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from user_registry.config.models import AppConfig
from user_registry.domain.form import (
    EditLoaded,
    FieldChanged,
    FormEvent,
    FormReset,
    FormState,
    SubmitAborted,
    SubmitAttempted,
    reduce_form,
    visible_error,
)
from user_registry.domain.notifications import Notification, failure
from user_registry.domain.record import StoredUser, UserData

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[UserData], "Awaitable[None] | None"]


class SubmitResult(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    # A previous submit is still in progress
    IGNORED = "ignored"


class FormController:
    """Holds one FormState; every change goes through reduce_form."""

    def __init__(
        self,
        config: AppConfig,
        initial: StoredUser | None = None,
        notify: Callable[[Notification], None] | None = None,
    ) -> None:
        self.config = config
        self._notify = notify or (lambda n: None)
        self.state = FormState()
        if initial is not None:
            self.dispatch(EditLoaded(user=initial))

    def dispatch(self, event: FormEvent) -> FormState:
        self.state = reduce_form(self.state, event)
        return self.state

    def change(self, field: str, value: str) -> str:
        """Apply a user edit to one field; return the error now visible for it."""
        self.dispatch(FieldChanged(field=field, value=value))
        return visible_error(self.state, field)

    def error_for(self, field: str) -> str:
        return visible_error(self.state, field)

    def reset(self) -> None:
        self.dispatch(FormReset())

    async def submit(self, handler: SubmitHandler) -> SubmitResult:
        """
        Validate every field. On success hand a copy of the draft to handler exactly
        once, then clear the form after the configured delay.
        """
        if self.state.submitting:
            logger.debug("Submit ignored: previous submit still in progress")
            return SubmitResult.IGNORED

        self.dispatch(SubmitAttempted())
        if not self.state.submitting:
            self._notify(failure(self.config.messages.validation_failed))
            return SubmitResult.REJECTED

        draft = self.state.draft.model_copy()
        try:
            outcome = handler(draft)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            self.dispatch(SubmitAborted())
            raise
        # Lets a confirmation step read the last values before they are cleared
        await asyncio.sleep(self.config.form.reset_delay_seconds)
        self.reset()
        return SubmitResult.ACCEPTED
