"""Registration page: wires form, preview, store and list together."""

from __future__ import annotations

import logging

from user_registry.config.models import AppConfig
from user_registry.domain.notifications import Notification, failure, success
from user_registry.domain.record import InvalidRecordError, StoredUser, UserData
from user_registry.domain.validators import validate_user
from user_registry.infrastructure.user_store import StoreError, UserStore
from user_registry.orchestration.form_controller import FormController, SubmitResult
from user_registry.orchestration.preview import Preview, build_preview
from user_registry.orchestration.user_list import UserListPresenter

logger = logging.getLogger(__name__)


class RegistrationPage:
    """
    Top-level controller. Owns the only mutable user collection (through the
    list presenter) and changes it only after a completed store call.
    """

    def __init__(self, config: AppConfig, store: UserStore) -> None:
        self.config = config
        self._store = store
        self.notifications: list[Notification] = []
        self.user_list = UserListPresenter(
            config, store, on_deleted=self.remove_local, notify=self.notify
        )
        self.form = FormController(config, notify=self.notify)
        self.editing_id: str | None = None
        self.preview: Preview | None = None
        self._confirming = False

    # --- notifications ---

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def drain_notifications(self) -> list[Notification]:
        out, self.notifications = self.notifications, []
        return out

    # --- list ---

    @property
    def users(self) -> list[StoredUser]:
        return self.user_list.users

    async def load_users(self) -> bool:
        """Fetch all users from the store. On failure the current list is kept."""
        try:
            users = await self._store.list()
        except StoreError:
            self.notify(failure(self.config.messages.load_failed))
            return False
        self.user_list.set_users(users)
        logger.debug("Loaded %d users", len(users))
        return True

    def remove_local(self, user_id: str) -> None:
        self.user_list.set_users([u for u in self.user_list.users if u.id != user_id])

    # --- form and preview ---

    async def submit_form(self) -> SubmitResult:
        return await self.form.submit(self.open_preview)

    def open_preview(self, draft: UserData) -> None:
        self.preview = build_preview(draft, is_editing=self.editing_id is not None)

    def close_preview(self) -> None:
        self.preview = None

    def start_edit(self, user: StoredUser) -> None:
        self.editing_id = user.id
        self.preview = None
        self.form = FormController(self.config, initial=user, notify=self.notify)

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.preview = None
        self.form = FormController(self.config, notify=self.notify)

    async def confirm(self) -> str | None:
        """
        Persist the previewed draft: update when editing, create otherwise.
        Returns the affected id, or None if nothing was saved.
        """
        if self.preview is None or self._confirming:
            return None
        user = self.preview.user
        errors = validate_user(user)
        if errors:
            raise InvalidRecordError(errors)

        messages = self.config.messages
        self._confirming = True
        try:
            if self.editing_id is not None:
                user_id = self.editing_id
                await self._store.update(user_id, user.fields())
                note = success(messages.updated_title, messages.updated)
            else:
                user_id = await self._store.create(user)
                if not user_id:
                    raise StoreError("Store returned an empty id")
                note = success(messages.created_title, messages.created)
        except StoreError:
            self.notify(failure(messages.save_failed))
            return None
        finally:
            self._confirming = False

        logger.info("Saved user %s", user_id)
        self.notify(note)
        self.preview = None
        if self.editing_id is not None:
            self.cancel_edit()
        await self.load_users()
        return user_id
