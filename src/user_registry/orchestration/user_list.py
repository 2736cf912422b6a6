"""User list presenter: sorted view plus the delete confirmation step."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel

from user_registry.config.models import AppConfig
from user_registry.domain.notifications import Notification, failure, success
from user_registry.domain.record import StoredUser
from user_registry.domain.sorting import SortDescriptor, SortDirection, sort_users
from user_registry.infrastructure.user_store import StoreError, UserStore

logger = logging.getLogger(__name__)


class DeleteConfirmation(BaseModel):
    """Open delete dialog: which record, and the name to show."""

    user_id: str
    name: str


class UserListPresenter:
    """
    Holds the loaded users and a sort descriptor and derives the sorted view.
    The collection itself is replaced only through set_users, by the page.
    """

    def __init__(
        self,
        config: AppConfig,
        store: UserStore,
        on_deleted: Callable[[str], None],
        notify: Callable[[Notification], None] | None = None,
    ) -> None:
        self.config = config
        self._store = store
        self._on_deleted = on_deleted
        self._notify = notify or (lambda n: None)
        self._users: list[StoredUser] = []
        self.sort = config.list_view.default_sort.model_copy()
        self._sorted: list[StoredUser] = []
        self.pending_delete: DeleteConfirmation | None = None
        self._deleting = False

    @property
    def users(self) -> list[StoredUser]:
        return list(self._users)

    @property
    def sorted_users(self) -> list[StoredUser]:
        return list(self._sorted)

    def set_users(self, users: list[StoredUser]) -> None:
        self._users = list(users)
        self._resort()

    def set_sort(self, column: str, direction: SortDirection | str = SortDirection.ASCENDING) -> None:
        self.sort = SortDescriptor(column=column, direction=direction)
        self._resort()

    def toggle_sort(self, column: str) -> None:
        self.sort = self.sort.toggled(column)
        self._resort()

    def _resort(self) -> None:
        self._sorted = sort_users(self._users, self.sort)

    # --- delete sub-protocol ---

    def request_delete(self, user: StoredUser) -> DeleteConfirmation:
        self.pending_delete = DeleteConfirmation(user_id=user.id, name=user.list_name)
        return self.pending_delete

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        """Delete the pending record. Returns True if it was removed."""
        pending = self.pending_delete
        if pending is None or self._deleting:
            return False
        self._deleting = True
        try:
            await self._store.delete(pending.user_id)
        except StoreError as e:
            logger.error("Error deleting user %s: %s", pending.user_id, e)
            self._notify(failure(self.config.messages.delete_failed))
            if not self.config.list_view.keep_dialog_open_on_delete_failure:
                self.pending_delete = None
            return False
        finally:
            self._deleting = False

        self._on_deleted(pending.user_id)
        logger.info("Deleted user %s", pending.user_id)
        self._notify(success(self.config.messages.deleted_title, self.config.messages.deleted))
        self.pending_delete = None
        return True
