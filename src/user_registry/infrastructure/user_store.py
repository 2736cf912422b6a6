"""User store: Protocol + in-memory implementation."""

from __future__ import annotations

import logging
import uuid
from typing import Protocol, runtime_checkable

from user_registry.config.models import StoreConfig
from user_registry.domain.record import FIELD_NAMES, StoredUser, UserData

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A remote store operation failed: unavailable, rejected, or not found."""


@runtime_checkable
class UserStore(Protocol):
    """Protocol for the remote user collection. Ids are assigned by the store."""

    async def create(self, user: UserData) -> str:
        """Insert a record and return its new id."""
        ...

    async def list(self) -> list[StoredUser]:
        """All records ordered by last_name, then first_name, ascending."""
        ...

    async def update(self, user_id: str, fields: dict[str, str]) -> None:
        """Overwrite only the supplied fields. StoreError if user_id does not exist."""
        ...

    async def delete(self, user_id: str) -> bool:
        """Remove the record. StoreError if user_id does not exist."""
        ...


def check_update_fields(fields: dict[str, str]) -> None:
    unknown = sorted(set(fields) - set(FIELD_NAMES))
    if unknown:
        raise StoreError(f"Unknown fields: {', '.join(unknown)}")


class InMemoryUserStore:
    """In-memory dict store. Suitable for single process and tests; no persistence."""

    def __init__(self, users: list[StoredUser] | None = None) -> None:
        self._docs: dict[str, dict[str, str]] = {}
        # Flip to False to simulate connectivity loss
        self.available = True
        for u in users or []:
            self._docs[u.id] = u.fields()

    def _check_available(self, action: str) -> None:
        if not self.available:
            logger.error("Error %s user: store is unavailable", action)
            raise StoreError("Store is unavailable")

    async def create(self, user: UserData) -> str:
        self._check_available("adding")
        user_id = uuid.uuid4().hex
        self._docs[user_id] = user.fields()
        return user_id

    async def list(self) -> list[StoredUser]:
        self._check_available("getting")
        users = [StoredUser(id=i, **doc) for i, doc in self._docs.items()]
        # Case-sensitive, like the remote query engine
        return sorted(users, key=lambda u: (u.last_name, u.first_name))

    async def update(self, user_id: str, fields: dict[str, str]) -> None:
        self._check_available("updating")
        check_update_fields(fields)
        if user_id not in self._docs:
            logger.error("Error updating user: %s not found", user_id)
            raise StoreError(f"User not found: {user_id}")
        self._docs[user_id] = {**self._docs[user_id], **fields}

    async def delete(self, user_id: str) -> bool:
        self._check_available("deleting")
        if user_id not in self._docs:
            logger.error("Error deleting user: %s not found", user_id)
            raise StoreError(f"User not found: {user_id}")
        del self._docs[user_id]
        return True


def build_store(config: StoreConfig, api_key: str | None = None) -> UserStore:
    """Create the store selected by config.backend."""
    if config.backend == "firestore":
        from user_registry.infrastructure.firestore_client import FirestoreUserStore

        return FirestoreUserStore(
            base_url=config.base_url,
            project_id=config.project_id or "",
            collection=config.collection,
            database=config.database,
            api_key=api_key,
            timeout=config.timeout,
        )
    return InMemoryUserStore()
