"""Registration page: load, submit -> preview -> confirm, edit, failures."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from user_registry.config.models import AppConfig
from user_registry.domain.record import InvalidRecordError, StoredUser, UserData
from user_registry.infrastructure.firestore_client import FirestoreUserStore
from user_registry.infrastructure.user_store import InMemoryUserStore
from user_registry.orchestration.form_controller import SubmitResult
from user_registry.orchestration.page import RegistrationPage
from user_registry.orchestration.preview import build_preview


class CountingStore(InMemoryUserStore):
    def __init__(self, users: list[StoredUser] | None = None) -> None:
        super().__init__(users)
        self.creates: list[UserData] = []
        self.updates: list[tuple[str, dict[str, str]]] = []

    async def create(self, user: UserData) -> str:
        self.creates.append(user)
        return await super().create(user)

    async def update(self, user_id: str, fields: dict[str, str]) -> None:
        self.updates.append((user_id, fields))
        await super().update(user_id, fields)


def _fill(page: RegistrationPage, user: UserData) -> None:
    for name, value in user.fields().items():
        page.form.change(name, value)


def test_load_users(app_config: AppConfig, memory_store) -> None:
    page = RegistrationPage(app_config, memory_store)
    assert asyncio.run(page.load_users()) is True
    assert [u.id for u in page.user_list.sorted_users] == ["u2", "u1"]


def test_load_failure_notifies_and_keeps_list(app_config: AppConfig, memory_store) -> None:
    async def run() -> None:
        page = RegistrationPage(app_config, memory_store)
        await page.load_users()
        memory_store.available = False
        assert await page.load_users() is False
        assert len(page.users) == 2
        note = page.drain_notifications()[-1]
        assert note.color == "danger"
        assert note.description == app_config.messages.load_failed
        assert page.notifications == []

    asyncio.run(run())


def test_create_flow_calls_create_once_with_draft(app_config: AppConfig, valid_user: UserData) -> None:
    async def run() -> None:
        store = CountingStore()
        page = RegistrationPage(app_config, store)
        _fill(page, valid_user)
        assert await page.submit_form() == SubmitResult.ACCEPTED
        assert page.preview is not None
        assert page.preview.title == "Confirmar Registro"
        assert page.form.state.draft == UserData()

        new_id = await page.confirm()
        assert new_id
        assert store.creates == [valid_user]
        assert page.preview is None
        assert [u.id for u in page.users] == [new_id]
        assert page.drain_notifications()[-1].title == app_config.messages.created_title

    asyncio.run(run())


def test_invalid_submit_opens_no_preview(app_config: AppConfig, valid_user: UserData) -> None:
    async def run() -> None:
        store = CountingStore()
        page = RegistrationPage(app_config, store)
        _fill(page, valid_user.model_copy(update={"email": ""}))
        assert await page.submit_form() == SubmitResult.REJECTED
        assert page.preview is None
        assert await page.confirm() is None
        assert store.creates == []

    asyncio.run(run())


def test_confirm_rejects_invalid_preview(app_config: AppConfig) -> None:
    page = RegistrationPage(app_config, CountingStore())
    page.preview = build_preview(UserData(first_name="Ana"))
    with pytest.raises(InvalidRecordError):
        asyncio.run(page.confirm())


def test_edit_flow_updates_and_leaves_edit_mode(app_config: AppConfig, stored_users) -> None:
    async def run() -> None:
        store = CountingStore(stored_users)
        page = RegistrationPage(app_config, store)
        await page.load_users()
        page.start_edit(stored_users[0])
        assert page.form.state.draft.fields() == stored_users[0].fields()
        assert not any(page.form.state.touched.values())

        page.form.change("email", "ana.z@example.com")
        await page.submit_form()
        assert page.preview is not None and page.preview.is_editing
        assert page.preview.confirm_label == "Actualizar"

        assert await page.confirm() == "u1"
        assert store.creates == []
        assert store.updates[0][0] == "u1"
        assert store.updates[0][1]["email"] == "ana.z@example.com"
        assert page.editing_id is None
        assert next(u for u in page.users if u.id == "u1").email == "ana.z@example.com"
        assert len(page.users) == 2

    asyncio.run(run())


def test_save_failure_keeps_preview_open(app_config: AppConfig, valid_user: UserData) -> None:
    async def run() -> None:
        store = CountingStore()
        page = RegistrationPage(app_config, store)
        _fill(page, valid_user)
        await page.submit_form()
        store.available = False
        assert await page.confirm() is None
        assert page.preview is not None
        assert page.drain_notifications()[-1].description == app_config.messages.save_failed
        store.available = True
        assert await page.confirm() is not None

    asyncio.run(run())


def test_cancel_edit_resets_form(app_config: AppConfig, stored_users) -> None:
    page = RegistrationPage(app_config, CountingStore(stored_users))
    page.start_edit(stored_users[0])
    page.cancel_edit()
    assert page.editing_id is None
    assert page.form.state.draft == UserData()


def test_delete_through_page_reconciles_locally(app_config: AppConfig, memory_store, stored_users) -> None:
    async def run() -> None:
        page = RegistrationPage(app_config, memory_store)
        await page.load_users()
        page.user_list.request_delete(stored_users[1])
        assert await page.user_list.confirm_delete() is True
        assert [u.id for u in page.users] == ["u1"]

    asyncio.run(run())


def test_preview_echoes_every_field(valid_user: UserData) -> None:
    preview = build_preview(valid_user)
    text = preview.render()
    assert text.startswith("Confirmar Registro")
    for value in (valid_user.display_name, valid_user.birth_date, valid_user.curp, valid_user.phone, valid_user.email, valid_user.education):
        assert value in text
    assert preview.confirm_label == "Confirmar"


def test_load_failure_from_firestore_query_error(app_config: AppConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json=[{"error": {"code": 400, "message": "The query requires an index", "status": "FAILED_PRECONDITION"}}],
        )

    async def run() -> None:
        store = FirestoreUserStore(
            base_url="https://firestore.test",
            project_id="demo",
            transport=httpx.MockTransport(handler),
        )
        page = RegistrationPage(app_config, store)
        assert await page.load_users() is False
        assert page.users == []
        assert page.drain_notifications()[-1].description == app_config.messages.load_failed

    asyncio.run(run())
