"""Firestore REST client implementing UserStore with httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from user_registry.domain.record import StoredUser, UserData
from user_registry.infrastructure.user_store import StoreError, check_update_fields

logger = logging.getLogger(__name__)


def encode_fields(values: dict[str, str]) -> dict[str, Any]:
    """camelCase dict -> Firestore `fields` map of stringValues."""
    return {k: {"stringValue": v} for k, v in values.items()}


def decode_document(doc: dict[str, Any]) -> StoredUser:
    """Firestore document (name + fields) -> StoredUser. Missing fields become ''."""
    user_id = doc["name"].rsplit("/", 1)[-1]
    fields = doc.get("fields") or {}
    data = {k: (v or {}).get("stringValue", "") for k, v in fields.items()}
    known = {k: data.get(k, "") for k in UserData().to_document()}
    return StoredUser.model_validate({"id": user_id, **known})


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    # runQuery reports errors as a one-element array
    if isinstance(body, list) and body:
        body = body[0]
    err = body.get("error") if isinstance(body, dict) else None
    if not isinstance(err, dict):
        return response.text or f"HTTP {response.status_code}"
    status = err.get("status") or response.status_code
    return f"{status}: {err.get('message', '')}".rstrip(": ")


class FirestoreUserStore:
    """Async httpx-based client for one Firestore collection (REST v1 API)."""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        collection: str = "users",
        database: str = "(default)",
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._collection = collection
        self._documents = f"/v1/projects/{project_id}/databases/{database}/documents"
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def _request(
        self,
        action: str,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
    ) -> Any:
        params = list(params or [])
        if self._api_key:
            params.append(("key", self._api_key))
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                r = await client.request(method, path, params=params or None, json=json)
        except httpx.HTTPError as e:
            logger.error("Error %s user: %s", action, e)
            raise StoreError(f"Store is unavailable: {e}") from e
        if r.is_error:
            detail = _error_detail(r)
            logger.error("Error %s user: %s", action, detail)
            raise StoreError(detail)
        if not r.content:
            return {}
        try:
            return r.json()
        except ValueError as e:
            logger.error("Error %s user: response is not JSON", action)
            raise StoreError("Store returned a malformed response") from e

    async def create(self, user: UserData) -> str:
        data = await self._request(
            "adding",
            "POST",
            f"{self._documents}/{self._collection}",
            json={"fields": encode_fields(user.to_document())},
        )
        name = data.get("name") if isinstance(data, dict) else None
        if not name:
            raise StoreError("Store did not return a document id")
        return name.rsplit("/", 1)[-1]

    async def list(self) -> list[StoredUser]:
        query = {
            "structuredQuery": {
                "from": [{"collectionId": self._collection}],
                "orderBy": [
                    {"field": {"fieldPath": "lastName"}, "direction": "ASCENDING"},
                    {"field": {"fieldPath": "firstName"}, "direction": "ASCENDING"},
                ],
            }
        }
        rows = await self._request("getting", "POST", f"{self._documents}:runQuery", json=query)
        if not isinstance(rows, list):
            raise StoreError("Store returned a malformed query result")
        users = []
        for row in rows:
            if not isinstance(row, dict):
                raise StoreError("Store returned a malformed query result")
            if "error" in row:
                detail = (row["error"] or {}).get("message", "query failed")
                logger.error("Error getting user: %s", detail)
                raise StoreError(detail)
            # Rows without "document" carry only readTime (e.g. empty result)
            if "document" in row:
                users.append(decode_document(row["document"]))
        return users

    async def update(self, user_id: str, fields: dict[str, str]) -> None:
        check_update_fields(fields)
        if not fields:
            return
        doc = UserData(**fields).to_document()
        aliased = {alias: doc[alias] for alias in (UserData.model_fields[f].alias or f for f in fields)}
        params = [("updateMask.fieldPaths", path) for path in aliased]
        params.append(("currentDocument.exists", "true"))
        await self._request(
            "updating",
            "PATCH",
            f"{self._documents}/{self._collection}/{user_id}",
            params=params,
            json={"fields": encode_fields(aliased)},
        )

    async def delete(self, user_id: str) -> bool:
        await self._request(
            "deleting",
            "DELETE",
            f"{self._documents}/{self._collection}/{user_id}",
            params=[("currentDocument.exists", "true")],
        )
        return True
