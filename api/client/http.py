"""
Async HTTP client for the portal API.

`save_*` helpers follow upsert-by-presence-of-id: a dict with an `id` is sent
as a PUT to `/<resource>/<id>`, otherwise as a POST to `/<resource>`.
"""

from __future__ import annotations

from typing import Any

import httpx


class PortalAPIError(RuntimeError):
    def __init__(self, status_code: int, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class PortalClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base_url = (base_url or "").strip()
        if not base_url:
            raise ValueError("base_url is empty.")
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout_s, transport=transport)

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        resp = await self._client.request(
            method,
            path,
            json=json,
            params=params,
            files=files,
            headers=self._headers(),
        )
        try:
            data = resp.json()
        except ValueError:
            data = {"error": resp.text[:500]}
        if not isinstance(data, dict):
            data = {"data": data}

        if resp.status_code >= 400:
            message = str(data.get("error") or data.get("detail") or resp.reason_phrase)
            raise PortalAPIError(resp.status_code, message, data)
        return data

    async def _save(self, resource: str, data: dict[str, Any]) -> dict[str, Any]:
        body = dict(data)
        record_id = body.pop("id", None)
        if record_id:
            return await self._request("PUT", f"/{resource}/{int(record_id)}", json=body)
        return await self._request("POST", f"/{resource}", json=body)

    # --- auth ------------------------------------------------------------------

    async def login(self, username: str, password: str) -> dict[str, Any]:
        data = await self._request("POST", "/login", json={"username": username, "password": password})
        self.token = str(data["token"])
        return data

    async def me(self) -> dict[str, Any]:
        return (await self._request("GET", "/auth/me"))["user"]

    async def snapshot(self) -> dict[str, Any]:
        return await self._request("GET", "/getData")

    # --- updates ---------------------------------------------------------------

    async def list_updates(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/updates"))["updates"]

    async def get_update(self, update_id: int) -> dict[str, Any]:
        return (await self._request("GET", f"/updates/{update_id}"))["update"]

    async def save_update(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._save("updates", data)

    async def delete_update(self, update_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/updates/{update_id}")

    # --- files and folders -----------------------------------------------------

    async def list_directory(self, folder_id: int | None = None) -> dict[str, Any]:
        params = {"folder": "" if folder_id is None else str(folder_id)}
        return await self._request("GET", "/files", params=params)

    async def get_file(self, item_id: int, *, entry_type: str | None = None) -> dict[str, Any]:
        params = {"type": entry_type} if entry_type else None
        return (await self._request("GET", f"/files/{item_id}", params=params))["item"]

    async def save_file(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._save("files", data)

    async def mark_file(self, item_id: int) -> dict[str, Any]:
        return await self._request("POST", f"/files/{item_id}/mark")

    async def delete_file(
        self,
        item_id: int,
        *,
        entry_type: str | None = None,
        confirm: bool = False,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if entry_type:
            params["type"] = entry_type
        if confirm:
            params["confirm"] = "true"
        return await self._request("DELETE", f"/files/{item_id}", params=params or None)

    async def list_folders(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/folders"))["folders"]

    async def get_folder(self, folder_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/folders/{folder_id}")

    async def save_folder(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._save("folders", data)

    async def delete_folder(self, folder_id: int, *, confirm: bool = False) -> dict[str, Any]:
        params = {"confirm": "true"} if confirm else None
        return await self._request("DELETE", f"/folders/{folder_id}", params=params)

    # --- info cards ------------------------------------------------------------

    async def list_info(
        self,
        *,
        category_id: int | None = None,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if category_id is not None:
            params["category_id"] = category_id
        if category:
            params["category"] = category
        return (await self._request("GET", "/info", params=params or None))["items"]

    async def get_info(self, card_id: int) -> dict[str, Any]:
        return (await self._request("GET", f"/info/{card_id}"))["item"]

    async def save_info(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._save("info", data)

    async def upload_info_image(
        self,
        card_id: int,
        *,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> dict[str, Any]:
        files = {"file": (filename, data, content_type)}
        return await self._request("POST", f"/info/{card_id}/image", files=files)

    async def delete_info(self, card_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/info/{card_id}")

    # --- categories ------------------------------------------------------------

    async def list_categories(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/categories"))["categories"]

    async def save_category(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._save("categories", data)

    async def delete_category(self, category_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/categories/{category_id}")

    # --- users -----------------------------------------------------------------

    async def list_users(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/users"))["users"]

    async def save_user(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._save("users", data)

    async def delete_user(self, user_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/users/{user_id}")
