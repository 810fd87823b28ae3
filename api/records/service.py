"""
Generic save/delete keyed on a table name.

The table name is only ever a lookup key into HANDLERS; each entry routes to
the resource's own service (fixed statements, same validation and cascade
rules as the REST endpoints). Unknown tables are refused before any query.

save:   `data.id` present -> partial update, absent -> insert
delete: `id` required
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from fastapi import HTTPException
from pydantic import BaseModel, TypeAdapter

from categories import schemas as category_schemas
from categories import service as category_service
from core import validation
from files import repository as files_repository
from files import schemas as files_schemas
from files import service as files_service
from info import schemas as info_schemas
from info import service as info_service
from updates import schemas as update_schemas
from updates import service as update_service
from users import schemas as user_schemas
from users import service as user_service

from . import schemas

logger = logging.getLogger(__name__)

Schema = type[BaseModel] | TypeAdapter


@dataclass(frozen=True)
class TableHandler:
    create_schema: Schema
    edit_schema: Schema
    create: Callable[[Any, dict], Awaitable[dict]]
    edit: Callable[[int, Any], Awaitable[dict]]
    delete: Callable[[int, bool], Awaitable[dict]]
    create_defaults: dict[str, Any] = field(default_factory=dict)


HANDLERS: dict[str, TableHandler] = {
    "updates": TableHandler(
        create_schema=update_schemas.UpdateCreate,
        edit_schema=update_schemas.UpdateEdit,
        create=lambda payload, user: update_service.create_update(payload, current_user=user),
        edit=lambda record_id, payload: update_service.edit_update(record_id, payload),
        delete=lambda record_id, confirm: update_service.delete_update(record_id),
    ),
    "categories": TableHandler(
        create_schema=category_schemas.CategoryCreate,
        edit_schema=category_schemas.CategoryEdit,
        create=lambda payload, user: category_service.create_category(payload),
        edit=lambda record_id, payload: category_service.edit_category(record_id, payload),
        delete=lambda record_id, confirm: category_service.delete_category(record_id),
    ),
    "info_cards": TableHandler(
        create_schema=info_schemas.InfoCreate,
        edit_schema=info_schemas.InfoEdit,
        create=lambda payload, user: info_service.create_card(payload),
        edit=lambda record_id, payload: info_service.edit_card(record_id, payload),
        delete=lambda record_id, confirm: info_service.delete_card(record_id),
    ),
    "learning_items": TableHandler(
        create_schema=files_schemas.ITEM_CREATE,
        edit_schema=files_schemas.ItemEdit,
        create=lambda payload, user: files_service.create_item(payload),
        edit=lambda record_id, payload: files_service.edit_item(record_id, payload),
        delete=lambda record_id, confirm: files_service.delete_item(record_id),
        create_defaults={"type": "pdf"},
    ),
    "folders": TableHandler(
        create_schema=files_schemas.FolderSave,
        edit_schema=files_schemas.FolderEdit,
        create=lambda payload, user: files_service.create_folder(payload),
        edit=lambda record_id, payload: files_service.edit_folder(record_id, payload),
        delete=lambda record_id, confirm: files_service.delete_folder(record_id, confirm=confirm),
    ),
    "users": TableHandler(
        create_schema=user_schemas.UserCreate,
        edit_schema=user_schemas.UserUpdate,
        create=lambda payload, user: user_service.create_user(payload),
        edit=lambda record_id, payload: user_service.update_user(record_id, payload),
        delete=lambda record_id, confirm: user_service.delete_user(record_id),
    ),
}


def handler_for(table: str) -> TableHandler:
    handler = HANDLERS.get(table)
    if handler is None:
        logger.warning("records_rejected table=%r", table[:64])
        raise HTTPException(status_code=400, detail="Invalid table")
    return handler


def _record_id(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail="Invalid id") from exc


async def perform(request: schemas.RecordRequest, *, current_user: dict) -> dict[str, Any]:
    handler = handler_for(request.table)

    if request.action == "delete":
        if request.id is None:
            raise HTTPException(status_code=400, detail="Missing id")
        result = await handler.delete(request.id, request.confirm)
        logger.info("records_delete table=%s id=%s", request.table, request.id)
        return result

    data = dict(request.data or {})
    record_id = _record_id(data.pop("id", None))
    if record_id is None:
        record_id = request.id

    if record_id is not None:
        payload = validation.parse_payload(handler.edit_schema, data)
        row = await handler.edit(record_id, payload)
        return {"success": True, "id": record_id, "record": row}

    payload = validation.parse_payload(handler.create_schema, {**handler.create_defaults, **data})
    row = await handler.create(payload, current_user)
    return {"success": True, "id": int(row["id"]), "record": row}


async def snapshot(*, current_user: dict) -> dict[str, Any]:
    """
    Everything the legacy client renders, in one payload.
    """
    is_admin = str(current_user.get("role") or "") == "admin"
    updates, categories, info_cards, folders, learning_items = await asyncio.gather(
        update_service.list_updates(),
        category_service.list_categories(),
        info_service.list_cards(),
        files_repository.list_folders(),
        files_repository.list_all_items(),
    )
    users = await user_service.list_users() if is_admin else []
    return {
        "updates": updates,
        "categories": categories,
        "info_cards": info_cards,
        "learning_items": learning_items,
        "folders": folders,
        "users": users,
    }
