"""
File browser business logic.

The browser shows one folder at a time: its breadcrumb path from the root,
its sub-folders and its learning items. Structural rules (no cycles,
subtree delete) are delegated to `files.tree`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException

from core import validation

from . import repository, schemas, tree

logger = logging.getLogger(__name__)


def _folder_not_found(detail: str = "Folder not found.") -> HTTPException:
    return HTTPException(status_code=404, detail=detail)


def _item_not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="File not found.")


async def _folder_index() -> dict[int, tree.FolderNode]:
    return tree.index_folders(await repository.list_folders())


async def _require_parent(folder_id: int | None) -> None:
    if folder_id is None:
        return None
    if await repository.get_folder(folder_id) is None:
        raise _folder_not_found("Parent folder not found.")
    return None


def folder_entry(node: tree.FolderNode) -> dict[str, Any]:
    return {**node.as_dict(), "type": "folder"}


# --- browsing ------------------------------------------------------------------


async def list_directory(folder_id: int | None) -> dict[str, Any]:
    folders = await _folder_index()
    if folder_id is not None and folder_id not in folders:
        raise _folder_not_found()

    path = tree.ancestor_path(folders, folder_id)
    sub_folders = tree.children(folders, folder_id)
    items = await repository.list_items(folder_id=folder_id)

    return {
        "folder": folders[folder_id].as_dict() if folder_id is not None else None,
        "path": [node.as_dict() for node in path],
        "items": [folder_entry(node) for node in sub_folders] + items,
    }


async def get_folder(folder_id: int) -> dict[str, Any]:
    folders = await _folder_index()
    if folder_id not in folders:
        raise _folder_not_found()
    return {
        "folder": folders[folder_id].as_dict(),
        "path": [node.as_dict() for node in tree.ancestor_path(folders, folder_id)],
    }


async def list_folders() -> list[dict[str, Any]]:
    return await repository.list_folders()


# --- items ---------------------------------------------------------------------


async def get_item(item_id: int) -> dict[str, Any]:
    row = await repository.get_item(item_id)
    if row is None:
        raise _item_not_found()
    return row


async def create_entry(data: Any) -> dict[str, Any]:
    """
    Create a folder or an item from a `POST /files` body.
    """
    payload = validation.parse_payload(schemas.FILE_CREATE, data)
    if isinstance(payload, schemas.FolderCreate):
        row = await create_folder(schemas.FolderSave(name=payload.name, parent_id=payload.folder_id))
        return {**row, "type": "folder"}
    return await create_item(payload)


async def create_item(payload: schemas.LinkItemCreate | schemas.TextItemCreate) -> dict[str, Any]:
    await _require_parent(payload.folder_id)
    if isinstance(payload, schemas.LinkItemCreate):
        link, content = payload.link.strip(), None
    else:
        link, content = None, payload.content

    return await repository.create_item(
        name=payload.name.strip(),
        item_type=payload.type,
        link=link,
        content=content,
        folder_id=payload.folder_id,
    )


async def _resolve_edit_type(item_id: int, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Validate the row as it will be after the update: a pdf needs a link,
    a text item gets empty content rather than null.
    """
    if not fields.keys() & {"type", "link", "content"}:
        return fields

    existing = await get_item(item_id)
    item_type = fields.get("type", existing.get("type"))
    link = fields["link"] if "link" in fields else existing.get("link")
    content = fields["content"] if "content" in fields else existing.get("content")

    if item_type == "pdf" and not (link or "").strip():
        raise HTTPException(status_code=400, detail="A pdf item requires a link.")
    if item_type == "text" and content is None:
        fields["content"] = ""
    return fields


async def edit_item(item_id: int, payload: schemas.ItemEdit) -> dict[str, Any]:
    fields = await _resolve_edit_type(item_id, payload.model_dump(exclude_unset=True))
    if fields.get("folder_id") is not None:
        await _require_parent(int(fields["folder_id"]))

    row = await repository.edit_item(item_id, fields)
    if row is None:
        raise _item_not_found()
    return row


async def toggle_mark(item_id: int) -> dict[str, Any]:
    row = await repository.toggle_item_marked(item_id)
    if row is None:
        raise _item_not_found()
    return row


async def delete_item(item_id: int) -> dict[str, Any]:
    if not await repository.delete_item(item_id):
        raise _item_not_found()
    return {"success": True}


# --- folders -------------------------------------------------------------------


async def create_folder(payload: schemas.FolderSave) -> dict[str, Any]:
    await _require_parent(payload.parent_id)
    return await repository.create_folder(name=payload.name.strip(), parent_id=payload.parent_id)


async def edit_folder(folder_id: int, payload: schemas.FolderEdit) -> dict[str, Any]:
    fields = payload.model_dump(exclude_unset=True)
    folders = await _folder_index()
    if folder_id not in folders:
        raise _folder_not_found()

    if "parent_id" in fields:
        new_parent_id = fields["parent_id"]
        if new_parent_id is not None and new_parent_id not in folders:
            raise _folder_not_found("Parent folder not found.")
        try:
            tree.validate_move(folders, folder_id, new_parent_id)
        except tree.FolderCycleError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    row = await repository.edit_folder(folder_id, fields)
    if row is None:
        raise _folder_not_found()
    return row


async def delete_folder(folder_id: int, *, confirm: bool = False) -> dict[str, Any]:
    """
    Delete a folder with its whole subtree.

    A non-empty folder needs `confirm=True`; otherwise a 409 tells the caller
    how much would be removed so it can ask the user first.
    """
    folders = await _folder_index()
    if folder_id not in folders:
        raise _folder_not_found()

    folder_ids = tree.subtree_ids(folders, folder_id)
    sub_folder_count = len(folder_ids) - 1
    item_count = await repository.count_items_in_folders(folder_ids)

    if (sub_folder_count or item_count) and not confirm:
        raise HTTPException(
            status_code=409,
            detail={
                "error": "Folder is not empty. Confirm to delete it with all of its contents.",
                "requires_confirmation": True,
                "folders": sub_folder_count,
                "items": item_count,
            },
        )

    folders_deleted, items_deleted = await repository.delete_folders(folder_ids)
    logger.info(
        "folder_deleted folder_id=%s folders=%s items=%s",
        folder_id,
        folders_deleted,
        items_deleted,
    )
    return {"success": True, "folders_deleted": folders_deleted, "items_deleted": items_deleted}


# --- /files/{id} entries -------------------------------------------------------
# Folders and items live in separate tables, so an id alone is ambiguous.
# Callers name the entry type (query `type=` or the body's `type`); folder
# entries go to the folder rules, anything else to the item rules.


def is_folder_entry(entry_type: str | None, data: Any = None) -> bool:
    if entry_type is None and isinstance(data, dict):
        entry_type = data.get("type")
    return entry_type == "folder"


async def get_entry(entry_id: int, *, entry_type: str | None) -> dict[str, Any]:
    if is_folder_entry(entry_type):
        found = await get_folder(entry_id)
        return {"item": {**found["folder"], "type": "folder"}, "path": found["path"]}
    return {"item": await get_item(entry_id)}


async def edit_entry(entry_id: int, data: Any, *, entry_type: str | None) -> dict[str, Any]:
    if is_folder_entry(entry_type, data):
        fields = {k: v for (k, v) in dict(data or {}).items() if k != "type"}
        payload = validation.parse_payload(schemas.FolderEdit, fields)
        return {**await edit_folder(entry_id, payload), "type": "folder"}
    return await edit_item(entry_id, validation.parse_payload(schemas.ItemEdit, data))


async def toggle_entry_mark(entry_id: int, *, entry_type: str | None) -> dict[str, Any]:
    if is_folder_entry(entry_type):
        raise HTTPException(status_code=400, detail="Folders cannot be marked.")
    return await toggle_mark(entry_id)


async def delete_entry(entry_id: int, *, entry_type: str | None, confirm: bool = False) -> dict[str, Any]:
    if is_folder_entry(entry_type):
        return await delete_folder(entry_id, confirm=confirm)
    return await delete_item(entry_id)
