"""
File browser endpoints: `/files` (items, plus folder creation) and `/folders`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


def parse_folder_param(raw: str | None) -> int | None:
    """
    `?folder=` may be missing, empty, "null"/"root" (all meaning root) or an id.
    """
    value = (raw or "").strip().lower()
    if value in {"", "null", "none", "root"}:
        return None
    if not (value.isascii() and value.isdigit()):
        raise HTTPException(status_code=422, detail="folder must be a folder id.")
    return int(value)


@router.get("/files")
async def list_directory(
    folder: str | None = Query(default=None, max_length=32),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    List one folder: breadcrumb path, sub-folders first, then items.
    """
    return await service.list_directory(parse_folder_param(folder))


@router.get("/files/{item_id}")
async def get_item(
    item_id: int,
    entry_type: schemas.EntryType | None = Query(default=None, alias="type"),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    One listing entry. `?type=folder` reads a folder (with its path).
    """
    return await service.get_entry(item_id, entry_type=entry_type)


@router.post("/files")
async def create_entry(
    payload: dict[str, Any] = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.create_entry(payload)
    return {"success": True, "id": int(row["id"]), "item": row}


@router.put("/files/{item_id}")
async def edit_item(
    item_id: int,
    payload: dict[str, Any] = Body(...),
    entry_type: schemas.EntryType | None = Query(default=None, alias="type"),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    """
    Partial update. A folder entry (`?type=folder` or `"type": "folder"` in
    the body) is renamed or moved with the folder cycle check.
    """
    row = await service.edit_entry(item_id, payload, entry_type=entry_type)
    return {"success": True, "item": row}


@router.post("/files/{item_id}/mark")
async def toggle_mark(
    item_id: int,
    entry_type: schemas.EntryType | None = Query(default=None, alias="type"),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.toggle_entry_mark(item_id, entry_type=entry_type)
    return {"success": True, "marked": bool(row["marked"]), "item": row}


@router.delete("/files/{item_id}")
async def delete_item(
    item_id: int,
    entry_type: schemas.EntryType | None = Query(default=None, alias="type"),
    confirm: bool = Query(default=False),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_entry(item_id, entry_type=entry_type, confirm=confirm)


@router.get("/folders")
async def list_folders(_: dict = Depends(auth_dependencies.get_current_user)) -> dict:
    return {"folders": await service.list_folders()}


@router.get("/folders/{folder_id}")
async def get_folder(
    folder_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_folder(folder_id)


@router.post("/folders")
async def create_folder(
    payload: schemas.FolderSave,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.create_folder(payload)
    return {"success": True, "id": int(row["id"]), "folder": row}


@router.put("/folders/{folder_id}")
async def edit_folder(
    folder_id: int,
    payload: schemas.FolderEdit,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.edit_folder(folder_id, payload)
    return {"success": True, "folder": row}


@router.delete("/folders/{folder_id}")
async def delete_folder(
    folder_id: int,
    confirm: bool = Query(default=False),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_folder(folder_id, confirm=confirm)
