"""
Updates feed endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/updates")
async def list_updates(_: dict = Depends(auth_dependencies.get_current_user)) -> dict:
    return {"updates": await service.list_updates()}


@router.get("/updates/{update_id}")
async def get_update(
    update_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"update": await service.get_update(update_id)}


@router.post("/updates")
async def create_update(
    payload: schemas.UpdateCreate,
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.create_update(payload, current_user=current_user)
    return {"success": True, "id": int(row["id"]), "update": row}


@router.put("/updates/{update_id}")
async def edit_update(
    update_id: int,
    payload: schemas.UpdateEdit,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.edit_update(update_id, payload)
    return {"success": True, "update": row}


@router.delete("/updates/{update_id}")
async def delete_update(
    update_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_update(update_id)
