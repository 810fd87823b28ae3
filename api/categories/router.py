"""
Category endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/categories")
async def list_categories(_: dict = Depends(auth_dependencies.get_current_user)) -> dict:
    return {"categories": await service.list_categories()}


@router.get("/categories/{category_id}")
async def get_category(
    category_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"category": await service.get_category(category_id)}


@router.post("/categories")
async def create_category(
    payload: schemas.CategoryCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.create_category(payload)
    return {"success": True, "id": int(row["id"]), "category": row}


@router.put("/categories/{category_id}")
async def edit_category(
    category_id: int,
    payload: schemas.CategoryEdit,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.edit_category(category_id, payload)
    return {"success": True, "category": row}


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_category(category_id)
