"""
Info card endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/info")
async def list_cards(
    category_id: int | None = Query(default=None),
    category: str | None = Query(default=None, max_length=200),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    items = await service.list_cards(category_id=category_id, category=category)
    return {"items": items, "count": len(items)}


@router.get("/info/{card_id}")
async def get_card(
    card_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"item": await service.get_card(card_id)}


@router.post("/info")
async def create_card(
    payload: schemas.InfoCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.create_card(payload)
    return {"success": True, "id": int(row["id"]), "item": row}


@router.put("/info/{card_id}")
async def edit_card(
    card_id: int,
    payload: schemas.InfoEdit,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await service.edit_card(card_id, payload)
    return {"success": True, "item": row}


@router.post("/info/{card_id}/image")
async def upload_card_image(
    card_id: int,
    file: UploadFile = File(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    """
    Store an uploaded picture on the card as an inline data URL.
    """
    row = await service.set_card_image(card_id, file)
    return {"success": True, "item": row}


@router.delete("/info/{card_id}")
async def delete_card(
    card_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_card(card_id)
