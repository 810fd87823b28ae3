"""
User administration endpoints (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(dependencies=[Depends(auth_dependencies.require_admin)])


@router.get("/users")
async def list_users() -> dict:
    return {"users": await service.list_users()}


@router.get("/users/{user_id}")
async def get_user(user_id: int) -> dict:
    return {"user": await service.get_user(user_id)}


@router.post("/users")
async def create_user(payload: schemas.UserCreate) -> dict:
    row = await service.create_user(payload)
    return {"success": True, "id": int(row["id"]), "user": row}


@router.put("/users/{user_id}")
async def update_user(user_id: int, payload: schemas.UserUpdate) -> dict:
    row = await service.update_user(user_id, payload)
    return {"success": True, "user": row}


@router.delete("/users/{user_id}")
async def delete_user(user_id: int) -> dict:
    return await service.delete_user(user_id)
