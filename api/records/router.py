"""
Generic records endpoints (legacy clients).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/getData")
@router.get("/records")
async def snapshot(current_user: dict = Depends(auth_dependencies.get_current_user)) -> dict:
    return await service.snapshot(current_user=current_user)


@router.post("/records")
async def perform(
    request: schemas.RecordRequest,
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.perform(request, current_user=current_user)
