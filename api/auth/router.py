"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, status

from . import dependencies, schemas, service

router = APIRouter()


@router.post("/login")
@router.post("/auth/login")
async def login(
    payload: schemas.LoginRequest | None = None,
    authorization: str | None = Header(default=None),
) -> schemas.LoginResponse:
    """
    Exchange credentials for a signed bearer token.

    Older clients send no body and put the credentials in a Basic header.
    """
    if payload is not None:
        return await service.login(payload.username, payload.password)

    raw = (authorization or "").strip()
    scheme, _, encoded = raw.partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=service.INVALID_CREDENTIALS)
    return await service.login_with_basic(encoded)


@router.get("/auth/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> dict:
    return {"user": service.to_user_summary(current_user)}
