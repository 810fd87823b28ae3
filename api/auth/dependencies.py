"""
Auth dependencies for protected FastAPI routes.

Accepted schemes:
- `Bearer <jwt>` (signed session token from /login)
- `Basic <base64(username:password)>` (legacy clients, see AUTH_ALLOW_BASIC)
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import service


def split_authorization(authorization: str | None) -> tuple[str, str]:
    raw = (authorization or "").strip()
    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=service.UNAUTHORIZED)

    scheme, credentials = parts[0].strip().lower(), parts[1].strip()
    if scheme not in {"bearer", "basic"} or not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=service.UNAUTHORIZED)
    return scheme, credentials


async def get_current_user(authorization: str | None = Header(default=None)) -> dict:
    scheme, credentials = split_authorization(authorization)
    if scheme == "bearer":
        return await service.get_user_from_access_token(credentials)
    return await service.get_user_from_basic(credentials)


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    return service.ensure_admin(current_user)
