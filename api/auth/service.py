"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
UNAUTHORIZED = "Unauthorized"
FORBIDDEN = "Forbidden"


def to_user_summary(user_row: dict) -> schemas.UserSummary:
    return schemas.UserSummary(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        display_name=str(user_row.get("display_name") or user_row["username"]),
        role=str(user_row.get("role") or "user"),
    )


def _unauthorized(detail: str = UNAUTHORIZED) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def authenticate(username: str, password: str) -> dict | None:
    """
    Return the user row when the credentials match, else None.
    """
    user_row = await repository.get_user_by_username(username)
    if user_row is None:
        return None
    if not security.verify_password(password, str(user_row.get("password_hash") or "")):
        return None
    return user_row


async def login(username: str, password: str) -> schemas.LoginResponse:
    user_row = await authenticate(username, password)
    if user_row is None:
        # Same answer for unknown user and wrong password.
        logger.info("login_failed username=%s", repository.normalize_username(username))
        raise _unauthorized(INVALID_CREDENTIALS)

    user = to_user_summary(user_row)
    token = security.build_access_token(user_id=user.id, username=user.username, role=user.role)
    logger.info("login_ok user_id=%s role=%s", user.id, user.role)
    return schemas.LoginResponse(user=user, token=token)


async def login_with_basic(encoded: str) -> schemas.LoginResponse:
    if not security.basic_auth_allowed():
        raise _unauthorized(INVALID_CREDENTIALS)
    try:
        username, password = security.decode_basic_credentials(encoded)
    except security.AuthSecurityError as exc:
        raise _unauthorized(INVALID_CREDENTIALS) from exc
    return await login(username, password)


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise _unauthorized() from exc

    subject = str(payload.get("sub") or "").strip()
    if not (subject.isascii() and subject.isdigit()):
        raise _unauthorized()

    # Role comes from the store, not the token, so demotions apply immediately.
    user_row = await repository.get_user_by_id(int(subject))
    if user_row is None:
        raise _unauthorized()
    return user_row


async def get_user_from_basic(encoded: str) -> dict:
    if not security.basic_auth_allowed():
        raise _unauthorized()
    try:
        username, password = security.decode_basic_credentials(encoded)
    except security.AuthSecurityError as exc:
        raise _unauthorized() from exc

    user_row = await authenticate(username, password)
    if user_row is None:
        raise _unauthorized()
    return user_row


def ensure_admin(user_row: dict) -> dict:
    if str(user_row.get("role") or "") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
    return user_row
