"""
User administration rules.

- usernames are unique
- passwords are stored as bcrypt hashes only
- the reserved admin account (ADMIN_USERNAME) cannot be deleted, renamed or demoted
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException

from auth import security
from core import config

from . import repository, schemas

logger = logging.getLogger(__name__)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="User not found.")


def _duplicate() -> HTTPException:
    return HTTPException(status_code=409, detail="Username already exists.")


async def list_users() -> list[dict]:
    return await repository.list_users()


async def get_user(user_id: int) -> dict:
    row = await repository.get_user(user_id)
    if row is None:
        raise _not_found()
    return row


async def create_user(payload: schemas.UserCreate) -> dict:
    if await repository.username_exists(payload.username):
        raise _duplicate()

    try:
        row = await repository.create_user(
            username=payload.username,
            password_hash=security.hash_password(payload.password),
            display_name=payload.display_name or payload.username,
            role=payload.role,
        )
    except asyncpg.UniqueViolationError as exc:
        # Lost a race with another insert of the same username.
        raise _duplicate() from exc

    logger.info("user_created user_id=%s role=%s", row["id"], row["role"])
    return row


async def update_user(user_id: int, payload: schemas.UserUpdate) -> dict:
    fields = payload.model_dump(exclude_unset=True)
    existing = await get_user(user_id)
    if str(existing["username"]) == config.admin_username():
        renamed = "username" in fields and fields["username"].strip() != existing["username"]
        demoted = "role" in fields and fields["role"] != "admin"
        if renamed or demoted:
            raise HTTPException(
                status_code=400,
                detail="The admin account cannot be renamed or demoted.",
            )

    password = fields.pop("password", None)
    if password is not None:
        fields["password_hash"] = security.hash_password(password)

    if "username" in fields:
        fields["username"] = fields["username"].strip()
        if await repository.username_exists(fields["username"], exclude_id=user_id):
            raise _duplicate()

    try:
        row = await repository.update_user(user_id, fields)
    except asyncpg.UniqueViolationError as exc:
        raise _duplicate() from exc
    if row is None:
        raise _not_found()
    return row


async def delete_user(user_id: int) -> dict:
    row = await repository.get_user(user_id)
    if row is None:
        raise _not_found()
    if str(row["username"]) == config.admin_username():
        raise HTTPException(status_code=400, detail="The admin account cannot be deleted.")

    await repository.delete_user(user_id)
    logger.info("user_deleted user_id=%s", user_id)
    return {"success": True}


async def ensure_default_admin() -> None:
    """
    Seed the reserved admin account from ADMIN_PASSWORD when it is missing.
    """
    username = config.admin_username()
    if await repository.username_exists(username):
        return None

    password = config.env_str("ADMIN_PASSWORD", "")
    if not password:
        logger.warning("admin_seed_skipped username=%s reason=ADMIN_PASSWORD_unset", username)
        return None

    await repository.create_user(
        username=username,
        password_hash=security.hash_password(password),
        display_name=config.env_str("ADMIN_DISPLAY_NAME", "Administrator"),
        role="admin",
    )
    logger.info("admin_seeded username=%s", username)
