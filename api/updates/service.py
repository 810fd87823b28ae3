"""
Updates feed business logic.
"""

from __future__ import annotations

from fastapi import HTTPException

from . import repository, schemas


def badge_label(badge: str) -> str:
    return schemas.BADGE_LABELS.get(badge, badge)


def _present(row: dict) -> dict:
    return {**row, "badge_label": badge_label(str(row.get("badge") or ""))}


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Update not found.")


async def list_updates() -> list[dict]:
    return [_present(row) for row in await repository.list_updates()]


async def get_update(update_id: int) -> dict:
    row = await repository.get_update(update_id)
    if row is None:
        raise _not_found()
    return _present(row)


async def create_update(payload: schemas.UpdateCreate, *, current_user: dict) -> dict:
    author = (payload.author or "").strip() or str(
        current_user.get("display_name") or current_user.get("username") or ""
    )
    row = await repository.create_update(
        topic=payload.topic,
        badge=payload.badge,
        message=payload.message,
        author=author,
    )
    return _present(row)


async def edit_update(update_id: int, payload: schemas.UpdateEdit) -> dict:
    row = await repository.edit_update(update_id, payload.model_dump(exclude_unset=True))
    if row is None:
        raise _not_found()
    return _present(row)


async def delete_update(update_id: int) -> dict:
    if not await repository.delete_update(update_id):
        raise _not_found()
    return {"success": True}
