"""
Category business logic. Deleting a category always removes its info cards.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException

from . import repository, schemas

logger = logging.getLogger(__name__)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Category not found.")


async def list_categories() -> list[dict]:
    return await repository.list_categories()


async def get_category(category_id: int) -> dict:
    row = await repository.get_category(category_id)
    if row is None:
        raise _not_found()
    return row


async def create_category(payload: schemas.CategoryCreate) -> dict:
    return await repository.create_category(name=payload.name.strip(), icon=payload.icon)


async def edit_category(category_id: int, payload: schemas.CategoryEdit) -> dict:
    row = await repository.edit_category(category_id, payload.model_dump(exclude_unset=True))
    if row is None:
        raise _not_found()
    return row


async def delete_category(category_id: int) -> dict:
    deleted, cards_deleted = await repository.delete_category_cascade(category_id)
    if not deleted:
        raise _not_found()
    logger.info("category_deleted category_id=%s cards=%s", category_id, cards_deleted)
    return {"success": True, "cards_deleted": cards_deleted}
