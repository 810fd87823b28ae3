"""
Info card business logic.

Cards belong to a category and show either an icon or an image
(remote URL or inline data URL).
"""

from __future__ import annotations

from fastapi import HTTPException, UploadFile

from categories import repository as category_repository

from . import images, repository, schemas


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Info item not found.")


async def _require_category(category_id: int) -> dict:
    row = await category_repository.get_category(category_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Category not found.")
    return row


async def resolve_category_id(*, category_id: int | None, category: str | None) -> int | None:
    """
    Cards can be filtered by category id or (case-insensitive) name.
    A name that matches nothing yields -1 so the listing is empty.
    """
    if category_id is not None:
        return category_id

    name = (category or "").strip()
    if not name:
        return None
    if name.isascii() and name.isdigit():
        return int(name)

    row = await category_repository.get_category_by_name(name)
    return int(row["id"]) if row is not None else -1


async def list_cards(*, category_id: int | None = None, category: str | None = None) -> list[dict]:
    resolved = await resolve_category_id(category_id=category_id, category=category)
    return await repository.list_cards(category_id=resolved)


async def get_card(card_id: int) -> dict:
    row = await repository.get_card(card_id)
    if row is None:
        raise _not_found()
    return row


async def create_card(payload: schemas.InfoCreate) -> dict:
    await _require_category(payload.category_id)
    return await repository.create_card(
        category_id=payload.category_id,
        title=payload.title.strip(),
        display_type=payload.display_type or "icon",
        icon=payload.icon,
        image=payload.image,
        link=payload.link.strip(),
    )


def _resolve_edit_display_type(existing: dict, fields: dict) -> dict:
    if "display_type" not in fields and "image" in fields:
        fields["display_type"] = "image" if fields["image"] else "icon"

    display_type = fields.get("display_type", existing.get("display_type"))
    image = fields["image"] if "image" in fields else existing.get("image")
    if display_type == "image" and not image:
        raise HTTPException(status_code=400, detail="display_type 'image' requires an image.")
    return fields


async def edit_card(card_id: int, payload: schemas.InfoEdit) -> dict:
    existing = await get_card(card_id)
    fields = _resolve_edit_display_type(existing, payload.model_dump(exclude_unset=True))
    if "category_id" in fields:
        await _require_category(int(fields["category_id"]))

    row = await repository.edit_card(card_id, fields)
    if row is None:
        raise _not_found()
    return row


async def set_card_image(card_id: int, file: UploadFile) -> dict:
    await get_card(card_id)
    data_url = await images.upload_to_data_url(file)
    row = await repository.edit_card(card_id, {"image": data_url, "display_type": "image"})
    if row is None:
        raise _not_found()
    return row


async def delete_card(card_id: int) -> dict:
    if not await repository.delete_card(card_id):
        raise _not_found()
    return {"success": True}
