"""
Display helpers: badge labels, file icons, card visuals and image encoding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from info import images
from updates.schemas import BADGE_LABELS

FILE_ICONS = {
    "folder": "folder",
    "pdf": "file-pdf",
}

DEFAULT_CARD_ICON = "fas fa-file"


def badge_label(badge: str) -> str:
    return BADGE_LABELS.get(badge, badge)


def file_icon(item_type: str) -> str:
    return FILE_ICONS.get(item_type, "file-alt")


def card_visual(card: dict[str, Any]) -> tuple[str, str]:
    """
    ("image", src) when the card has a picture, else ("icon", css class).
    """
    image = str(card.get("image") or "").strip()
    if image and card.get("display_type", "image") == "image":
        return "image", image
    return "icon", str(card.get("icon") or DEFAULT_CARD_ICON)


def encode_image_file(path: str | Path) -> str:
    """
    Read a local picture and return it as an inline data URL.
    """
    path = Path(path)
    content_type = images.guess_content_type(path.name, None)
    if content_type is None:
        raise ValueError(f"Unsupported image type: {path.suffix or path.name}")
    return images.to_data_url(path.read_bytes(), content_type)
