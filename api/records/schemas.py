"""
Schemas for the generic records endpoint used by older clients.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ALLOWED_TABLES = ("updates", "categories", "info_cards", "learning_items", "folders", "users")


class RecordRequest(BaseModel):
    action: Literal["save", "delete"]
    # Checked against ALLOWED_TABLES by the service before anything else runs.
    table: str = Field(..., min_length=1, max_length=64)
    data: dict[str, Any] | None = None
    id: int | None = None
    confirm: bool = False
