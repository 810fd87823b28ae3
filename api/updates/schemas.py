"""
Pydantic schemas for the updates feed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

Badge = Literal["important", "general", "info", "warning", "announcement", "reminder"]

BADGE_LABELS: dict[str, str] = {
    "important": "🔴 Important",
    "general": "🔵 General",
    "info": "🟢 Info",
    "warning": "🟡 Warning",
    "announcement": "🟢 Announcement",
    "reminder": "🟡 Reminder",
}


class UpdateCreate(BaseModel):
    topic: str = Field(..., min_length=1, max_length=300)
    badge: Badge = "general"
    message: str = Field(default="", max_length=20_000)
    author: str | None = Field(default=None, max_length=200)


class UpdateEdit(BaseModel):
    topic: str | None = Field(default=None, min_length=1, max_length=300)
    badge: Badge | None = None
    message: str | None = Field(default=None, max_length=20_000)

    @field_validator("topic", "badge", "message")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
