"""
Category schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_ICON = "fa-folder"


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    icon: str = Field(default=DEFAULT_ICON, max_length=200)

    @field_validator("icon")
    @classmethod
    def _default_icon(cls, value: str) -> str:
        return value.strip() or DEFAULT_ICON


class CategoryEdit(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    icon: str | None = Field(default=None, max_length=200)

    @field_validator("name", "icon")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
