"""
User administration schemas.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Role = Literal["admin", "user"]


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)
    display_name: str = Field(
        default="",
        max_length=200,
        validation_alias=AliasChoices("display_name", "displayName", "account_name", "accountName"),
    )
    role: Role = "user"

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("username is required")
        return value


class UserUpdate(BaseModel):
    """
    Partial update: only fields present in the body are written.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(default=None, min_length=1, max_length=150)
    password: str | None = Field(default=None, min_length=1, max_length=128)
    display_name: str | None = Field(
        default=None,
        max_length=200,
        validation_alias=AliasChoices("display_name", "displayName", "account_name", "accountName"),
    )
    role: Role | None = None

    @field_validator("username", "password", "role", "display_name")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
