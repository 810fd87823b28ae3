"""
Info card schemas.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from . import images

DisplayType = Literal["icon", "image"]

DEFAULT_ICON = "fas fa-link"


def _check_image(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not images.is_image_reference(value):
        raise ValueError("image must be an http(s) URL or an image data URL")
    return value


class InfoCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_id: int = Field(..., validation_alias=AliasChoices("category_id", "categoryId"))
    title: str = Field(..., min_length=1, max_length=300)
    link: str = Field(default="", max_length=2000)
    icon: str = Field(default=DEFAULT_ICON, max_length=200)
    image: str | None = None
    display_type: DisplayType | None = Field(
        default=None,
        validation_alias=AliasChoices("display_type", "displayType"),
    )

    @field_validator("image")
    @classmethod
    def _valid_image(cls, value: str | None) -> str | None:
        return _check_image(value)

    @model_validator(mode="after")
    def _resolve_display_type(self) -> "InfoCreate":
        if self.display_type is None:
            self.display_type = "image" if self.image else "icon"
        if self.display_type == "image" and not self.image:
            raise ValueError("display_type 'image' requires an image")
        if not self.icon.strip():
            self.icon = DEFAULT_ICON
        return self


class InfoEdit(BaseModel):
    """
    Partial update. `image` may be set to null to drop the picture.
    """

    model_config = ConfigDict(populate_by_name=True)

    category_id: int | None = Field(default=None, validation_alias=AliasChoices("category_id", "categoryId"))
    title: str | None = Field(default=None, min_length=1, max_length=300)
    link: str | None = Field(default=None, max_length=2000)
    icon: str | None = Field(default=None, max_length=200)
    image: str | None = None
    display_type: DisplayType | None = Field(
        default=None,
        validation_alias=AliasChoices("display_type", "displayType"),
    )

    @field_validator("image")
    @classmethod
    def _valid_image(cls, value: str | None) -> str | None:
        return _check_image(value)

    @field_validator("category_id", "title", "link", "display_type")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
