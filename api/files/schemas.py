"""
Pydantic schemas for the file browser (folders + learning items).

`POST /files` takes one of three request variants, selected by `type`:
- "folder": a new folder under `folder_id`
- "pdf":    a link item (`link` required)
- "text":   an inline text item (`content`)
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

ItemType = Literal["pdf", "text"]
EntryType = Literal["folder", "pdf", "text"]


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FolderCreate(_Schema):
    type: Literal["folder"]
    name: str = Field(..., min_length=1, max_length=300, validation_alias=AliasChoices("name", "topic"))
    folder_id: int | None = Field(default=None, validation_alias=AliasChoices("folder_id", "folderId"))


class LinkItemCreate(_Schema):
    type: Literal["pdf"]
    name: str = Field(..., min_length=1, max_length=300, validation_alias=AliasChoices("name", "topic"))
    link: str = Field(..., min_length=1, max_length=2000)
    folder_id: int | None = Field(default=None, validation_alias=AliasChoices("folder_id", "folderId"))


class TextItemCreate(_Schema):
    type: Literal["text"]
    name: str = Field(..., min_length=1, max_length=300, validation_alias=AliasChoices("name", "topic"))
    content: str = Field(default="", max_length=200_000)
    folder_id: int | None = Field(default=None, validation_alias=AliasChoices("folder_id", "folderId"))


FileCreate = Annotated[
    Union[FolderCreate, LinkItemCreate, TextItemCreate],
    Field(discriminator="type"),
]
ItemCreate = Annotated[Union[LinkItemCreate, TextItemCreate], Field(discriminator="type")]

FILE_CREATE = TypeAdapter(FileCreate)
ITEM_CREATE = TypeAdapter(ItemCreate)


class ItemEdit(_Schema):
    """
    Partial update of a learning item. `folder_id: null` moves it to the root.
    """

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=300,
        validation_alias=AliasChoices("name", "topic"),
    )
    type: ItemType | None = None
    link: str | None = Field(default=None, max_length=2000)
    content: str | None = Field(default=None, max_length=200_000)
    folder_id: int | None = Field(default=None, validation_alias=AliasChoices("folder_id", "folderId"))

    @field_validator("name", "type")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class FolderSave(_Schema):
    name: str = Field(..., min_length=1, max_length=300)
    parent_id: int | None = Field(default=None, validation_alias=AliasChoices("parent_id", "parentId"))


class FolderEdit(_Schema):
    """
    Partial update of a folder. `parent_id: null` moves it to the root.

    Accepts the item-style keys too (`topic`, `folder_id`) so a folder entry
    from a `/files` listing can be edited with the same form as an item.
    """

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=300,
        validation_alias=AliasChoices("name", "topic"),
    )
    parent_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_id", "parentId", "folder_id", "folderId"),
    )

    @field_validator("name")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
