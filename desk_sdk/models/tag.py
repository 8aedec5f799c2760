"""Tag models."""

from pydantic import Field

from desk_sdk.models.base import BaseEntity
from desk_sdk.models.included import ListResponse, SingleResponse


class Tag(BaseEntity):
    name: str | None = None
    color: str | None = None


class TagResponse(SingleResponse):
    tag: Tag


class TagsResponse(ListResponse):
    tags: list[Tag] = Field(default_factory=list)
