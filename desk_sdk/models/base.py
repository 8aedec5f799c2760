"""Shared building blocks for Desk API models.

Field names follow Python conventions; the wire format is camelCase. Models
keep keys they do not declare, so data returned by the server survives a
decode/encode round trip unchanged.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class DeskModel(BaseModel):
    """Base class for all Desk API payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_null_defaults(cls, data: Any) -> Any:
        # The API writes empty collections and absent blocks as null.
        if not isinstance(data, dict):
            return data
        defaulted = set()
        for name, field in cls.model_fields.items():
            if field.default_factory is not None:
                defaulted.update((name, field.alias or name))
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in defaulted
        }

    def to_json(self) -> str:
        """Serialize the fields that were set, using wire names."""
        return self.model_dump_json(by_alias=True, exclude_unset=True)


class EntityRef(DeskModel):
    """Reference to another entity by ID, resolved through ``included``."""

    id: int
    type: str | None = None
    meta: dict[str, Any] | None = None


class BaseEntity(DeskModel):
    """Fields common to every resource entity. ``id`` is assigned by the server."""

    id: int | None = None
    type: str | None = None
    state: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: EntityRef | None = None
    updated_by: EntityRef | None = None


class Pagination(DeskModel):
    """Pagination block of collection responses."""

    page: int | None = None
    page_size: int | None = None
    pages: int | None = None
    records: int | None = None
    has_more_pages: bool | None = None


class Meta(DeskModel):
    """Free-form metadata of collection responses."""
