"""Inbox models."""

from typing import Literal

from pydantic import Field

from desk_sdk.models.base import BaseEntity, DeskModel, EntityRef
from desk_sdk.models.included import ListResponse, SingleResponse

InboxAccess = Literal["read", "write"]


class InboxMeta(DeskModel):
    access: InboxAccess | None = None


class InboxUser(EntityRef):
    """A user attached to an inbox, with their access level in ``meta``."""

    meta: InboxMeta | None = None  # type: ignore[assignment]


class Inbox(BaseEntity):
    name: str | None = None
    email: str | None = None
    local_part: str | None = None
    public: bool | None = None
    on_demand: bool | None = None
    users: list[InboxUser] | None = None


class InboxResponse(SingleResponse):
    inbox: Inbox


class InboxesResponse(ListResponse):
    inboxes: list[Inbox] = Field(default_factory=list)
