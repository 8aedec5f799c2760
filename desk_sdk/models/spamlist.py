"""Spamlist models."""

from typing import Literal

from pydantic import Field

from desk_sdk.models.base import BaseEntity
from desk_sdk.models.included import ListResponse, SingleResponse

SpamlistType = Literal["whitelist", "blacklist"]


class Spamlist(BaseEntity):
    """A spamlist entry. ``term`` is an email address, domain or IP address."""

    term: str | None = None
    type: SpamlistType | None = None  # type: ignore[assignment]


class SpamlistResponse(SingleResponse):
    spamlist: Spamlist


class SpamlistsResponse(ListResponse):
    spamlists: list[Spamlist] = Field(default_factory=list)
