"""User (agent) models."""

from pydantic import Field

from desk_sdk.models.base import BaseEntity
from desk_sdk.models.included import ListResponse, SingleResponse


class User(BaseEntity):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    is_admin: bool | None = None
    is_part_time: bool | None = None
    timezone: str | None = None


class UserResponse(SingleResponse):
    user: User


class UsersResponse(ListResponse):
    users: list[User] = Field(default_factory=list)
