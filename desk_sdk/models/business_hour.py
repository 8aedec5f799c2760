"""Business hour models."""

from pydantic import Field

from desk_sdk.models.base import BaseEntity
from desk_sdk.models.included import ListResponse, SingleResponse


class BusinessHour(BaseEntity):
    name: str | None = None
    timezone: str | None = None
    is_default: bool | None = None


class BusinessHourResponse(SingleResponse):
    business_hour: BusinessHour = Field(alias="businesshour")


class BusinessHoursResponse(ListResponse):
    business_hours: list[BusinessHour] = Field(default_factory=list, alias="businesshours")
