"""SLA policy models.

Targets and conditions of a policy (priorities, inboxes, companies, customers,
tags, notifications) travel in the envelope's ``included`` data.
"""

from pydantic import Field

from desk_sdk.models.base import BaseEntity, EntityRef
from desk_sdk.models.included import ListResponse, SingleResponse


class SLA(BaseEntity):
    name: str | None = None
    description: str | None = None
    business_hour: EntityRef | None = Field(default=None, alias="businesshour")


class SLAResponse(SingleResponse):
    sla: SLA


class SLAsResponse(ListResponse):
    slas: list[SLA] = Field(default_factory=list)
