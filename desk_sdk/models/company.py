"""Company models."""

from pydantic import Field

from desk_sdk.models.base import BaseEntity, EntityRef
from desk_sdk.models.included import ListResponse, SingleResponse


class Company(BaseEntity):
    """An organization grouping customers. Domains are side-loaded as ``domains``."""

    name: str | None = None
    description: str | None = None
    details: str | None = None
    industry: str | None = None
    website: str | None = None
    permission: str | None = None
    kind: str | None = None
    note: str | None = None
    domains: list[EntityRef] | None = None


class CompanyResponse(SingleResponse):
    company: Company


class CompaniesResponse(ListResponse):
    companies: list[Company] = Field(default_factory=list)
