"""Customer models."""

from pydantic import Field

from desk_sdk.models.base import BaseEntity, EntityRef
from desk_sdk.models.included import ListResponse, SingleResponse


class Customer(BaseEntity):
    """A person raising tickets. Contact channels are side-loaded as ``contacts``."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile: str | None = None
    organization: str | None = None
    job_title: str | None = None
    address: str | None = None
    extra_data: str | None = None
    notes: str | None = None
    trusted: bool | None = None
    verified_email: bool | None = None
    company: EntityRef | None = None
    contacts: list[EntityRef] | None = None


class CustomerResponse(SingleResponse):
    customer: Customer


class CustomersResponse(ListResponse):
    customers: list[Customer] = Field(default_factory=list)
