"""Side-loaded ("included") entities and the shared envelope parts.

Singular responses look like ``{"ticket": {...}, "included": {...}}`` and
collection responses add ``pagination`` and ``meta``. The included bag is
decoded into ``IncludedData``, which declares the collections this SDK writes
and keeps everything else the server sends untouched.
"""

from typing import Literal

from pydantic import Field

from desk_sdk.models.base import BaseEntity, DeskModel, EntityRef, Meta, Pagination

SLAConditionOption = Literal["eq", "neq"]
SLANotificationType = Literal["firstResponse", "nextResponse", "resolution"]
SLANotificationCondition = Literal["warning", "breach"]


class Contact(BaseEntity):
    """Contact channel of a customer (email, phone, ...)."""

    value: str | None = None
    is_main: bool | None = None


class Domain(BaseEntity):
    """Email domain owned by a company."""

    name: str | None = None


class SLATicketPriority(BaseEntity):
    """Response target for one ticket priority (no priority when unset)."""

    hours: int | None = None
    minutes: int | None = None
    description: str | None = None
    ticket_priority: EntityRef | None = None


class SLAInbox(BaseEntity):
    inbox: EntityRef | None = None
    condition: SLAConditionOption | None = None


class SLACompany(BaseEntity):
    company: EntityRef | None = None
    condition: SLAConditionOption | None = None


class SLACustomer(BaseEntity):
    customer: EntityRef | None = None
    condition: SLAConditionOption | None = None


class SLATag(BaseEntity):
    tag: EntityRef | None = None
    condition: SLAConditionOption | None = None


class SLANotification(BaseEntity):
    """Warning or breach notification of an SLA policy.

    ``type`` is one of ``SLANotificationType``.
    """

    condition: SLANotificationCondition | None = None
    duration: int | None = None
    notify_assigned_user: bool | None = None


class IncludedData(DeskModel):
    """Entities referenced by the primary entity, keyed by collection name."""

    contacts: list[Contact] | None = None
    domains: list[Domain] | None = None
    sla_priorities: list[SLATicketPriority] | None = None
    sla_inboxes: list[SLAInbox] | None = None
    sla_companies: list[SLACompany] | None = None
    sla_customers: list[SLACustomer] | None = None
    sla_tags: list[SLATag] | None = None
    sla_notifications: list[SLANotification] | None = None


class SingleResponse(DeskModel):
    """Common fields of singular envelopes."""

    included: IncludedData = Field(default_factory=IncludedData)


class ListResponse(DeskModel):
    """Common fields of collection envelopes."""

    included: IncludedData = Field(default_factory=IncludedData)
    pagination: Pagination = Field(default_factory=Pagination)
    meta: Meta = Field(default_factory=Meta)
