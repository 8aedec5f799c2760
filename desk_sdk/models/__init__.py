"""Public models for the Desk API.

Each resource has an entity model plus a singular envelope
(``{"ticket": {...}, "included": {...}}``) and a collection envelope
(``{"tickets": [...], "included": {...}, "pagination": {...}, "meta": {...}}``)::

    from desk_sdk.models import Ticket, TicketResponse, EntityRef

    envelope = TicketResponse(
        ticket=Ticket(subject="Printer on fire", inbox=EntityRef(id=1)),
    )
"""

from desk_sdk.models.base import BaseEntity, DeskModel, EntityRef, Meta, Pagination
from desk_sdk.models.business_hour import (
    BusinessHour,
    BusinessHourResponse,
    BusinessHoursResponse,
)
from desk_sdk.models.company import CompaniesResponse, Company, CompanyResponse
from desk_sdk.models.customer import Customer, CustomerResponse, CustomersResponse
from desk_sdk.models.file import File, FileResponse, FilesResponse, FileUploadParams
from desk_sdk.models.helpdoc import (
    HelpDocArticle,
    HelpDocArticleResponse,
    HelpDocArticlesResponse,
    HelpDocSite,
    HelpDocSiteResponse,
    HelpDocSitesResponse,
)
from desk_sdk.models.inbox import Inbox, InboxesResponse, InboxMeta, InboxResponse, InboxUser
from desk_sdk.models.included import (
    Contact,
    Domain,
    IncludedData,
    ListResponse,
    SingleResponse,
    SLACompany,
    SLACustomer,
    SLAInbox,
    SLANotification,
    SLATag,
    SLATicketPriority,
)
from desk_sdk.models.sla import SLA, SLAResponse, SLAsResponse
from desk_sdk.models.spamlist import Spamlist, SpamlistResponse, SpamlistsResponse
from desk_sdk.models.tag import Tag, TagResponse, TagsResponse
from desk_sdk.models.ticket import (
    CustomFieldSearch,
    SearchTicketsFilter,
    Ticket,
    TicketPrioritiesResponse,
    TicketPriority,
    TicketPriorityResponse,
    TicketResponse,
    TicketsResponse,
    TicketSource,
    TicketSourceResponse,
    TicketSourcesResponse,
    TicketStatus,
    TicketStatusesResponse,
    TicketStatusResponse,
    TicketType,
    TicketTypeResponse,
    TicketTypesResponse,
)
from desk_sdk.models.user import User, UserResponse, UsersResponse

__all__ = [
    "BaseEntity",
    "BusinessHour",
    "BusinessHourResponse",
    "BusinessHoursResponse",
    "CompaniesResponse",
    "Company",
    "CompanyResponse",
    "Contact",
    "Customer",
    "CustomerResponse",
    "CustomersResponse",
    "CustomFieldSearch",
    "DeskModel",
    "Domain",
    "EntityRef",
    "File",
    "FileResponse",
    "FilesResponse",
    "FileUploadParams",
    "HelpDocArticle",
    "HelpDocArticleResponse",
    "HelpDocArticlesResponse",
    "HelpDocSite",
    "HelpDocSiteResponse",
    "HelpDocSitesResponse",
    "Inbox",
    "InboxesResponse",
    "InboxMeta",
    "InboxResponse",
    "InboxUser",
    "IncludedData",
    "ListResponse",
    "Meta",
    "Pagination",
    "SearchTicketsFilter",
    "SingleResponse",
    "SLA",
    "SLACompany",
    "SLACustomer",
    "SLAInbox",
    "SLANotification",
    "SLAResponse",
    "SLAsResponse",
    "SLATag",
    "SLATicketPriority",
    "Spamlist",
    "SpamlistResponse",
    "SpamlistsResponse",
    "Tag",
    "TagResponse",
    "TagsResponse",
    "Ticket",
    "TicketPrioritiesResponse",
    "TicketPriority",
    "TicketPriorityResponse",
    "TicketResponse",
    "TicketsResponse",
    "TicketSource",
    "TicketSourceResponse",
    "TicketSourcesResponse",
    "TicketStatus",
    "TicketStatusesResponse",
    "TicketStatusResponse",
    "TicketType",
    "TicketTypeResponse",
    "TicketTypesResponse",
    "User",
    "UserResponse",
    "UsersResponse",
]
