"""Ticket models, ticket property lookups and the ticket search filter."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from desk_sdk.models.base import BaseEntity, EntityRef
from desk_sdk.models.included import ListResponse, SingleResponse


class Ticket(BaseEntity):
    """A helpdesk ticket.

    References (customer, inbox, tags, ...) are ``EntityRef`` objects whose
    full entities are side-loaded in the envelope's ``included`` data.
    ``type`` is the ticket type reference rather than the entity kind.
    """

    subject: str | None = None
    body: str | None = Field(default=None, alias="message")
    preview_text: str | None = None
    original_recipient: str | None = None
    customer: EntityRef | None = None
    inbox: EntityRef | None = None
    agent: EntityRef | None = None
    contact: EntityRef | None = None
    priority: EntityRef | None = None
    source: EntityRef | None = None
    status: EntityRef | None = None
    type: EntityRef | None = None
    tags: list[EntityRef] | None = None
    files: list[EntityRef] | None = None
    messages: list[EntityRef] | None = None
    activities: list[EntityRef] | None = None
    timelogs: list[EntityRef] | None = None
    cc: list[str] | None = None
    bcc: list[str] | None = None
    message_count: int | None = None
    is_read: bool | None = None
    images_hidden: bool | None = None
    notify_customer: bool | None = None
    readonly: bool | None = None
    resolution_time_mins: int | None = None
    response_time_mins: int | None = None
    happiness_survey_sent_at: datetime | None = None
    spam_rules: Any = Field(default=None, alias="spam_rules")
    spam_score: float | None = Field(default=None, alias="spam_score")


class TicketResponse(SingleResponse):
    ticket: Ticket


class TicketsResponse(ListResponse):
    tickets: list[Ticket] = Field(default_factory=list)


class TicketStatus(BaseEntity):
    name: str | None = None
    code: str | None = None
    color: str | None = None
    display_order: int | None = None


class TicketStatusResponse(SingleResponse):
    ticket_status: TicketStatus = Field(alias="ticketstatus")


class TicketStatusesResponse(ListResponse):
    ticket_statuses: list[TicketStatus] = Field(default_factory=list, alias="ticketstatuses")


class TicketType(BaseEntity):
    name: str | None = None
    display_order: int | None = None
    enabled_for_future_inboxes: bool | None = None
    inboxes: list[EntityRef] = Field(default_factory=list)


class TicketTypeResponse(SingleResponse):
    ticket_type: TicketType = Field(alias="tickettype")


class TicketTypesResponse(ListResponse):
    ticket_types: list[TicketType] = Field(default_factory=list, alias="tickettypes")


class TicketPriority(BaseEntity):
    name: str | None = None
    color: str | None = None


class TicketPriorityResponse(SingleResponse):
    ticket_priority: TicketPriority = Field(alias="ticketpriority")


class TicketPrioritiesResponse(ListResponse):
    ticket_priorities: list[TicketPriority] = Field(
        default_factory=list, alias="ticketpriorities"
    )


class TicketSource(BaseEntity):
    name: str | None = None
    display_order: int | None = None


class TicketSourceResponse(SingleResponse):
    ticket_source: TicketSource = Field(alias="ticketsource")


class TicketSourcesResponse(ListResponse):
    ticket_sources: list[TicketSource] = Field(default_factory=list, alias="ticketsources")


# =============================================================================
# Search
# =============================================================================


class CustomFieldSearch(BaseModel):
    """One custom-field clause of a ticket search."""

    id: int
    value: str | None = None
    values: list[int] | None = None
    operation: str | None = None


class SearchTicketsFilter(BaseModel):
    """Criteria for ``TicketsService.search``.

    Every field is optional; only fields that are set are sent. Aliases are
    the query parameter names understood by the search endpoint.
    """

    model_config = {"populate_by_name": True}

    agents: list[int] | None = None
    companies: list[int] | None = None
    customers: list[int] | None = None
    custom_fields: list[CustomFieldSearch] | None = Field(default=None, alias="customfields")
    start_date: datetime | None = Field(default=None, alias="startDate")
    end_date: datetime | None = Field(default=None, alias="endDate")
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")
    time_range: str | None = Field(default=None, alias="timeRange")
    exact: bool | None = None
    exclude_inboxes: list[int] | None = Field(default=None, alias="excludeInboxes")
    exclude_tags: list[int] | None = Field(default=None, alias="excludeTags")
    exclude_work_emails: bool | None = Field(default=None, alias="excludeWorkEmails")
    filter: str | None = None
    helpdoc_sites: list[int] | None = Field(default=None, alias="helpdocSites")
    inboxes: list[int] | None = None
    include_archived_agents: bool | None = Field(default=None, alias="includeArchivedAgents")
    omit_merged: bool | None = Field(default=None, alias="omitMerged")
    only_untagged: bool | None = Field(default=None, alias="onlyUntagged")
    only_with_attachment: bool | None = Field(default=None, alias="onlyWithAttachment")
    priorities: list[int] | None = None
    project_id: int | None = Field(default=None, alias="project")
    require_all_tags: bool | None = Field(default=None, alias="tagRequireAll")
    search: str | None = None
    sources: list[int] | None = None
    statuses: list[int] | None = None
    subject_keywords: list[str] | None = Field(default=None, alias="subjectKeywords")
    tags: list[int] | None = None
    task_id: int | None = Field(default=None, alias="task")
    task_statuses: list[str] | None = Field(default=None, alias="taskStatuses")
    teams: list[int] | None = None
    ticket_id: int | None = Field(default=None, alias="ticket")
    tw_company_ids: list[int] | None = Field(default=None, alias="twCompanyIds")
    types: list[int] | None = None
    unassigned: bool | None = None

    def to_params(self) -> list[tuple[str, str]]:
        """Encode the filter as query parameters.

        Lists become repeated keys, booleans ``true``/``false``, datetimes
        ISO-8601 and custom-field clauses ``customfields[i][key]``.
        """
        params: list[tuple[str, str]] = []
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if key == "customfields":
                for i, clause in enumerate(value):
                    for name, item in clause.items():
                        for encoded in _encode_values(item):
                            params.append((f"customfields[{i}][{name}]", encoded))
                continue
            for encoded in _encode_values(value):
                params.append((key, encoded))
        return params


def _encode_values(value: Any) -> list[str]:
    if isinstance(value, list):
        return [item for v in value for item in _encode_values(v)]
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, datetime):
        return [value.isoformat()]
    return [str(value)]
