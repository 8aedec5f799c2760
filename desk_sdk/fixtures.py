"""Synthetic fixture data for demo and test accounts.

``Fixtures`` produces ready-to-create envelopes for every resource. Resources
that reference others (tickets, inboxes, SLAs) take the existing entities as
arguments; fetching them is up to the caller.
"""

import random
import string
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from desk_sdk.models import (
    SLA,
    BusinessHour,
    BusinessHourResponse,
    Company,
    CompanyResponse,
    Contact,
    Customer,
    CustomerResponse,
    Domain,
    EntityRef,
    File,
    FileResponse,
    HelpDocArticle,
    HelpDocArticleResponse,
    HelpDocSite,
    HelpDocSiteResponse,
    Inbox,
    IncludedData,
    InboxMeta,
    InboxResponse,
    InboxUser,
    SLACompany,
    SLACustomer,
    SLAInbox,
    SLANotification,
    SLAResponse,
    SLATag,
    SLATicketPriority,
    Spamlist,
    SpamlistResponse,
    Tag,
    TagResponse,
    Ticket,
    TicketPriority,
    TicketPriorityResponse,
    TicketResponse,
    TicketStatus,
    TicketStatusResponse,
    TicketType,
    TicketTypeResponse,
    User,
    UserResponse,
)

FIRST_NAMES = (
    "Ada", "Alan", "Barbara", "Claude", "Dennis", "Edsger", "Frances", "Grace",
    "Hedy", "Ken", "Linus", "Margaret", "Niklaus", "Radia", "Sophie", "Tim",
)
LAST_NAMES = (
    "Allen", "Berners-Lee", "Dijkstra", "Hamilton", "Hopper", "Kernighan", "Knuth",
    "Lamarr", "Liskov", "Lovelace", "Perlman", "Ritchie", "Shannon", "Thompson",
    "Turing", "Wirth",
)
WORDS = (
    "account", "billing", "browser", "cache", "cluster", "dashboard", "delay",
    "email", "export", "invoice", "login", "mobile", "network", "order", "password",
    "printer", "refund", "report", "screen", "search", "server", "shipping",
    "signup", "sync", "update", "upload", "widget",
)
COMPANY_SUFFIXES = ("Inc", "LLC", "Group", "Labs", "Systems", "Partners")
TLDS = ("com", "io", "net", "org")
FILE_EXTENSIONS = ("jpg", "jpeg")
SAFE_COLORS = ("black", "blue", "fuchsia", "green", "lime", "maroon", "navy", "olive",
               "purple", "red", "silver", "teal", "white", "yellow")

MAX_SLA_INBOXES = 5
MAX_SLA_COMPANIES = 5
MAX_SLA_CUSTOMERS = 4
MAX_SLA_TAGS = 7

ModelT = TypeVar("ModelT", bound=BaseModel)


def merge_data(entity: ModelT, data: Mapping[str, Any]) -> ModelT:
    """Return a copy of ``entity`` with top-level keys of ``data`` overriding its fields.

    Keys may use either wire names (``firstName``) or field names (``first_name``).
    """
    fields = type(entity).model_fields
    overrides = {
        (fields[key].alias or key) if key in fields else key: value
        for key, value in data.items()
    }
    merged = {**entity.model_dump(by_alias=True, exclude_unset=True), **overrides}
    return type(entity).model_validate(merged)


def find_ticket_type(
    ticket_types: Sequence[TicketType], inboxes: Sequence[Inbox]
) -> tuple[TicketType, Inbox] | None:
    """Return the first ticket type attached to one of ``inboxes``, with that inbox.

    Ticket types are scanned in order and the first match wins.
    """
    by_id = {inbox.id: inbox for inbox in inboxes}
    for ticket_type in ticket_types:
        for ref in ticket_type.inboxes:
            if ref.id in by_id:
                return ticket_type, by_id[ref.id]
    return None


class Fixtures:
    """Random fixture generator. Pass ``seed`` for reproducible output."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    # -------------------------------------------------------------------------
    # Primitive values
    # -------------------------------------------------------------------------

    def word(self) -> str:
        return self._random.choice(WORDS)

    def sentence(self, words: int = 6) -> str:
        text = " ".join(self.word() for _ in range(words))
        return text.capitalize() + "."

    def paragraph(self, sentences: int = 3, separator: str = " ") -> str:
        return separator.join(
            self.sentence(self._random.randint(4, 10)) for _ in range(sentences)
        )

    def first_name(self) -> str:
        return self._random.choice(FIRST_NAMES)

    def last_name(self) -> str:
        return self._random.choice(LAST_NAMES)

    def company_name(self) -> str:
        return f"{self.last_name()} {self._random.choice(COMPANY_SUFFIXES)}"

    def domain_name(self) -> str:
        label = "".join(self._random.choices(string.ascii_lowercase, k=8))
        return f"{label}.{self._random.choice(TLDS)}"

    def email(self) -> str:
        local = f"{self.first_name()}.{self.last_name()}".lower().replace("-", "")
        return f"{local}{self._random.randint(1, 9999)}@{self.domain_name()}"

    def color(self) -> str:
        return self._random.choice(SAFE_COLORS)

    def image_jpeg(self, size: int = 2048) -> bytes:
        """Bytes framed like a JPEG (SOI/EOI markers around random data)."""
        return b"\xff\xd8\xff\xe0" + self._random.randbytes(size) + b"\xff\xd9"

    # -------------------------------------------------------------------------
    # Independent resources
    # -------------------------------------------------------------------------

    def customer(self) -> CustomerResponse:
        email = self.email()
        return CustomerResponse(
            customer=Customer(first_name=self.first_name(), last_name=self.last_name(), email=email),
            included=IncludedData(contacts=[Contact(type="email", value=email, is_main=True)]),
        )

    def company(self) -> CompanyResponse:
        return CompanyResponse(
            company=Company(name=self.company_name(), description=self.paragraph(1)),
            included=IncludedData(domains=[Domain(name=self.domain_name())]),
        )

    def user(self) -> UserResponse:
        return UserResponse(
            user=User(first_name=self.first_name(), last_name=self.last_name(), email=self.email())
        )

    def tag(self) -> TagResponse:
        return TagResponse(tag=Tag(name=self.word()))

    def spamlist(self) -> SpamlistResponse:
        return SpamlistResponse(spamlist=Spamlist(term=self.email(), type="blacklist"))

    def ticket_status(self) -> TicketStatusResponse:
        return TicketStatusResponse(ticket_status=TicketStatus(name=self.word()))

    def ticket_type(self) -> TicketTypeResponse:
        return TicketTypeResponse(ticket_type=TicketType(name=self.word()))

    def ticket_priority(self) -> TicketPriorityResponse:
        return TicketPriorityResponse(
            ticket_priority=TicketPriority(name=self.word(), color=self.color())
        )

    def help_doc_site(self) -> HelpDocSiteResponse:
        return HelpDocSiteResponse(
            help_doc_site=HelpDocSite(name=f"{self.company_name()} Help Center")
        )

    def help_doc_article(self) -> HelpDocArticleResponse:
        return HelpDocArticleResponse(
            help_doc_article=HelpDocArticle(
                title=self.sentence(5), contents=self.paragraph(5, "\n")
            )
        )

    def business_hour(self) -> BusinessHourResponse:
        return BusinessHourResponse(
            business_hour=BusinessHour(
                name=f"{self.company_name()} Business Hours", is_default=True
            )
        )

    def file(self) -> FileResponse:
        return FileResponse(
            file=File(
                filename=f"{self.word()}.{self._random.choice(FILE_EXTENSIONS)}",
                mime_type="image/jpeg",
                type="attachment",
                disposition="attachment",
            )
        )

    # -------------------------------------------------------------------------
    # Resources referencing existing entities
    # -------------------------------------------------------------------------

    def inbox(self, users: Sequence[User]) -> InboxResponse:
        """An inbox every one of ``users`` can write to."""
        return InboxResponse(
            inbox=Inbox(
                name=f"{self.company_name()} Inbox",
                email=self.email(),
                local_part=self.email().split("@", 1)[0],
                users=[
                    InboxUser(id=user.id, meta=InboxMeta(access="write"))
                    for user in users
                    if user.id is not None
                ],
            )
        )

    def ticket(
        self,
        *,
        inbox: Inbox,
        customer: Customer,
        ticket_type: TicketType | None = None,
    ) -> TicketResponse:
        ticket = Ticket(
            subject=self.sentence(4),
            preview_text=self.paragraph(1),
            original_recipient=self.email(),
            inbox=EntityRef(id=inbox.id),
            customer=EntityRef(id=customer.id),
            body=self.paragraph(4, "\n"),
        )
        if ticket_type is not None:
            ticket.type = EntityRef(id=ticket_type.id)
        return TicketResponse(ticket=ticket)

    def sla(
        self,
        *,
        business_hour: BusinessHour,
        priorities: Sequence[TicketPriority],
        inboxes: Sequence[Inbox],
        companies: Sequence[Company],
        customers: Sequence[Customer],
        tags: Sequence[Tag],
    ) -> SLAResponse:
        """An SLA policy covering every priority plus tickets without one."""
        sla_priorities = [
            SLATicketPriority(
                hours=self._random.randint(1, 10),
                minutes=self._random.randint(1, 59),
                description=f"SLA for {priority.name}",
                ticket_priority=EntityRef(id=priority.id),
            )
            for priority in priorities
        ]
        sla_priorities.append(
            SLATicketPriority(
                hours=self._random.randint(1, 10),
                minutes=self._random.randint(1, 59),
                description="SLA for None",
            )
        )

        included = IncludedData(
            sla_priorities=sla_priorities,
            sla_notifications=[
                SLANotification(
                    condition="warning",
                    type="firstResponse",
                    duration=self._random.randint(1, 10),
                    notify_assigned_user=True,
                ),
                SLANotification(
                    condition="breach",
                    type="firstResponse",
                    duration=0,
                    notify_assigned_user=True,
                ),
            ],
            sla_inboxes=[
                SLAInbox(inbox=EntityRef(id=i.id), condition="eq")
                for i in inboxes[:MAX_SLA_INBOXES]
            ],
            sla_companies=[
                SLACompany(company=EntityRef(id=c.id), condition="eq")
                for c in companies[:MAX_SLA_COMPANIES]
            ],
            sla_customers=[
                SLACustomer(customer=EntityRef(id=c.id), condition="eq")
                for c in customers[:MAX_SLA_CUSTOMERS]
            ],
            sla_tags=[
                SLATag(tag=EntityRef(id=t.id), condition="eq") for t in tags[:MAX_SLA_TAGS]
            ],
        )
        return SLAResponse(
            sla=SLA(
                name=f"{self.company_name()} SLA Policy",
                business_hour=EntityRef(id=business_hour.id),
            ),
            included=included,
        )
