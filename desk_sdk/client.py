"""User-facing client for the Desk API.

Example:
    from desk_sdk import DeskClient, FilterBuilder, ListOptions
    from desk_sdk.middleware import retry_middleware

    async with DeskClient(
        "https://mycompany.teamwork.com/desk/api/v2",
        api_key="your-api-key",
        middleware=[retry_middleware(max_retries=2, delay=0.5)],
    ) as client:
        ticket = await client.tickets.get(42)
        open_tickets = await client.tickets.list(
            ListOptions(filter=FilterBuilder().eq("status", "open").build())
        )
"""

import logging
import os
from collections.abc import Sequence
from typing import Any

import httpx

from desk_sdk._internal.http import DEFAULT_TIMEOUT, create_http_client
from desk_sdk.exceptions import DeskConfigError
from desk_sdk.middleware import Middleware, compose
from desk_sdk.models import (
    BusinessHourResponse,
    BusinessHoursResponse,
    CompaniesResponse,
    CompanyResponse,
    CustomerResponse,
    CustomersResponse,
    FileResponse,
    FilesResponse,
    HelpDocArticleResponse,
    HelpDocArticlesResponse,
    HelpDocSiteResponse,
    HelpDocSitesResponse,
    InboxesResponse,
    InboxResponse,
    SLAResponse,
    SLAsResponse,
    SpamlistResponse,
    SpamlistsResponse,
    TagResponse,
    TagsResponse,
    TicketPrioritiesResponse,
    TicketPriorityResponse,
    TicketResponse,
    TicketsResponse,
    TicketSourceResponse,
    TicketSourcesResponse,
    TicketStatusesResponse,
    TicketStatusResponse,
    TicketTypeResponse,
    TicketTypesResponse,
    UserResponse,
    UsersResponse,
)
from desk_sdk.path import PathHandler
from desk_sdk.resource import Service
from desk_sdk.resources import FilesService, TicketsService

FILES_CREATE_PATH = "files/ref"


class DeskClient:
    """Client for the Desk API.

    Configuration is fixed at construction time. Every resource is exposed as
    a service attribute (``client.tickets``, ``client.customers``, ...), and
    every API request goes through the same middleware chain.

    Use ``DeskClient.from_env()`` to create a client from environment variables.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
        debug: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        middleware: Sequence[Middleware] = (),
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``https://mycompany.teamwork.com/desk/api/v2``.
            api_key: Sent as a bearer token on every API request when set.
            http_client: Custom HTTP client. The caller keeps ownership of it.
            logger: Logger for request failures (default: ``desk_sdk``).
            debug: Log every request and response at DEBUG level. Only applies
                to the HTTP client created by the SDK.
            timeout: Request timeout in seconds for the SDK-created HTTP client.
            middleware: Interceptors applied to every API request, outermost first.
        """
        if not base_url:
            raise DeskConfigError("base_url is required")

        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._logger = logger or logging.getLogger("desk_sdk")
        self._owns_http_client = http_client is None
        self._http_client = http_client or create_http_client(
            timeout=timeout, logger=self._logger if debug else None
        )
        self._middleware = tuple(middleware)
        self._handler = compose(self._middleware, self._http_client.send)

        self.business_hours = Service(
            self, PathHandler("businesshours"), BusinessHourResponse, BusinessHoursResponse
        )
        self.companies = Service(self, PathHandler("companies"), CompanyResponse, CompaniesResponse)
        self.customers = Service(self, PathHandler("customers"), CustomerResponse, CustomersResponse)
        self.files = FilesService(
            self, PathHandler("files", create_path=FILES_CREATE_PATH), FileResponse, FilesResponse
        )
        self.help_doc_articles = Service(
            self, PathHandler("helpdocarticles"), HelpDocArticleResponse, HelpDocArticlesResponse
        )
        self.help_doc_sites = Service(
            self, PathHandler("helpdocsites"), HelpDocSiteResponse, HelpDocSitesResponse
        )
        self.inboxes = Service(self, PathHandler("inboxes"), InboxResponse, InboxesResponse)
        self.slas = Service(self, PathHandler("slas"), SLAResponse, SLAsResponse)
        self.spamlists = Service(self, PathHandler("spamlists"), SpamlistResponse, SpamlistsResponse)
        self.tags = Service(self, PathHandler("tags"), TagResponse, TagsResponse)
        self.ticket_priorities = Service(
            self, PathHandler("ticketpriorities"), TicketPriorityResponse, TicketPrioritiesResponse
        )
        self.tickets = TicketsService(self, PathHandler("tickets"), TicketResponse, TicketsResponse)
        self.ticket_sources = Service(
            self, PathHandler("ticketsources"), TicketSourceResponse, TicketSourcesResponse
        )
        self.ticket_statuses = Service(
            self, PathHandler("ticketstatuses"), TicketStatusResponse, TicketStatusesResponse
        )
        self.ticket_types = Service(
            self, PathHandler("tickettypes"), TicketTypeResponse, TicketTypesResponse
        )
        self.users = Service(self, PathHandler("users"), UserResponse, UsersResponse)

    @classmethod
    def from_env(cls, **overrides: Any) -> "DeskClient":
        """Create a client from environment variables.

        Required environment variables:
            DESK_BASE_URL: The API root URL.

        Optional environment variables:
            DESK_API_KEY: The API key.
            DESK_DEBUG: Set to "1" to enable debug logging.
            DESK_TIMEOUT_MS: Request timeout in milliseconds.

        Args:
            **overrides: Constructor arguments taking precedence over the
                environment (``middleware``, ``logger``, ...).

        Raises:
            DeskConfigError: DESK_BASE_URL is missing or DESK_TIMEOUT_MS is not a number.
        """
        base_url = os.environ.get("DESK_BASE_URL")
        if not base_url:
            raise DeskConfigError("DESK_BASE_URL is not set")

        timeout_ms = os.environ.get("DESK_TIMEOUT_MS", str(int(DEFAULT_TIMEOUT * 1000)))
        try:
            timeout = int(timeout_ms) / 1000
        except ValueError as e:
            raise DeskConfigError(f"DESK_TIMEOUT_MS must be an integer, got {timeout_ms!r}") from e

        kwargs: dict[str, Any] = {
            "api_key": os.environ.get("DESK_API_KEY") or None,
            "debug": os.environ.get("DESK_DEBUG", "") == "1",
            "timeout": timeout,
        }
        kwargs.update(overrides)
        return cls(base_url, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        return self._middleware

    def build_request(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        content: bytes | None = None,
    ) -> httpx.Request:
        return self._http_client.build_request(method, url, params=params, content=content)

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Stamp the API headers on ``request`` and run it through the middleware chain."""
        if self._api_key:
            request.headers["Authorization"] = f"Bearer {self._api_key}"
        request.headers["Content-Type"] = "application/json"
        request.headers["Accept"] = "application/json"
        return await self._handler(request)

    async def aclose(self) -> None:
        """Close the HTTP client if it was created by the SDK."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "DeskClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
