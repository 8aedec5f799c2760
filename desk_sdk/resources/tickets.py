"""Ticket service with full-text and criteria search."""

from desk_sdk.models.ticket import SearchTicketsFilter, TicketResponse, TicketsResponse
from desk_sdk.resource import Service

SEARCH_PATH = "search/tickets"


class TicketsService(Service[TicketResponse, TicketsResponse]):
    """CRUD for tickets plus ``search``."""

    async def search(self, filter: SearchTicketsFilter) -> TicketsResponse:
        """Search tickets matching ``filter``.

        Args:
            filter: Search criteria; unset fields are not sent.

        Returns:
            The matching tickets in the usual collection envelope.
        """
        return await self._execute(
            "GET",
            SEARCH_PATH,
            TicketsResponse,
            expected=(200,),
            params=filter.to_params(),
        )
