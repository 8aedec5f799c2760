"""Services for resources that extend the generic CRUD operations."""

from desk_sdk.resources.files import FilesService
from desk_sdk.resources.tickets import TicketsService

__all__ = ["FilesService", "TicketsService"]
