"""Desk SDK for Python.

Async client for the Desk helpdesk REST API.

Public API:
    DeskClient - Client exposing one service per resource
    FilterBuilder - Builder for the ``filter`` query parameter
    ListOptions - Common list query options
    desk_sdk.middleware - Request interceptors (logging, retry, rate limiting, ...)
    desk_sdk.models - Request/response models
"""

from desk_sdk._version import __version__
from desk_sdk.client import DeskClient
from desk_sdk.exceptions import (
    DeskAPIError,
    DeskConfigError,
    DeskDecodeError,
    DeskError,
    DeskRequestError,
    DeskTimeoutError,
    DeskTransportError,
)
from desk_sdk.filter import FilterBuilder, FilterOperator
from desk_sdk.path import PathHandler
from desk_sdk.resource import ListOptions, Service

__all__ = [
    "__version__",
    "DeskClient",
    "DeskAPIError",
    "DeskConfigError",
    "DeskDecodeError",
    "DeskError",
    "DeskRequestError",
    "DeskTimeoutError",
    "DeskTransportError",
    "FilterBuilder",
    "FilterOperator",
    "ListOptions",
    "PathHandler",
    "Service",
]
