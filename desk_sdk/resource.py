"""Generic CRUD service shared by every Desk resource."""

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from desk_sdk.exceptions import (
    DeskAPIError,
    DeskDecodeError,
    DeskRequestError,
    DeskTimeoutError,
    DeskTransportError,
)
from desk_sdk.models.base import DeskModel
from desk_sdk.path import PathHandler

if TYPE_CHECKING:
    from desk_sdk.client import DeskClient

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)
ListT = TypeVar("ListT", bound=BaseModel)
ModelT = TypeVar("ModelT", bound=BaseModel)


class ListOptions(BaseModel):
    """Common query options of list endpoints.

    Only options that are set (non-zero, non-empty) are encoded. ``filter``
    takes the output of ``FilterBuilder.build()``.
    """

    page: int | None = None
    per_page: int | None = None
    sort_by: str | None = None
    sort_dir: str | None = None
    embed: str | None = None
    fields: str | None = None
    q: str | None = None
    filter: str | None = None

    def to_params(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.model_dump().items() if value}


QueryParams = ListOptions | Mapping[str, Any] | Sequence[tuple[str, Any]]


class Service(Generic[EnvelopeT, ListT]):
    """Get/List/Create/Update for one resource.

    Args:
        client: Owning client; provides the base URL, request pipeline and logger.
        paths: Path mapping of the resource.
        model: Singular envelope type, used for get/create/update.
        list_model: Collection envelope type, used for list.
    """

    def __init__(
        self,
        client: "DeskClient",
        paths: PathHandler,
        model: type[EnvelopeT],
        list_model: type[ListT],
    ) -> None:
        self._client = client
        self._paths = paths
        self._model = model
        self._list_model = list_model

    @property
    def paths(self) -> PathHandler:
        return self._paths

    async def get(self, id: int) -> EnvelopeT:
        """Fetch one entity with all side-loaded relations."""
        return await self._execute(
            "GET", self._paths.get(id), self._model, expected=(200,), params={"includes": "all"}
        )

    async def list(self, params: QueryParams | None = None) -> ListT:
        """Fetch a page of entities.

        Args:
            params: Query parameters appended as given (page, per_page, sort_by,
                filter, ...), either as ``ListOptions``, a mapping or pairs.
        """
        if isinstance(params, ListOptions):
            params = params.to_params()
        return await self._execute(
            "GET", self._paths.list(), self._list_model, expected=(200,), params=params
        )

    async def create(self, resource: EnvelopeT) -> EnvelopeT:
        """Create an entity; the returned envelope carries the server-assigned ID."""
        return await self._execute(
            "POST",
            self._paths.create(),
            self._model,
            expected=(201,),
            content=self._encode(resource),
        )

    async def update(self, id: int, resource: EnvelopeT) -> EnvelopeT:
        return await self._execute(
            "PUT",
            self._paths.update(id),
            self._model,
            expected=(200,),
            content=self._encode(resource),
        )

    def _url(self, path: str) -> str:
        return f"{self._client.base_url}/{path}.json"

    def _encode(self, resource: DeskModel) -> bytes:
        try:
            return resource.to_json().encode()
        except ValueError as e:
            self._log.error("failed to marshal request body", extra={"error": str(e)})
            raise DeskRequestError(f"failed to marshal request body: {e}") from e

    @property
    def _log(self) -> logging.Logger:
        return self._client.logger

    async def _execute(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        *,
        expected: tuple[int, ...],
        params: Any = None,
        content: bytes | None = None,
    ) -> ModelT:
        """Send one request through the client pipeline and decode the response.

        Raises:
            DeskRequestError: The request could not be built.
            DeskTransportError: The request could not be delivered.
            DeskAPIError: The status was not one of ``expected``.
            DeskDecodeError: The body does not match ``model``.
        """
        url = self._url(path)
        try:
            request = self._client.build_request(method, url, params=params, content=content)
        except (httpx.InvalidURL, TypeError) as e:
            self._log.error("failed to create request", extra={"error": str(e), "url": url})
            raise DeskRequestError(f"failed to create request for {url}: {e}") from e

        fields = {"method": method, "url": str(request.url)}
        try:
            response = await self._client.send(request)
        except (httpx.TimeoutException, TimeoutError) as e:
            self._log.error("request timed out", extra={**fields, "error": str(e)})
            raise DeskTimeoutError(f"{method} {request.url} timed out") from e
        except httpx.TransportError as e:
            self._log.error("request failed", extra={**fields, "error": str(e)})
            raise DeskTransportError(f"{method} {request.url} failed: {e}") from e

        if response.status_code not in expected:
            body = response.text
            self._log.error(
                "unexpected status code",
                extra={**fields, "status_code": response.status_code, "response_body": body},
            )
            raise DeskAPIError(
                f"unexpected status code: {response.status_code}, body: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            self._log.error("failed to decode response", extra={**fields, "error": str(e)})
            raise DeskDecodeError(
                f"failed to decode {model.__name__}: {e}", body=response.text
            ) from e
