"""File service: two-phase creation and upload to storage."""

import httpx

from desk_sdk.exceptions import DeskAPIError, DeskRequestError, DeskTimeoutError, DeskTransportError
from desk_sdk.models.file import FileResponse, FilesResponse
from desk_sdk.resource import Service

UPLOAD_OK_STATUSES = frozenset({200, 201, 204})
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FilesService(Service[FileResponse, FilesResponse]):
    """File references.

    ``create`` registers a file and returns an upload descriptor without
    transferring any bytes; ``upload`` then posts the bytes straight to the
    storage URL of that descriptor.
    """

    async def upload(self, descriptor: FileResponse, content: bytes) -> None:
        """Upload ``content`` using a descriptor returned by ``create``.

        The form carries every non-empty signed field followed by the ``file``
        part. The request goes directly to storage: it does not pass through
        the client middleware and carries no API credentials.

        Raises:
            DeskRequestError: The descriptor has no upload URL.
            DeskTransportError: The upload could not be delivered.
            DeskAPIError: Storage answered with a status other than 200/201/204.
        """
        if not descriptor.url:
            raise DeskRequestError("file descriptor has no upload URL")

        filename = descriptor.file.filename or "file"
        content_type = descriptor.params.content_type or DEFAULT_CONTENT_TYPE
        try:
            response = await self._client.http_client.post(
                descriptor.url,
                data=descriptor.params.form_fields(),
                files={"file": (filename, content, content_type)},
            )
        except (httpx.TimeoutException, TimeoutError) as e:
            self._log.error("upload timed out", extra={"url": descriptor.url, "error": str(e)})
            raise DeskTimeoutError(f"upload to {descriptor.url} timed out") from e
        except httpx.TransportError as e:
            self._log.error("upload failed", extra={"url": descriptor.url, "error": str(e)})
            raise DeskTransportError(f"upload to {descriptor.url} failed: {e}") from e

        if response.status_code not in UPLOAD_OK_STATUSES:
            body = response.text
            self._log.error(
                "failed to upload file",
                extra={
                    "url": descriptor.url,
                    "status_code": response.status_code,
                    "response_body": body,
                },
            )
            raise DeskAPIError(
                f"failed to upload file, status code: {response.status_code}, "
                f"status: {response.reason_phrase}, body: {body}",
                status_code=response.status_code,
                body=body,
            )
