"""File reference models.

Creating a file returns an upload descriptor instead of the usual envelope:
the URL of the storage bucket, the signed form fields to post there and the
file entity itself.
"""

from typing import Literal

from pydantic import Field

from desk_sdk.models.base import BaseEntity, DeskModel
from desk_sdk.models.included import ListResponse

FileType = Literal["attachment"]
Disposition = Literal["attachment", "attachment-inline"]


class File(BaseEntity):
    mime_type: str | None = None
    filename: str | None = None
    size: int | None = None
    disposition: Disposition | None = None
    type: FileType | None = None  # type: ignore[assignment]


class FileUploadParams(DeskModel):
    """Signed form fields for the storage upload, in wire order."""

    content_type: str | None = Field(default=None, alias="Content-Type")
    bucket: str | None = None
    key: str | None = None
    policy: str | None = None
    success_action_status: str | None = Field(default=None, alias="success_action_status")
    x_amz_algorithm: str | None = Field(default=None, alias="x-amz-algorithm")
    x_amz_credential: str | None = Field(default=None, alias="x-amz-credential")
    x_amz_date: str | None = Field(default=None, alias="x-amz-date")
    x_amz_signature: str | None = Field(default=None, alias="x-amz-signature")

    def form_fields(self) -> dict[str, str]:
        """Every non-empty field under its wire name."""
        return {
            key: str(value)
            for key, value in self.model_dump(by_alias=True, exclude_none=True).items()
            if value != ""
        }


class FileResponse(DeskModel):
    """Upload descriptor returned by ``FilesService.create``."""

    url: str | None = None
    params: FileUploadParams = Field(default_factory=FileUploadParams)
    file: File = Field(default_factory=File)


class FilesResponse(ListResponse):
    files: list[File] = Field(default_factory=list)
