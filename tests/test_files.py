"""Tests for file creation and upload."""

import json

import httpx
import pytest
import respx

from desk_sdk.client import DeskClient
from desk_sdk.exceptions import DeskAPIError, DeskRequestError, DeskTransportError
from desk_sdk.middleware import header_middleware
from desk_sdk.models import File, FileResponse, FileUploadParams

BASE_URL = "https://desk.example.com/desk/api/v2"
UPLOAD_URL = "https://uploads.example.com/bucket"


def make_descriptor(**params):
    return FileResponse(
        url=UPLOAD_URL,
        params=FileUploadParams.model_validate(
            {
                "Content-Type": "image/jpeg",
                "key": "uploads/abc/photo.jpg",
                "policy": "cG9saWN5",
                "x-amz-signature": "sig",
                **params,
            }
        ),
        file=File(id=10, filename="photo.jpg", mime_type="image/jpeg"),
    )


class TestFileUploadParams:
    """Tests for FileUploadParams.form_fields()."""

    def test_non_empty_fields_by_wire_name(self):
        """Only set, non-empty fields should be sent, under their wire names."""
        params = FileUploadParams.model_validate(
            {"Content-Type": "image/png", "bucket": "", "key": "k", "x-amz-date": "20240101T000000Z"}
        )
        assert params.form_fields() == {
            "Content-Type": "image/png",
            "key": "k",
            "x-amz-date": "20240101T000000Z",
        }

    def test_extra_fields_kept(self):
        """Fields unknown to the SDK should still be forwarded."""
        params = FileUploadParams.model_validate({"key": "k", "acl": "private"})
        assert params.form_fields()["acl"] == "private"


class TestFilesCreate:
    """Tests for FilesService.create()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_create_posts_to_reference_path(self):
        """Should POST files/ref.json and return the upload descriptor."""
        route = respx.post(f"{BASE_URL}/files/ref.json").mock(
            return_value=httpx.Response(
                201,
                json={
                    "url": UPLOAD_URL,
                    "params": {"key": "uploads/abc/photo.jpg", "x-amz-signature": "sig"},
                    "file": {"id": 10, "filename": "photo.jpg"},
                },
            )
        )

        async with DeskClient(BASE_URL, api_key="k") as client:
            descriptor = await client.files.create(
                FileResponse(file=File(filename="photo.jpg", mime_type="image/jpeg"))
            )

        assert descriptor.url == UPLOAD_URL
        assert descriptor.file.id == 10
        assert descriptor.params.key == "uploads/abc/photo.jpg"
        body = json.loads(route.calls.last.request.content)
        assert body == {"file": {"filename": "photo.jpg", "mimeType": "image/jpeg"}}


class TestFilesUpload:
    """Tests for FilesService.upload()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_sends_multipart_form(self):
        """Should post signed fields then the file part to the storage URL."""
        route = respx.post(UPLOAD_URL).mock(return_value=httpx.Response(204))

        async with DeskClient(BASE_URL, api_key="secret") as client:
            await client.files.upload(make_descriptor(), b"\xff\xd8jpegdata\xff\xd9")

        request = route.calls.last.request
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="key"' in body
        assert b"uploads/abc/photo.jpg" in body
        assert b'name="x-amz-signature"' in body
        assert b'name="file"; filename="photo.jpg"' in body
        assert b"\xff\xd8jpegdata\xff\xd9" in body
        assert body.index(b'name="key"') < body.index(b'name="file"')

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_bypasses_api_credentials_and_middleware(self):
        """The storage request should carry no API key and skip the middleware chain."""
        route = respx.post(UPLOAD_URL).mock(return_value=httpx.Response(201))

        async with DeskClient(
            BASE_URL, api_key="secret", middleware=[header_middleware({"X-Chain": "1"})]
        ) as client:
            await client.files.upload(make_descriptor(), b"data")

        headers = route.calls.last.request.headers
        assert "Authorization" not in headers
        assert "X-Chain" not in headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_rejected_by_storage(self):
        """A status other than 200/201/204 should raise DeskAPIError with the body."""
        respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(403, text="<Error>SignatureDoesNotMatch</Error>")
        )

        async with DeskClient(BASE_URL) as client:
            with pytest.raises(DeskAPIError) as exc_info:
                await client.files.upload(make_descriptor(), b"data")

        assert exc_info.value.status_code == 403
        assert "SignatureDoesNotMatch" in exc_info.value.body
        assert "Forbidden" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_transport_error(self):
        """Connection failures should raise DeskTransportError."""
        respx.post(UPLOAD_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with DeskClient(BASE_URL) as client:
            with pytest.raises(DeskTransportError):
                await client.files.upload(make_descriptor(), b"data")

    @pytest.mark.asyncio
    async def test_upload_without_url(self):
        """A descriptor without an upload URL should be rejected before sending."""
        async with DeskClient(BASE_URL) as client:
            with pytest.raises(DeskRequestError):
                await client.files.upload(FileResponse(file=File(filename="a.jpg")), b"data")
