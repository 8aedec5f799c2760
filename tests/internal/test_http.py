"""Tests for the shared HTTP client factory."""

import logging

import httpx
import pytest
import respx

from desk_sdk._internal.http import DEFAULT_TIMEOUT, USER_AGENT, create_http_client
from desk_sdk._internal.redaction import REDACTED_VALUE
from desk_sdk._version import __version__

URL = "https://desk.example.com/desk/api/v2/tickets.json"


class TestCreateHttpClient:
    """Tests for create_http_client()."""

    def test_defaults(self):
        """Should set the SDK User-Agent and the default timeout."""
        client = create_http_client()
        assert client.headers["User-Agent"] == USER_AGENT
        assert USER_AGENT == f"desk-sdk/{__version__}"
        assert client.timeout.read == DEFAULT_TIMEOUT

    def test_no_hooks_without_logger(self):
        """Debug hooks should only be installed when a logger is given."""
        client = create_http_client()
        assert client.event_hooks == {"request": [], "response": []}

    @pytest.mark.asyncio
    @respx.mock
    async def test_debug_logging_redacts_credentials(self, caplog):
        """Request and response should be logged with credentials masked."""
        respx.post(URL).mock(return_value=httpx.Response(201, json={"ticket": {"id": 1}}))
        logger = logging.getLogger("test.desk.debug")

        async with create_http_client(logger=logger) as client:
            with caplog.at_level(logging.DEBUG, logger="test.desk.debug"):
                await client.post(
                    URL,
                    content=b'{"ticket":{"subject":"hi"}}',
                    headers={"Authorization": "Bearer key"},
                )

        records = [r for r in caplog.records if r.name == "test.desk.debug"]
        request_record, response_record = records
        assert request_record.getMessage() == "HTTP Request"
        assert request_record.method == "POST"
        assert request_record.headers["authorization"] == REDACTED_VALUE
        assert request_record.request_body == '{"ticket": {"subject": "hi"}}'
        assert response_record.getMessage() == "HTTP Response"
        assert response_record.status_code == 201
        assert response_record.response_body == '{"ticket": {"id": 1}}'
