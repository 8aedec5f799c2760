"""Public exceptions for the Desk SDK."""


class DeskError(Exception):
    """Base exception for all Desk SDK errors."""


class DeskRequestError(DeskError):
    """Request could not be built (invalid URL, unserializable body)."""


class DeskTransportError(DeskError):
    """Request could not be delivered (connection, DNS, protocol errors)."""


class DeskTimeoutError(DeskTransportError):
    """Request did not complete before its deadline."""


class DeskAPIError(DeskError):
    """Error from Desk API: the response status was not the expected one."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DeskDecodeError(DeskError):
    """Response body could not be decoded into the expected envelope."""

    def __init__(self, message: str, body: str | None = None) -> None:
        super().__init__(message)
        self.body = body


class DeskConfigError(DeskError):
    """Configuration error (missing env vars, invalid config)."""
