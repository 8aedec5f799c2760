"""Internal modules for Desk SDK.

WARNING: These modules back the public client and are not intended for direct
use in application code.

Modules:
    http - Shared HTTP client configuration and debug logging hooks
    ratelimit - Token bucket used by the rate limiting middleware
    redaction - Masking of credentials in debug logs
"""
