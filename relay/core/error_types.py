"""Error type enumeration for Relay Gateway.

The values are the `type` strings of the public error envelope.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type categories used in error responses and logs."""

    AUTH_ERROR = "auth_error"  # Missing or invalid bearer credential
    INVALID_REQUEST = "invalid_request_error"  # Malformed or disallowed request content
    SERVER_ERROR = "server_error"  # Every provider failed, or an unexpected error

    # Log-only categories, never sent to clients
    PROVIDER_ERROR = "provider_error"  # One upstream invocation failed
    STREAMING_ERROR = "streaming_error"  # Fragment source failed mid-stream
