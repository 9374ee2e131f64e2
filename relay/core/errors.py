"""Gateway exception hierarchy.

Each exception carries the structured fields needed to log it and, for the
ones that reach the HTTP boundary, the status code and public error type.
"""

from relay.core.error_types import ErrorType


class GatewayError(Exception):
    """Base class for all gateway errors."""

    status_code: int = 500
    error_type: ErrorType = ErrorType.SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def public_message(self) -> str:
        """Message safe to return to the client."""
        return self.message


class AuthError(GatewayError):
    """Missing or invalid bearer credential."""

    status_code = 401
    error_type = ErrorType.AUTH_ERROR

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class RequestValidationError(GatewayError):
    """Malformed or disallowed request content.

    Attributes:
        field: Name of the offending request field ("body" for the whole body)
    """

    status_code = 400
    error_type = ErrorType.INVALID_REQUEST

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class ProviderError(GatewayError):
    """A single upstream invocation failed before a stream was established.

    Attributes:
        provider: Display name of the provider that failed
        upstream_status: HTTP status returned upstream, if any
    """

    error_type = ErrorType.PROVIDER_ERROR

    def __init__(self, provider: str, message: str, upstream_status: int | None = None) -> None:
        self.provider = provider
        self.upstream_status = upstream_status
        detail = f"{provider}: {message}"
        if upstream_status is not None:
            detail += f" (status {upstream_status})"
        super().__init__(detail)


class AllProvidersFailedError(GatewayError):
    """Every candidate in the failover chain failed.

    The attempted providers and the last failure are kept for diagnostics and
    are never exposed to the client.
    """

    def __init__(self, attempted: list[str], last_error: BaseException | None) -> None:
        self.attempted = attempted
        self.last_error = last_error
        super().__init__(
            f"All providers failed ({', '.join(attempted) or 'none configured'}): {last_error}"
        )

    @property
    def public_message(self) -> str:
        return "Internal Server Error"


class StreamTranslationError(GatewayError):
    """The fragment source failed after the response headers were committed."""

    error_type = ErrorType.STREAMING_ERROR

    def __init__(self, provider: str | None, cause: BaseException) -> None:
        self.provider = provider
        self.cause = cause
        super().__init__(f"Stream from {provider or 'provider'} failed: {cause}")
