"""
Exception hierarchy for the Box groups client.

Remote errors map to HTTP status codes and keep the error ``code`` and
``request_id`` from the Box error body. Local failures (missing arguments,
requests that cannot be built, undecodable responses) have their own classes
so callers can tell them apart from server responses.
"""

from typing import Any, Dict, Optional


class BoxClientError(Exception):
    """
    Base exception for all Box client errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (if applicable)
        error_code: Box error code (e.g., "not_found")
        details: Additional error details from the response
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}

    @property
    def request_id(self) -> Optional[str]:
        return self.details.get("request_id")

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.insert(0, f"[{self.error_code}]")
        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code}, "
            f"error_code={self.error_code!r})"
        )


# =============================================================================
# Local Errors
# =============================================================================


class MissingFieldError(BoxClientError, ValueError):
    """
    A required argument was empty.

    Raised before any request is sent.
    """

    def __init__(
        self,
        field_name: str,
        *,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"must provide {field_name.replace('_', ' ')}",
            details={"field": field_name},
        )
        self.field_name = field_name


class RequestBuildError(BoxClientError):
    """The request could not be constructed (bad path, unserializable body)."""

    def __init__(
        self,
        message: str = "Failed to build request",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class DecodeError(BoxClientError):
    """A successful response body could not be decoded into the expected model."""

    def __init__(
        self,
        message: str = "Failed to decode response",
        *,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code=status_code, details=details)


# =============================================================================
# Authentication Errors (401)
# =============================================================================


class AuthenticationError(BoxClientError):
    """
    Authentication failed or credentials are invalid.

    Raised when the access token is missing, expired or revoked and could
    not be refreshed.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        *,
        status_code: int = 401,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Authorization Errors (403)
# =============================================================================


class AuthorizationError(BoxClientError):
    """The token is valid but lacks permission for the operation."""

    def __init__(
        self,
        message: str = "Access denied",
        *,
        status_code: int = 403,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(BoxClientError):
    """The API rejected the request data."""

    def __init__(
        self,
        message: str = "Validation error",
        *,
        status_code: int = 400,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Not Found Errors (404)
# =============================================================================


class NotFoundError(BoxClientError):
    """
    Requested resource was not found.

    Raised when the API returns a 404 status code, e.g. an unknown group
    or membership ID.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        *,
        status_code: int = 404,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(BoxClientError):
    """
    Request conflicts with current state of the resource.

    Box answers 409 for duplicate group names and for adding a user who is
    already a member.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        *,
        status_code: int = 409,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Rate Limit Errors (429)
# =============================================================================


class RateLimitError(BoxClientError):
    """
    Rate limit exceeded.

    retry_after holds the number of seconds from the Retry-After header.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        status_code: int = 429,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )
        self.retry_after = retry_after


# =============================================================================
# Server Errors (5xx)
# =============================================================================


class ServerError(BoxClientError):
    """Raised when the API returns a 5xx status code."""

    def __init__(
        self,
        message: str = "Server error",
        *,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


class ServiceUnavailableError(ServerError):
    """The service is temporarily unavailable."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        status_code: int = 503,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )
        self.retry_after = retry_after


# =============================================================================
# Network Errors (Client-side)
# =============================================================================


class NetworkError(BoxClientError):
    """
    Network-level error occurred.

    Raised when there's a connection problem, DNS failure, or other
    transport failure.
    """

    def __init__(
        self,
        message: str = "Network error",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=None,
            error_code=None,
            details=details,
        )


class TimeoutError(NetworkError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class ConnectionError(NetworkError):
    """Failed to establish connection to the server."""

    def __init__(
        self,
        message: str = "Failed to connect to server",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# =============================================================================
# Exception Mapping
# =============================================================================

STATUS_CODE_EXCEPTIONS = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
    500: ServerError,
    502: ServerError,
    503: ServiceUnavailableError,
    504: ServerError,
}


def exception_from_response(
    status_code: int,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    retry_after: Optional[int] = None,
) -> BoxClientError:
    """
    Create an appropriate exception from an HTTP error response.

    Args:
        status_code: HTTP status code
        message: Error message
        error_code: Box error code
        details: Additional error details
        retry_after: Seconds from the Retry-After header, if any

    Returns:
        Appropriate BoxClientError subclass
    """
    exception_class = STATUS_CODE_EXCEPTIONS.get(status_code)
    if exception_class is None:
        exception_class = ServerError if 500 <= status_code < 600 else BoxClientError
    kwargs: Dict[str, Any] = {
        "status_code": status_code,
        "error_code": error_code,
        "details": details,
    }
    if exception_class in (RateLimitError, ServiceUnavailableError):
        kwargs["retry_after"] = retry_after
    return exception_class(message, **kwargs)
