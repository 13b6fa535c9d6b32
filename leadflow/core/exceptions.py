"""Custom exceptions for the LeadFlow application."""


class LeadFlowException(Exception):
    """Base exception for LeadFlow application."""

    default_code = "Error"

    def __init__(self, message: str = "", code: str | None = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message


class ValidationError(LeadFlowException):
    """Raised when caller input is malformed or out of range."""

    default_code = "ValidationFailed"


class ConflictError(LeadFlowException):
    """Raised when input collides with existing state (retryable with other input)."""

    default_code = "Conflict"


class NotFoundError(LeadFlowException):
    """Raised when a resource is absent or outside the caller's organization."""

    default_code = "NotFound"


class AuthenticationError(LeadFlowException):
    """Raised when authentication fails."""

    default_code = "Unauthenticated"


class AuthorizationError(LeadFlowException):
    """Raised when the caller's role may not perform an operation."""

    default_code = "Unauthorized"


class InternalError(LeadFlowException):
    """Raised when the store fails underneath an operation."""

    default_code = "InternalError"


class ConfigurationError(LeadFlowException):
    """Raised when configuration is invalid."""

    default_code = "ConfigurationError"


HTTP_STATUS_BY_EXCEPTION: tuple[tuple[type[LeadFlowException], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def map_domain_error(exc: LeadFlowException) -> tuple[int, dict[str, str]]:
    """Translate a domain exception into an HTTP status and error envelope."""
    for exc_type, status_code in HTTP_STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code, {"error_code": exc.code, "detail": exc.message}
    return 500, {"error_code": InternalError.default_code, "detail": "Internal server error"}
