"""Error kinds raised by services and converted to HTTP responses in hrdesk.main."""

from fastapi import status


class AppError(Exception):
    """Base for caller-visible failures; carries a kind and an HTTP status."""

    kind = "Internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "detail": self.message}


class ValidationError(AppError):
    """Missing or malformed input."""

    kind = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """Duplicate unique key (username, employee e-mail)."""

    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InvalidCredentialsError(AppError):
    """Unknown user or wrong password; the two are deliberately indistinguishable."""

    kind = "InvalidCredentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password."


class ForbiddenError(AppError):
    """Account blocked/inactive, or role mismatch."""

    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class UnauthenticatedError(AppError):
    """No bearer token, or no identity bound to the request."""

    kind = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidTokenError(UnauthenticatedError):
    """Bearer token present but its signature, payload or expiry is bad."""

    kind = "InvalidToken"
    default_message = "Invalid or expired token"


class NotFoundError(AppError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    """Unexpected store or runtime failure."""
