"""
core/exceptions.py
------------------
Domain error taxonomy.

Services raise these; the global handlers registered in main.py turn them
into the uniform response envelope. Each error carries the HTTP status it
maps to and the message that is safe to show the caller. Errors flagged
with ``expose = False`` are logged in full server-side and answered with a
generic message.
"""

from fastapi import status


class RegistryError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"
    expose: bool = True

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        return self.message if self.expose else RegistryError.default_message


class ValidationError(RegistryError):
    """Missing or empty required input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(RegistryError):
    """No bearer token was presented."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class InvalidCredentials(RegistryError):
    """Unknown email or wrong password. The two are never distinguished."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class InvalidToken(RegistryError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class ConflictError(RegistryError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class NotFoundError(RegistryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConfigurationError(RegistryError):
    default_message = "Server configuration error"
    expose = False


class UpstreamError(RegistryError):
    """An outbound call to a third-party service failed."""

    default_message = "Upstream service error"


class StorageError(RegistryError):
    expose = False
