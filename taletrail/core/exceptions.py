"""
Custom exceptions shared by all layers.

Every exception carries the HTTP status the API layer answers with, so services can raise
without knowing about HTTP and the API layer can translate without knowing about services.
"""


class TaleTrailError(Exception):
    """Top-level exception of the application."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# --- 4xx ---
class UnauthenticatedError(TaleTrailError):
    """No valid identity attached to the request."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AuthorizationError(TaleTrailError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = 403

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message)


class NotFoundError(TaleTrailError):
    """Entity absent, or not owned by the caller."""

    status_code = 404


class InvalidRequestError(TaleTrailError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(TaleTrailError):
    status_code = 409


# --- 5xx ---
class InternalError(TaleTrailError):
    """Unexpected store or service failure. Message is generic, details only get logged."""

    status_code = 500


class CreationFailedError(InternalError):
    pass


class IdentityServiceError(InternalError):
    pass


class InitializationError(InternalError):
    """AI service could not be set up (unknown provider, missing key)."""


class GenerationError(InternalError):
    """AI service failed to produce usable content."""
