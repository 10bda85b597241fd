"""
Error taxonomy for the identity subsystem.

Every failure that leaves a kernel service is exactly one of these kinds.
The API layer maps kind -> HTTP status in one place
(ferryapp.api.exception_handlers); services never pick status codes.
"""

from typing import Optional, Sequence


class IdentityError(Exception):
    """Base class for all errors raised across the identity boundary."""

    #: Message shown to clients when the real one must stay internal.
    public_message: Optional[str] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def client_message(self) -> str:
        return self.public_message or self.message


class ValidationError(IdentityError):
    """Malformed or missing input. Always recoverable by the caller."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class Conflict(IdentityError):
    """A uniqueness rule was violated (identity key or login name)."""


class Unauthorized(IdentityError):
    """Bad credentials, inactive account, or a missing/invalid token."""


class Forbidden(IdentityError):
    """Authenticated, but the role does not allow the operation."""


class NotFound(IdentityError):
    """The addressed account or entity does not exist."""


class PersistenceError(IdentityError):
    """The store failed (connectivity, begin/commit). Detail stays in the logs."""

    public_message = "Error interno del servidor"


class HashingError(IdentityError):
    """The password hasher could not produce a hash."""

    public_message = "Error interno del servidor"
