class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ConflictError(DomainError):
    """Raised when a change clashes with existing data."""


class InvalidSessionError(NotFoundError):
    """Raised when a scanned session id does not exist."""


class SessionExpiredError(DomainError):
    """Raised when a session is past its expiry time."""


class SessionMismatchError(ValidationError):
    """Raised when the session does not belong to the scanned section."""


class DuplicateCheckInError(ConflictError):
    """Raised when a student already has a record for the session."""
