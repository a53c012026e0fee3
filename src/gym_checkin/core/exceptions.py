class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a write collides with a uniqueness rule (e.g. a second open log)."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class UpstreamError(Exception):
    """Raised when the backing store is unreachable or answers unexpectedly."""


class DeviceError(Exception):
    """Raised when a camera cannot be listed, opened or released."""
