class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(ValidationError):
    """Raised when a tenant is missing configuration the scan flow needs."""


class PersistenceError(DomainError):
    """Raised when the backing store fails an operation."""
