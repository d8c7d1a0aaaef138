# ==============================================
# Errors
# ==============================================
#
# Every exception raised on purpose by this package derives from
# EwasteError so callers (the CLI, tests) can catch one base class.
#
# The session contract stays boolean: login()/register() return False
# instead of raising. Exceptions are reserved for validation at the
# store boundary, authorization on listing removal, and configuration.
#
# ==============================================


class EwasteError(Exception):
    """Base class for all e-waste hub errors."""


class ConfigError(EwasteError):
    """Raised when environment configuration cannot be parsed."""


class ValidationError(EwasteError, ValueError):
    """Raised when a record or listing violates its field invariants."""


class PermissionDenied(EwasteError):
    """Raised when an identity may not perform an operation."""


class NotAuthenticated(EwasteError):
    """Raised when an operation needs a logged-in identity and there is none."""


class StorageError(EwasteError):
    """Raised for misuse of a key-value store (bad key, not connected)."""
