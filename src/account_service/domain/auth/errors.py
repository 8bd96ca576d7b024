"""Error taxonomy for account creation and login."""

from __future__ import annotations


class AccountError(Exception):
    """Base class for expected account-service failures."""


class InvalidInputError(AccountError, ValueError):
    """Raised when an email or password is missing or blank."""


class EmailAlreadyExistsError(AccountError):
    """Raised when a create request collides with an existing email."""

    def __init__(self) -> None:
        super().__init__("email already registered")


class AuthenticationFailedError(AccountError):
    """Raised when a login attempt fails for any credential reason."""

    reason = "authentication_failed"

    def __init__(self) -> None:
        super().__init__("authentication failed")


class UserNotFoundError(AuthenticationFailedError, LookupError):
    """Raised when no user is registered under the supplied email."""

    reason = "user_not_found"


class InvalidCredentialsError(AuthenticationFailedError):
    """Raised when the supplied password does not match the stored hash."""

    reason = "invalid_credentials"


class InvalidHashFormatError(AccountError):
    """Raised when a stored hash record cannot be parsed."""


class HashingFailureError(AccountError):
    """Raised when the hashing routine fails or crashes."""


class StorageFailureError(AccountError):
    """Raised when the persistence engine fails for a non-constraint reason."""
