"""Shared normalization helpers for user credential inputs."""

from __future__ import annotations

from account_service.domain.auth.errors import InvalidInputError


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email and reject blank values.

    Emails are compared case-insensitively: surrounding whitespace is dropped
    and the address is lower-cased before it is stored or looked up.
    """

    normalized = email.strip().lower()
    if not normalized:
        raise InvalidInputError("email cannot be blank")
    _require_utf8(normalized, field="email")
    return normalized


def require_user_password(*, password: str) -> str:
    """Reject blank or unencodable plaintext passwords and return the password unchanged."""

    if not password.strip():
        raise InvalidInputError("password cannot be blank")
    _require_utf8(password, field="password")
    return password


def _require_utf8(value: str, *, field: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInputError(f"{field} must be valid UTF-8 text") from exc
