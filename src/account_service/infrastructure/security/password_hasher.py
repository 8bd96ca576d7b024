"""Argon2id password hasher adapter."""

from __future__ import annotations

from argon2 import PasswordHasher, Type
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from account_service.application.ports.password_hasher_port import PasswordHasherPort
from account_service.domain.auth.errors import HashingFailureError, InvalidHashFormatError


class Argon2PasswordHasher(PasswordHasherPort):
    """Password hashing adapter using argon2-cffi.

    Records are PHC strings (`$argon2id$v=19$m=...,t=...,p=...$salt$hash`), so
    verification reads cost parameters and salt from the record itself and
    keeps working after the configured costs change.
    """

    def __init__(
        self,
        *,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash_password(self, password: str) -> str:
        try:
            return self._hasher.hash(password)
        except HashingError as exc:
            raise HashingFailureError("failed to generate password hash") from exc

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            encoded_hash = password_hash.encode("ascii")
        except UnicodeEncodeError as exc:
            raise InvalidHashFormatError("stored password hash is malformed") from exc

        try:
            return self._hasher.verify(encoded_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as exc:
            raise InvalidHashFormatError("stored password hash is malformed") from exc
