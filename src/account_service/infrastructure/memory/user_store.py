"""In-process user store for tests and database-less runs."""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass

from account_service.application.ports.user_store_port import UserRecord, UserStorePort
from account_service.application.services.credential_hasher import CredentialHasher
from account_service.domain.auth.credentials import normalize_user_email, require_user_password
from account_service.domain.auth.errors import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
)


@dataclass(frozen=True)
class _StoredUser:
    user_id: str
    email: str
    password_hash: str


class InMemoryUserStore(UserStorePort):
    """User store keeping rows in a dict guarded by an asyncio lock."""

    def __init__(self, credential_hasher: CredentialHasher) -> None:
        self._credential_hasher = credential_hasher
        self._users: dict[str, _StoredUser] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create_user(self, *, email: str, password: str) -> UserRecord:
        normalized_email = normalize_user_email(email=email)
        require_user_password(password=password)
        password_hash = await self._credential_hasher.hash(password)

        async with self._lock:
            if normalized_email in self._users:
                raise EmailAlreadyExistsError()
            stored = _StoredUser(
                user_id=str(next(self._ids)),
                email=normalized_email,
                password_hash=password_hash,
            )
            self._users[normalized_email] = stored
        return UserRecord(user_id=stored.user_id, email=stored.email)

    async def get_user(self, *, email: str, password: str) -> UserRecord:
        normalized_email = normalize_user_email(email=email)
        require_user_password(password=password)

        async with self._lock:
            stored = self._users.get(normalized_email)
        if stored is None:
            await self._credential_hasher.verify_decoy(password=password)
            raise UserNotFoundError()

        is_valid = await self._credential_hasher.verify(
            password=password,
            password_hash=stored.password_hash,
        )
        if not is_valid:
            raise InvalidCredentialsError()
        return UserRecord(user_id=stored.user_id, email=stored.email)

    def count(self) -> int:
        """Return the number of stored users."""

        return len(self._users)
