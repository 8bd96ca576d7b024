"""Async credential hashing service backed by a dedicated worker pool."""

from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import TypeVar

from account_service.application.ports.password_hasher_port import PasswordHasherPort
from account_service.domain.auth.errors import HashingFailureError, InvalidHashFormatError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class CredentialHasher:
    """Run password hashing and verification off the event loop thread.

    Argon2 is deliberately slow, so every call is dispatched to a bounded
    thread pool owned by this service. Unexpected crashes inside the hashing
    routine surface as `HashingFailureError`.
    """

    def __init__(self, password_hasher: PasswordHasherPort, *, max_workers: int = 4) -> None:
        self._password_hasher = password_hasher
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="credential-hasher",
        )
        self._decoy_hash: str | None = None

    async def hash(self, password: str) -> str:
        """Return a freshly salted hash record for the plaintext password."""

        return await self._run(partial(self._password_hasher.hash_password, password))

    async def verify(self, *, password: str, password_hash: str) -> bool:
        """Return whether the password matches the stored hash record."""

        return await self._run(
            partial(
                self._password_hasher.verify_password,
                password=password,
                password_hash=password_hash,
            )
        )

    async def warm_up(self) -> None:
        """Build the decoy hash so no login pays for it later."""

        if self._decoy_hash is None:
            self._decoy_hash = await self.hash(secrets.token_urlsafe(32))

    async def verify_decoy(self, *, password: str) -> None:
        """Spend one verification on a throwaway hash for unknown-email logins."""

        await self.warm_up()
        assert self._decoy_hash is not None
        await self.verify(password=password, password_hash=self._decoy_hash)

    def close(self) -> None:
        """Stop the worker pool, dropping queued work."""

        self._executor.shutdown(wait=False, cancel_futures=True)

    async def _run(self, func: Callable[[], _T]) -> _T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, func)
        except (HashingFailureError, InvalidHashFormatError):
            raise
        except Exception as exc:
            logger.exception("credential_hasher_crashed error_type=%s", type(exc).__name__)
            raise HashingFailureError("password hashing routine failed") from exc
