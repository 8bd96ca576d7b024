"""SQLAlchemy adapter for account creation and credential lookup."""

from __future__ import annotations

import logging
from typing import cast

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from account_service.application.ports.user_store_port import UserRecord, UserStorePort
from account_service.application.services.credential_hasher import CredentialHasher
from account_service.domain.auth.credentials import normalize_user_email, require_user_password
from account_service.domain.auth.errors import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    StorageFailureError,
    UserNotFoundError,
)
from account_service.infrastructure.db.metadata import users

logger = logging.getLogger(__name__)


class SqlAlchemyUserStore(UserStorePort):
    """User store backed by SQLAlchemy async sessions.

    Each call checks a connection out of the shared engine pool and returns it
    on exit. Email uniqueness is enforced by the `uq_users_email` constraint,
    so concurrent duplicate creates resolve inside the database.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        credential_hasher: CredentialHasher,
    ) -> None:
        self._session_factory = session_factory
        self._credential_hasher = credential_hasher

    async def create_user(self, *, email: str, password: str) -> UserRecord:
        """Hash the password and insert one user row, returning its new id."""

        normalized_email = normalize_user_email(email=email)
        require_user_password(password=password)
        password_hash = await self._credential_hasher.hash(password)

        statement = (
            sa.insert(users)
            .values(email=normalized_email, password_hash=password_hash)
            .returning(users.c.id)
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(statement)
                    user_id = result.scalar_one()
        except IntegrityError as exc:
            raise EmailAlreadyExistsError() from exc
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("user_insert_failed error_type=%s", type(exc).__name__)
            raise StorageFailureError("failed to persist user") from exc

        logger.info("user_created user_id=%s", user_id)
        return UserRecord(user_id=str(user_id), email=normalized_email)

    async def get_user(self, *, email: str, password: str) -> UserRecord:
        """Return the user matching email once the password verifies."""

        normalized_email = normalize_user_email(email=email)
        require_user_password(password=password)

        statement = (
            sa.select(users.c.id, users.c.email, users.c.password_hash)
            .where(users.c.email == normalized_email)
            .limit(1)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("user_lookup_failed error_type=%s", type(exc).__name__)
            raise StorageFailureError("failed to read user") from exc

        row = result.mappings().first()
        if row is None:
            await self._credential_hasher.verify_decoy(password=password)
            raise UserNotFoundError()

        is_valid = await self._credential_hasher.verify(
            password=password,
            password_hash=cast(str, row["password_hash"]),
        )
        if not is_valid:
            raise InvalidCredentialsError()
        return UserRecord(user_id=str(row["id"]), email=cast(str, row["email"]))
