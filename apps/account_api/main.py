"""account-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from account_service.application.ports.user_store_port import UserStorePort
from account_service.application.services.credential_hasher import CredentialHasher
from account_service.config.settings import Settings, load_settings
from account_service.infrastructure.db.migrations import upgrade_database
from account_service.infrastructure.db.session import (
    create_session_factory,
    dispose_session_factory,
)
from account_service.infrastructure.db.user_store import SqlAlchemyUserStore
from account_service.infrastructure.http.user_router import build_user_router
from account_service.infrastructure.logging import configure_logging
from account_service.infrastructure.memory.user_store import InMemoryUserStore
from account_service.infrastructure.security.password_hasher import Argon2PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiContext:
    """Process-wide dependencies built once at startup and shared by routes."""

    settings: Settings
    credential_hasher: CredentialHasher
    user_store: UserStorePort
    session_factory: async_sessionmaker[AsyncSession] | None = None


def build_credential_hasher(settings: Settings) -> CredentialHasher:
    """Build the offloading credential hasher with configured Argon2 costs."""

    return CredentialHasher(
        Argon2PasswordHasher(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost_kib,
            parallelism=settings.argon2_parallelism,
        ),
        max_workers=settings.hasher_max_workers,
    )


def build_api_context(
    settings: Settings,
    *,
    credential_hasher: CredentialHasher | None = None,
) -> ApiContext:
    """Build the user store selected by `USER_STORE_BACKEND`."""

    if credential_hasher is None:
        credential_hasher = build_credential_hasher(settings)

    if settings.user_store_backend == "memory":
        return ApiContext(
            settings=settings,
            credential_hasher=credential_hasher,
            user_store=InMemoryUserStore(credential_hasher),
        )

    session_factory = create_session_factory(
        settings.database_url,
        pool_size=settings.database_pool_size,
    )
    return ApiContext(
        settings=settings,
        credential_hasher=credential_hasher,
        user_store=SqlAlchemyUserStore(session_factory, credential_hasher),
        session_factory=session_factory,
    )


def create_app(*, context: ApiContext | None = None) -> FastAPI:
    """Create FastAPI app exposing the user endpoints."""

    if context is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        context = build_api_context(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await context.credential_hasher.warm_up()
        logger.info(
            "account_api_started user_store_backend=%s",
            context.settings.user_store_backend,
        )
        try:
            yield
        finally:
            context.credential_hasher.close()
            if context.session_factory is not None:
                await dispose_session_factory(context.session_factory)

    app = FastAPI(lifespan=lifespan)
    app.include_router(
        build_user_router(
            user_store=context.user_store,
            request_timeout_seconds=context.settings.request_timeout_seconds,
        )
    )
    return app


def run_asgi_server(*, host: str, port: int) -> None:
    """Run account-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.account_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Apply pending migrations, then run the account-api process."""

    settings = load_settings()
    configure_logging(level=settings.log_level)
    if settings.user_store_backend == "database" and settings.run_migrations_on_startup:
        upgrade_database(settings.database_url)
    run_asgi_server(host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
