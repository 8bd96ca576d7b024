"""FastAPI router for user registration and credential verification endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from account_service.application.dto.user_models import (
    CreateUserRequest,
    GetUserRequest,
    UserResponse,
)
from account_service.application.ports.user_store_port import UserStorePort
from account_service.domain.auth.errors import (
    AccountError,
    AuthenticationFailedError,
    EmailAlreadyExistsError,
    InvalidInputError,
    StorageFailureError,
)

logger = logging.getLogger(__name__)


def build_user_router(
    *,
    user_store: UserStorePort,
    request_timeout_seconds: float | None = None,
) -> APIRouter:
    """Build router exposing `POST /user` and `GET /user` endpoints."""

    router = APIRouter(tags=["users"])

    @router.post("/user", response_model=UserResponse, status_code=201)
    async def create_user(payload: CreateUserRequest) -> UserResponse:
        try:
            # A create that times out after its commit leaves the user registered;
            # a retry then gets 409.
            async with asyncio.timeout(request_timeout_seconds):
                record = await user_store.create_user(
                    email=payload.email,
                    password=payload.password,
                )
        except AccountError as exc:
            raise _http_error_for(exc, operation="create") from exc
        except TimeoutError as exc:
            logger.warning("user_create_timed_out timeout_seconds=%s", request_timeout_seconds)
            raise HTTPException(status_code=503, detail="request timed out") from exc
        return UserResponse.from_record(record)

    # The login lookup reads its credentials from a JSON body on GET.
    @router.get("/user", response_model=UserResponse)
    async def get_user(payload: GetUserRequest) -> UserResponse:
        try:
            async with asyncio.timeout(request_timeout_seconds):
                record = await user_store.get_user(
                    email=payload.email,
                    password=payload.password,
                )
        except AccountError as exc:
            raise _http_error_for(exc, operation="login") from exc
        except TimeoutError as exc:
            logger.warning("user_login_timed_out timeout_seconds=%s", request_timeout_seconds)
            raise HTTPException(status_code=503, detail="request timed out") from exc

        logger.info("user_login_succeeded user_id=%s", record.user_id)
        return UserResponse.from_record(record)

    return router


def _http_error_for(exc: AccountError, *, operation: str) -> HTTPException:
    """Map account errors into sanitized HTTP responses."""

    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, EmailAlreadyExistsError):
        logger.info("user_create_conflict")
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, AuthenticationFailedError):
        logger.info("user_login_failed reason=%s", exc.reason)
        return HTTPException(status_code=401, detail="authentication failed")
    if isinstance(exc, StorageFailureError):
        logger.warning("user_%s_storage_failure error=%s", operation, exc)
        return HTTPException(status_code=503, detail="storage unavailable")

    logger.error(
        "user_%s_internal_failure error_type=%s error=%s",
        operation,
        type(exc).__name__,
        exc,
    )
    return HTTPException(status_code=500, detail="internal server error")
