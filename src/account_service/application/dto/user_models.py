"""Pydantic models for user create and login contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from account_service.application.ports.user_store_port import UserRecord


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class CreateUserRequest(StrictModel):
    """HTTP request model for registering one user."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class GetUserRequest(StrictModel):
    """HTTP request model for verifying one user's credentials."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(StrictModel):
    """HTTP response model for one user, without credential material."""

    user_id: str
    email: str

    @classmethod
    def from_record(cls, record: UserRecord) -> UserResponse:
        return cls(user_id=record.user_id, email=record.email)
