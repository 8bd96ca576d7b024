"""Port for account creation and credential lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class UserRecord:
    """Public user view returned by stores; never carries the password hash."""

    user_id: str
    email: str


class UserStorePort(Protocol):
    """User store contract shared by the relational and in-memory backends."""

    async def create_user(self, *, email: str, password: str) -> UserRecord:
        """Hash the password and persist a new user under a unique email."""

    async def get_user(self, *, email: str, password: str) -> UserRecord:
        """Return the user when the email exists and the password verifies."""
