"""Port for password hashing and verification."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Password hashing/verification contract.

    Implementations are synchronous and CPU-bound; callers on the event loop
    go through `CredentialHasher` instead of calling them directly.
    """

    def hash_password(self, password: str) -> str:
        """Hash plaintext password into a self-describing record for storage."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext password against stored hash record."""
