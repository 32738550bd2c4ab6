from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class PasswordHasher(Protocol):
    """One-way salted password hashing."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        ...


class TokenSigner(Protocol):
    """Signs and verifies time-bounded session tokens carrying a subject id."""

    def sign(self, subject: str, lifetime: timedelta) -> str:
        ...

    def verify(self, token: str) -> str:
        """Return the subject of a valid token.

        Raises ``InvalidSession`` when the token is malformed, tampered with or expired.
        """
        ...
