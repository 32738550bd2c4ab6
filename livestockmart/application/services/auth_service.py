from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Optional

from ..validation import validate_credentials, validate_registration
from ...domain.errors import DuplicateEmail, InvalidCredentials, NotFound, Unauthenticated
from ...domain.models import User
from ...domain.ports.persistence import UserRepository
from ...domain.ports.security import PasswordHasher, TokenSigner

logger = logging.getLogger(__name__)

SESSION_LIFETIME = timedelta(days=7)


class AuthService:
    """Registers shoppers, checks their credentials and issues session tokens."""

    def __init__(
        self,
        users: UserRepository,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
        session_lifetime: timedelta = SESSION_LIFETIME,
    ) -> None:
        self._users = users
        self._hasher = password_hasher
        self._signer = token_signer
        self.session_lifetime = session_lifetime

    # ------------------------------------------------------------------
    def register(self, payload: Any) -> User:
        registration = validate_registration(payload).unwrap()
        # The unique index on email still guards against a concurrent registration.
        if self._users.get_user_by_email(registration.email):
            raise DuplicateEmail()
        password_hash = self._hasher.hash(registration.password)
        user = self._users.create_user(
            name=registration.name,
            email=registration.email,
            password_hash=password_hash,
        )
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, payload: Any) -> User:
        credentials = validate_credentials(payload).unwrap()
        user = self._users.get_user_by_email(credentials.email)
        if not user or not self._hasher.verify(credentials.password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentials()
        logger.info("User %s logged in", user.id)
        return user

    def get_by_id(self, user_id: str) -> User:
        user = self._users.get_user_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    # Sessions -----------------------------------------------------------
    def issue_session(self, user: User) -> str:
        return self._signer.sign(user.id, self.session_lifetime)

    def verify_session(self, token: Optional[str]) -> str:
        """Return the user id carried by ``token``.

        Raises ``Unauthenticated`` without a token and ``InvalidSession`` for any
        token that fails verification, whatever the reason.
        """
        if not token:
            raise Unauthenticated()
        return self._signer.verify(token)
