"""JWT session tokens signed with a shared secret."""

from datetime import datetime, timedelta, timezone

import jwt

from ...domain.errors import InvalidSession


class JwtTokenSigner:
    """Issues and verifies HS256 JWTs whose only identity claim is ``sub``."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        if not secret:
            raise RuntimeError("JWT_SECRET is not configured.")
        self._secret = secret
        self._algorithm = algorithm

    def sign(self, subject: str, lifetime: timedelta) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {"sub": subject, "iat": now, "exp": now + lifetime}
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidSession() from exc
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidSession()
        return subject
