"""Signed session tokens (JWT, HMAC)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from blog_backend.domain.users.entities import TokenClaims
from blog_backend.domain.users.exceptions import InvalidTokenError
from blog_backend.domain.users.repositories import TokenService

_REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret: str,
        *,
        lifetime_seconds: int = 2 * 60 * 60,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._lifetime = timedelta(seconds=lifetime_seconds)
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: int, username: str) -> str:
        issued_at = self._clock()
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Return the claims of ``token`` or raise :class:`InvalidTokenError`.

        Signature and expiry are both checked against the wall clock; a
        token that fails either check is never partially trusted.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(type(exc).__name__) from exc

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                username=str(payload["username"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("malformed_claims") from exc
