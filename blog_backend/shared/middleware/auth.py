# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, request

from blog_backend.domain.users.entities import TokenClaims
from blog_backend.domain.users.exceptions import InvalidTokenError
from blog_backend.domain.users.repositories import TokenService
from blog_backend.shared.errors import UnauthorizedError
from blog_backend.shared.logging import logger


def _token_from_header() -> str:
    header = (request.headers.get("Authorization") or "").strip()
    if header[:7].lower() == "bearer ":
        return header[7:].strip()
    return header


class TokenAuthenticator:
    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    @staticmethod
    def has_credentials() -> bool:
        return bool(_token_from_header())

    def authenticate(self) -> TokenClaims:
        token = _token_from_header()
        if not token:
            logger.warning(f"auth: no Authorization header on {request.method} {request.path}")
            raise UnauthorizedError(UnauthorizedError.MISSING_TOKEN)

        try:
            claims = self._tokens.verify(token)
        except InvalidTokenError as exc:
            # The client only ever sees the generic message.
            logger.warning(
                f"auth: token rejected ({exc.reason}) on {request.method} {request.path}"
            )
            raise UnauthorizedError(UnauthorizedError.INVALID_TOKEN) from exc

        g.user_id = claims.user_id
        g.claims = claims
        logger.debug(f"auth: ok user={claims.user_id} {request.method} {request.path}")
        return claims

    def required(self, f: Callable):
        @wraps(f)
        def inner(*args, **kwargs):
            self.authenticate()
            return f(*args, **kwargs)

        return inner


def current_claims() -> TokenClaims:
    claims: TokenClaims | None = g.get("claims")
    if claims is None:
        raise UnauthorizedError(UnauthorizedError.MISSING_TOKEN)
    return claims


__all__ = ["TokenAuthenticator", "current_claims"]
