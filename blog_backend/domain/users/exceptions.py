# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from blog_backend.shared.errors.base import DomainError


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid Username or Password"


class InvalidTokenError(Exception):
    """Raised for any token that fails signature, structure or expiry checks."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
