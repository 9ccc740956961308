"""Password hashing strategies."""

from __future__ import annotations

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from blog_backend.domain.users.repositories import PasswordHasher
from blog_backend.shared.config import AuthConfig

# bcrypt only reads the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(password), hashed.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError, AttributeError):
            return False


class WerkzeugPasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return str(generate_password_hash(password))

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError, AttributeError):
            return False


def build_password_hasher(config: AuthConfig) -> PasswordHasher:
    if config.password_hasher == "werkzeug":
        return WerkzeugPasswordHasher()
    return BcryptPasswordHasher(rounds=config.password_hash_rounds)
