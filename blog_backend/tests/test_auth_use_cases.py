from __future__ import annotations

import pytest

from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.shared.errors import StoreError

from .fakes import DeterministicHasher, FakeTokenService, InMemoryUserRepository


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


def _register(users: InMemoryUserRepository) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())


def _login(users: InMemoryUserRepository) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users, tokens=FakeTokenService(), password_hasher=DeterministicHasher()
    )


def test_register_user_stores_hash_not_plaintext(users: InMemoryUserRepository) -> None:
    user = _register(users).execute("alice", "secret123")

    assert user.id == 1
    assert user.username == "alice"
    stored = users.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash == "hashed:secret123"


def test_register_duplicate_username_surfaces_store_error(
    users: InMemoryUserRepository,
) -> None:
    register = _register(users)
    register.execute("alice", "secret123")

    with pytest.raises(StoreError):
        register.execute("alice", "other")


def test_login_user_success_issues_token_for_user(users: InMemoryUserRepository) -> None:
    _register(users).execute("alice", "secret123")

    assert _login(users).execute("alice", "secret123") == "token-1-alice"


def test_login_user_invalid_password(users: InMemoryUserRepository) -> None:
    _register(users).execute("alice", "secret123")

    with pytest.raises(InvalidCredentialsError):
        _login(users).execute("alice", "wrong")


def test_login_unknown_user_is_indistinguishable_from_bad_password(
    users: InMemoryUserRepository,
) -> None:
    with pytest.raises(InvalidCredentialsError) as excinfo:
        _login(users).execute("nobody", "secret123")

    assert excinfo.value.message == "Invalid Username or Password"
    assert int(excinfo.value.status) == 401
