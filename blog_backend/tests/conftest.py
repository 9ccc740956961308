from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from blog_backend.app import create_app
from blog_backend.container import Container
from blog_backend.shared.config import AppConfig, AuthConfig, DatabaseConfig, SecurityConfig

TEST_SECRET = "test-secret-key-for-jwt-signing-32b"


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'blog.db'}"),
        auth=AuthConfig(JWT_SECRET=TEST_SECRET, PASSWORD_HASH_ROUNDS=4),
        security=SecurityConfig(RATE_LIMIT_MAX_REQUESTS=1000),
    )


@pytest.fixture()
def container(config: AppConfig) -> Iterator[Container]:
    container = Container(config)
    container.database.init_schema()
    yield container
    container.database.drop_schema()
    container.close()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def login_as(client: FlaskClient) -> Callable[[str, str], str]:
    def _login_as(username: str, password: str) -> str:
        register = client.post(
            "/api/V1/register", json={"username": username, "password": password}
        )
        assert register.status_code == 200
        login = client.post("/api/V1/login", json={"username": username, "password": password})
        assert login.status_code == 200
        return login.get_json()["token"]

    return _login_as
