from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.entities import User
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.interfaces.http.controllers.auth_controller import AuthController
from blog_backend.shared.errors import StoreError
from blog_backend.shared.middleware.error_handler import configure_error_handling
from blog_backend.shared.middleware.sanitize import configure_sanitization


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    configure_sanitization(app)
    return app


def test_register_endpoint_returns_confirmation(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, username: str, password: str) -> User:
            register_called["args"] = (username, password)
            return User(id=1, username=username, password_hash="hash", created_at=datetime.now(UTC))

    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, StubRegister()),
        login_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/V1/register", json={"username": "alice", "password": "secret123"}
        )

    assert response.status_code == 200
    assert register_called["args"] == ("alice", "secret123")
    assert response.get_json() == {"message": "User registered Successfully"}


def test_register_store_failure_maps_to_500(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = StoreError("users.add")
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/V1/register", json={"username": "alice", "password": "x"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "store_error", "message": "Internal Server Error"}


def test_login_returns_token(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = "signed.jwt.token"
    controller = AuthController(
        register_use_case=MagicMock(), login_use_case=cast(LoginUserUseCase, login)
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/V1/login", json={"username": "alice", "password": "pw"})

    assert response.status_code == 200
    assert response.get_json() == {"token": "signed.jwt.token"}
    login.execute.assert_called_once_with("alice", "pw")


def test_login_bad_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/V1/login", json={"username": "alice", "password": "no"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid Username or Password"


def test_login_invalid_payload_returns_422(flask_app: Flask) -> None:
    login = MagicMock()
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/V1/login", json={"username": "a"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["password"]
    login.execute.assert_not_called()


def test_unexpected_exception_does_not_leak_details(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = RuntimeError("connection string postgres://u:p@db")
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/V1/login", json={"username": "alice", "password": "pw"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error", "message": "Internal Server Error"}
