from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask.testing import FlaskClient

from blog_backend.app import create_app
from blog_backend.container import Container
from blog_backend.shared.config import AppConfig, SecurityConfig

ALLOWED_ORIGIN = "http://blog.example"


@pytest.fixture()
def hardened_client(config: AppConfig) -> Iterator[FlaskClient]:
    hardened = config.model_copy(
        update={
            "security": SecurityConfig(
                ALLOWED_ORIGINS=f"{ALLOWED_ORIGIN}, http://admin.blog.example",
                ENABLE_HSTS=True,
                RATE_LIMIT_MAX_REQUESTS=1000,
            )
        }
    )
    container = Container(hardened)
    container.database.init_schema()
    yield create_app(container=container).test_client()
    container.close()


def test_cors_allows_configured_origin_on_api_routes(hardened_client: FlaskClient) -> None:
    response = hardened_client.get("/api/health", headers={"Origin": ALLOWED_ORIGIN})

    assert response.headers["Access-Control-Allow-Origin"] == ALLOWED_ORIGIN


def test_cors_ignores_unknown_origin(hardened_client: FlaskClient) -> None:
    response = hardened_client.get("/api/health", headers={"Origin": "http://evil.example"})

    assert "Access-Control-Allow-Origin" not in response.headers


def test_cors_is_limited_to_api_prefix(hardened_client: FlaskClient) -> None:
    response = hardened_client.get("/", headers={"Origin": ALLOWED_ORIGIN})

    assert "Access-Control-Allow-Origin" not in response.headers


def test_hsts_header_follows_config(
    hardened_client: FlaskClient, client: FlaskClient
) -> None:
    hardened = hardened_client.get("/")
    default = client.get("/")

    assert hardened.headers["Strict-Transport-Security"].startswith("max-age=31536000")
    assert "Strict-Transport-Security" not in default.headers


def test_method_not_allowed_keeps_allow_header(client: FlaskClient) -> None:
    response = client.post("/")

    assert response.status_code == 405
    assert response.get_json()["error"] == "method_not_allowed"
    assert "GET" in response.headers["Allow"]
