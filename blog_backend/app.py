# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from blog_backend.container import Container
from blog_backend.shared.config import AppConfig, load_config
from blog_backend.shared.logging import logger
from blog_backend.shared.middleware.error_handler import configure_error_handling
from blog_backend.shared.middleware.rate_limit import configure_rate_limiting
from blog_backend.shared.middleware.request_logger import configure_request_logging
from blog_backend.shared.middleware.sanitize import configure_sanitization
from blog_backend.shared.middleware.security_headers import configure_security_headers

EXTENSION_KEY = "blog_backend"


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = container

    configure_error_handling(app, debug_mode=config.debug_logging)

    # before_request hooks run in registration order.
    configure_request_logging(
        app, debug_mode=config.debug_logging, trust_proxy=config.security.trust_proxy
    )
    configure_sanitization(app)
    if config.security.enable_rate_limit:
        configure_rate_limiting(
            app, container.rate_limiter, trust_proxy=config.security.trust_proxy
        )
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.posts_controller.as_blueprint())

    logger.info("Flask app initialized")
    return app


def get_container(app: Flask) -> Container:
    return app.extensions[EXTENSION_KEY]
