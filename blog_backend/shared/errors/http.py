# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from blog_backend.shared.logging import logger
from blog_backend.utils.http import client_ip

from .base import INTERNAL_ERROR_MESSAGE, AppError, RateLimitedError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    if isinstance(error, RateLimitedError):
        response.headers["Retry-After"] = str(max(1, math.ceil(error.retry_after)))
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            if debug_mode:
                logger.opt(exception=exc).error(
                    f"Application error {exc.code} on {request.method} {request.path}"
                )
            else:
                logger.error(
                    f"Application error {exc.code} ({type(exc.__cause__).__name__}) "
                    f"on {request.method} {request.path}"
                )
        else:
            logger.info(
                f"Handled application error {exc.code} -> {int(exc.status)} "
                f"on {request.method} {request.path}"
            )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        code = (exc.name or "http_error").lower().replace(" ", "_")
        response = jsonify({"error": code, "message": exc.description or exc.name})
        # Keep Allow on 405, Location on redirects, WWW-Authenticate on 401.
        for name, value in exc.get_headers():
            if name.lower() != "content-type":
                response.headers[name] = value
        return response, exc.code or default_status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)

        if debug_mode:
            logger.opt(exception=exc).error(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {client_ip(request)}, user={user_id}, "
                f"query={dict(request.args)}, body_size={len(request.get_data())}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"error": "internal_error", "message": INTERNAL_ERROR_MESSAGE})
        return response, default_status
