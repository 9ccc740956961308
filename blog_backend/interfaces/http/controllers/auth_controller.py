# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.infrastructure.audit import AuditAction, audit_log
from blog_backend.interfaces.http.dto.auth import (LoginRequestDTO, MessageDTO,
                                                   RegisterRequestDTO, TokenDTO)
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger
from blog_backend.shared.middleware.sanitize import json_body
from blog_backend.utils.http import client_ip


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        trust_proxy: bool = False,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._trust_proxy = trust_proxy

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(json_body() or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.password)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(request, trust_proxy=self._trust_proxy),
            details={"username": dto.username},
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(MessageDTO(message="User registered Successfully").model_dump()), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(json_body() or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip(request, trust_proxy=self._trust_proxy)

        try:
            token = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            ip_address=ip_address,
            details={"username": dto.username},
        )
        logger.info(f"auth.login: ok username={dto.username}")
        return jsonify(TokenDTO(token=token).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/V1")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
