# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from types import MemberDescriptorType
from typing import Any

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def _class_default(cls: type, name: str, fallback: Any) -> Any:
    # Slotted dataclass fields surface as member descriptors on the class.
    value = getattr(cls, name, fallback)
    if isinstance(value, MemberDescriptorType):
        return fallback
    return value


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or _class_default(type(self), "code", "domain_error")
        resolved_status = status or _class_default(type(self), "status", HTTPStatus.BAD_REQUEST)
        resolved_message = message or _class_default(type(self), "message", None)
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        message: str | None = INTERNAL_ERROR_MESSAGE,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, message=message, context=context)


class StoreError(InfrastructureError):
    def __init__(self, operation: str) -> None:
        super().__init__("store_error")
        self.operation = operation


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            message="Invalid request body",
            context=context,
        )


class UnauthorizedError(AppError):
    MISSING_TOKEN = "Unauthorized User"
    INVALID_TOKEN = "Something Went Wrong Please Check Your Details"

    def __init__(self, message: str = INVALID_TOKEN) -> None:
        super().__init__(code="unauthorized", status=HTTPStatus.UNAUTHORIZED, message=message)


class RateLimitedError(AppError):
    def __init__(self, retry_after: float) -> None:
        super().__init__(
            code="rate_limited",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message="Too many requests, please try again later.",
        )
        self.retry_after = retry_after
