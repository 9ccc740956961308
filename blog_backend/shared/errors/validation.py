# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

# Errors raised by a model-level validator carry an empty location.
BODY_FIELD = "body"


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part is not None) or BODY_FIELD


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Flatten pydantic errors into ``{"fields": [...], "errors": [...]}``.

    Submitted values are never echoed back, so a rejected password cannot
    end up in a response body or a log line.
    """
    errors: list[dict[str, str]] = []
    for error in exc.errors(include_url=False, include_input=False, include_context=False):
        errors.append({"field": _field_path(error.get("loc", ())), "type": error["type"]})

    return {
        "fields": sorted({entry["field"] for entry in errors}),
        "errors": errors,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = [
    "BODY_FIELD",
    "format_pydantic_errors",
    "raise_validation_error",
]
