# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Strip query-operator shaped keys from request input.

Keys starting with ``$`` or containing ``.`` could be read by a store as
operators or nested paths when user input is spliced into a filter. They are
removed from the JSON body, the query string and the path params before any
handler sees them.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, g, request
from werkzeug.datastructures import ImmutableMultiDict

from blog_backend.shared.logging import logger


def is_operator_key(key: object) -> bool:
    return isinstance(key, str) and (key.startswith("$") or "." in key)


def strip_operator_keys(value: Any) -> tuple[Any, list[str]]:
    """Return ``value`` without operator keys, plus the dotted paths removed."""
    removed: list[str] = []
    return _strip(value, "", removed), removed


def _strip(value: Any, path: str, removed: list[str]) -> Any:
    if isinstance(value, dict):
        cleaned: dict[Any, Any] = {}
        for key, item in value.items():
            key_path = f"{path}.{key}" if path else str(key)
            if is_operator_key(key):
                removed.append(key_path)
                continue
            cleaned[key] = _strip(item, key_path, removed)
        return cleaned
    if isinstance(value, list):
        return [_strip(item, f"{path}[{index}]", removed) for index, item in enumerate(value)]
    return value


def _query_key_is_operator(key: str) -> bool:
    # Flat query keys such as "password[$ne]" carry the operator inside the name.
    return "$" in key or "." in key


def configure_sanitization(app: Flask) -> None:
    @app.before_request
    def _sanitize_request() -> None:
        body, removed = strip_operator_keys(request.get_json(silent=True))
        g.json_body = body

        query = list(request.args.items(multi=True))
        kept = [(key, value) for key, value in query if not _query_key_is_operator(key)]
        if len(kept) != len(query):
            removed.extend(f"query:{key}" for key, _ in query if _query_key_is_operator(key))
            request.args = ImmutableMultiDict(kept)

        if request.view_args:
            view_args, removed_params = strip_operator_keys(request.view_args)
            request.view_args = view_args
            removed.extend(f"param:{key}" for key in removed_params)

        if removed:
            logger.warning(
                f"sanitize: stripped {len(removed)} operator key(s) "
                f"on {request.method} {request.path}: {removed}"
            )


def json_body() -> Any:
    """The sanitized JSON body of the current request (``None`` if absent)."""
    return g.get("json_body")


__all__ = [
    "configure_sanitization",
    "is_operator_key",
    "json_body",
    "strip_operator_keys",
]
