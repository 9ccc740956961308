# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from blog_backend.shared.errors.base import DomainError


class PostNotFoundError(DomainError):
    code = "post_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Blog post not found"

    def __init__(self, post_id: int | str) -> None:
        super().__init__(context={"post_id": post_id})
