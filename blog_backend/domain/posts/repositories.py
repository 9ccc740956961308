# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Post, PostChanges


class PostRepository(Protocol):
    def add(self, title: str, content: str, author_id: int) -> Post: ...
    def list_all(self) -> Sequence[Post]: ...
    def list_by_author(self, author_id: int) -> Sequence[Post]: ...
    def update_owned(self, post_id: int, author_id: int, changes: PostChanges) -> Post | None: ...
    def delete_owned(self, post_id: int, author_id: int) -> Post | None: ...
