# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from blog_backend.domain.posts.entities import Post
from blog_backend.domain.posts.repositories import PostRepository


class ListPostsUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, author_id: int | None = None) -> Sequence[Post]:
        """Every post, or only those owned by ``author_id`` when given."""
        if author_id is None:
            return self._posts.list_all()
        return self._posts.list_by_author(author_id)
