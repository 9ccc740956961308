# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.posts.entities import Post
from blog_backend.domain.posts.exceptions import PostNotFoundError
from blog_backend.domain.posts.repositories import PostRepository


class DeletePostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, post_id: int, author_id: int) -> Post:
        deleted = self._posts.delete_owned(post_id, author_id)
        if deleted is None:
            raise PostNotFoundError(post_id)
        return deleted
