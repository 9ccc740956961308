# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.posts.entities import Post, PostChanges
from blog_backend.domain.posts.exceptions import PostNotFoundError
from blog_backend.domain.posts.repositories import PostRepository


class UpdatePostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, post_id: int, author_id: int, changes: PostChanges) -> Post:
        # A post owned by someone else is indistinguishable from a missing one.
        updated = self._posts.update_owned(post_id, author_id, changes)
        if updated is None:
            raise PostNotFoundError(post_id)
        return updated
