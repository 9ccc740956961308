# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.posts.entities import Post
from blog_backend.domain.posts.repositories import PostRepository


class CreatePostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, author_id: int, title: str, content: str) -> Post:
        return self._posts.add(title=title, content=content, author_id=author_id)
