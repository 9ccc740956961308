# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from blog_backend.domain.posts.entities import Post, PostChanges
from blog_backend.domain.posts.repositories import PostRepository
from blog_backend.infrastructure.db.models import BlogPost
from blog_backend.infrastructure.unit_of_work import unit_of_work_scope
from blog_backend.utils.dates import as_utc


def _to_domain(row: BlogPost) -> Post:
    return Post(
        id=row.id,
        title=row.title,
        content=row.content,
        author_id=row.author_id,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _owned_by(post_id: int, author_id: int):
    return (BlogPost.id == post_id) & (BlogPost.author_id == author_id)


class SqlAlchemyPostRepository(PostRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, title: str, content: str, author_id: int) -> Post:
        now = datetime.now(UTC)
        with unit_of_work_scope(self._session_factory, "posts.add") as session:
            row = BlogPost(
                title=title,
                content=content,
                author_id=author_id,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            return _to_domain(row)

    def list_all(self) -> Sequence[Post]:
        with unit_of_work_scope(self._session_factory, "posts.list_all") as session:
            rows = session.query(BlogPost).order_by(BlogPost.id.asc()).all()
            return [_to_domain(row) for row in rows]

    def list_by_author(self, author_id: int) -> Sequence[Post]:
        with unit_of_work_scope(self._session_factory, "posts.list_by_author") as session:
            rows = (
                session.query(BlogPost)
                .filter(BlogPost.author_id == author_id)
                .order_by(BlogPost.id.asc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def update_owned(self, post_id: int, author_id: int, changes: PostChanges) -> Post | None:
        """Apply ``changes`` to the post if ``author_id`` owns it.

        Ownership is part of the UPDATE's own WHERE clause, so a post deleted
        or reassigned concurrently simply matches no row.
        """
        values = {**changes.as_values(), "updated_at": datetime.now(UTC)}
        with unit_of_work_scope(self._session_factory, "posts.update_owned") as session:
            result = session.execute(
                update(BlogPost)
                .where(_owned_by(post_id, author_id))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                return None
            row = session.get(BlogPost, post_id)
            return _to_domain(row) if row is not None else None

    def delete_owned(self, post_id: int, author_id: int) -> Post | None:
        with unit_of_work_scope(self._session_factory, "posts.delete_owned") as session:
            row = session.scalars(
                select(BlogPost).where(_owned_by(post_id, author_id))
            ).first()
            if row is None:
                return None
            deleted = _to_domain(row)
            result = session.execute(
                delete(BlogPost)
                .where(_owned_by(post_id, author_id))
                .execution_options(synchronize_session=False)
            )
            # A concurrent delete already removed it.
            if result.rowcount != 1:
                return None
            return deleted
