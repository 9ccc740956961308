from __future__ import annotations

import pytest

from blog_backend.application.use_cases.posts.create_post import CreatePostUseCase
from blog_backend.application.use_cases.posts.delete_post import DeletePostUseCase
from blog_backend.application.use_cases.posts.list_posts import ListPostsUseCase
from blog_backend.application.use_cases.posts.update_post import UpdatePostUseCase
from blog_backend.domain.posts.entities import PostChanges
from blog_backend.domain.posts.exceptions import PostNotFoundError

from .fakes import InMemoryPostRepository

ALICE = 1
BOB = 2


@pytest.fixture()
def posts() -> InMemoryPostRepository:
    return InMemoryPostRepository()


def test_create_post_sets_author_from_caller(posts: InMemoryPostRepository) -> None:
    post = CreatePostUseCase(posts=posts).execute(ALICE, "a", "b")

    assert post.author_id == ALICE
    assert (post.title, post.content) == ("a", "b")


def test_list_posts_all_or_by_author(posts: InMemoryPostRepository) -> None:
    create = CreatePostUseCase(posts=posts)
    create.execute(ALICE, "a1", "x")
    create.execute(BOB, "b1", "x")
    create.execute(ALICE, "a2", "x")
    list_posts = ListPostsUseCase(posts=posts)

    assert [p.title for p in list_posts.execute()] == ["a1", "b1", "a2"]
    assert [p.title for p in list_posts.execute(author_id=ALICE)] == ["a1", "a2"]
    assert [p.title for p in list_posts.execute(author_id=BOB)] == ["b1"]


def test_update_post_applies_partial_changes(posts: InMemoryPostRepository) -> None:
    post = CreatePostUseCase(posts=posts).execute(ALICE, "a", "b")

    updated = UpdatePostUseCase(posts=posts).execute(post.id, ALICE, PostChanges(title="new"))

    assert updated.title == "new"
    assert updated.content == "b"
    assert updated.author_id == ALICE


def test_other_author_cannot_update_or_delete(posts: InMemoryPostRepository) -> None:
    post = CreatePostUseCase(posts=posts).execute(ALICE, "a", "b")

    with pytest.raises(PostNotFoundError):
        UpdatePostUseCase(posts=posts).execute(post.id, BOB, PostChanges(title="pwned"))
    with pytest.raises(PostNotFoundError):
        DeletePostUseCase(posts=posts).execute(post.id, BOB)

    assert posts.list_all()[0].title == "a"


def test_delete_post_returns_deleted_post(posts: InMemoryPostRepository) -> None:
    post = CreatePostUseCase(posts=posts).execute(ALICE, "a", "b")

    deleted = DeletePostUseCase(posts=posts).execute(post.id, ALICE)

    assert deleted == post
    assert posts.list_all() == []
    with pytest.raises(PostNotFoundError):
        DeletePostUseCase(posts=posts).execute(post.id, ALICE)
