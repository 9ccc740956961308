from __future__ import annotations

import threading
from datetime import UTC, datetime

import pytest

from blog_backend.container import Container
from blog_backend.domain.posts.entities import PostChanges
from blog_backend.domain.users.entities import User
from blog_backend.shared.errors import StoreError


def _user(username: str) -> User:
    return User(id=0, username=username, password_hash="h", created_at=datetime.now(UTC))


def test_duplicate_username_is_rejected_by_the_store(container: Container) -> None:
    users = container.user_repository
    users.add(_user("alice"))

    with pytest.raises(StoreError):
        users.add(_user("alice"))


def test_user_lookup(container: Container) -> None:
    users = container.user_repository
    alice = users.add(_user("alice"))

    found = users.find_by_username("alice")
    assert found is not None and found.id == alice.id
    assert found.password_hash == "h"
    by_id = users.find_by_id(alice.id)
    assert by_id is not None and by_id.username == "alice"
    assert users.find_by_username("bob") is None


def test_posts_are_scoped_to_their_author(container: Container) -> None:
    alice = container.user_repository.add(_user("alice"))
    bob = container.user_repository.add(_user("bob"))
    posts = container.post_repository
    post = posts.add("a", "b", alice.id)

    assert posts.update_owned(post.id, bob.id, PostChanges(title="x")) is None
    assert posts.delete_owned(post.id, bob.id) is None
    assert [p.id for p in posts.list_by_author(alice.id)] == [post.id]
    assert posts.list_by_author(bob.id) == []

    updated = posts.update_owned(post.id, alice.id, PostChanges(content="new"))
    assert updated is not None
    assert (updated.title, updated.content) == ("a", "new")

    deleted = posts.delete_owned(post.id, alice.id)
    assert deleted is not None and deleted.id == post.id
    assert posts.list_all() == []


def test_concurrent_deletes_hand_back_the_post_once(container: Container) -> None:
    alice = container.user_repository.add(_user("alice"))
    posts = container.post_repository
    post_ids = [posts.add(f"t{i}", "c", alice.id).id for i in range(10)]
    results: list[object] = []
    lock = threading.Lock()

    def delete_all(barrier: threading.Barrier) -> None:
        barrier.wait()
        for post_id in post_ids:
            deleted = posts.delete_owned(post_id, alice.id)
            with lock:
                results.append(deleted)

    barrier = threading.Barrier(4)
    threads = [threading.Thread(target=delete_all, args=(barrier,)) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    returned = [result for result in results if result is not None]
    assert len(results) == 40
    assert sorted(post.id for post in returned) == sorted(post_ids)
    assert posts.list_all() == []


def test_update_after_delete_finds_nothing(container: Container) -> None:
    alice = container.user_repository.add(_user("alice"))
    posts = container.post_repository
    post = posts.add("a", "b", alice.id)

    assert posts.delete_owned(post.id, alice.id) is not None

    assert posts.update_owned(post.id, alice.id, PostChanges(title="x")) is None
    assert posts.delete_owned(post.id, alice.id) is None
