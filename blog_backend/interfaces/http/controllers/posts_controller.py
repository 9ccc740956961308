# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from blog_backend.application.use_cases.posts.create_post import CreatePostUseCase
from blog_backend.application.use_cases.posts.delete_post import DeletePostUseCase
from blog_backend.application.use_cases.posts.list_posts import ListPostsUseCase
from blog_backend.application.use_cases.posts.update_post import UpdatePostUseCase
from blog_backend.domain.posts.exceptions import PostNotFoundError
from blog_backend.infrastructure.audit import AuditAction, audit_log
from blog_backend.interfaces.http.dto.posts import PostCreateDTO, PostDTO, PostUpdateDTO
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger
from blog_backend.shared.middleware.auth import TokenAuthenticator, current_claims
from blog_backend.shared.middleware.sanitize import json_body
from blog_backend.utils.http import client_ip

# Largest id a signed 64-bit INTEGER column can hold.
MAX_POST_ID = 2**63 - 1


def _parse_post_id(raw: str) -> int:
    # Ids that cannot exist are reported exactly like posts owned by someone else.
    if not (raw.isascii() and raw.isdigit()):
        raise PostNotFoundError(raw)
    post_id = int(raw)
    if post_id > MAX_POST_ID:
        raise PostNotFoundError(raw)
    return post_id


class PostsController:
    def __init__(
        self,
        *,
        authenticator: TokenAuthenticator,
        create_use_case: CreatePostUseCase,
        list_use_case: ListPostsUseCase,
        update_use_case: UpdatePostUseCase,
        delete_use_case: DeletePostUseCase,
        trust_proxy: bool = False,
    ) -> None:
        self._auth = authenticator
        self._create_use_case = create_use_case
        self._list_use_case = list_use_case
        self._update_use_case = update_use_case
        self._delete_use_case = delete_use_case
        self._trust_proxy = trust_proxy

    def list_posts(self) -> tuple[Response, int]:
        """Public feed for anonymous callers, own posts for authenticated ones.

        A request carrying an ``Authorization`` header must present a valid
        token; it is never downgraded to the public feed.
        """
        if self._auth.has_credentials():
            claims = self._auth.authenticate()
            posts = self._list_use_case.execute(author_id=claims.user_id)
        else:
            posts = self._list_use_case.execute()
        return jsonify([PostDTO.from_entity(post).to_json() for post in posts]), 200

    def create_post(self) -> tuple[Response, int]:
        claims = current_claims()
        try:
            dto = PostCreateDTO.model_validate(json_body() or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        post = self._create_use_case.execute(claims.user_id, dto.title, dto.content)

        audit_log(
            AuditAction.POST_CREATED,
            user_id=claims.user_id,
            ip_address=client_ip(request, trust_proxy=self._trust_proxy),
            details={"post_id": post.id},
        )
        logger.info(f"posts.create: ok post_id={post.id} author={claims.user_id}")
        return jsonify(PostDTO.from_entity(post).to_json()), 201

    def update_post(self, post_id: str) -> tuple[Response, int]:
        claims = current_claims()
        try:
            dto = PostUpdateDTO.model_validate(json_body() or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        post = self._update_use_case.execute(
            _parse_post_id(post_id), claims.user_id, dto.to_changes()
        )

        audit_log(
            AuditAction.POST_UPDATED,
            user_id=claims.user_id,
            ip_address=client_ip(request, trust_proxy=self._trust_proxy),
            details={"post_id": post.id},
        )
        return jsonify(PostDTO.from_entity(post).to_json()), 200

    def delete_post(self, post_id: str) -> tuple[Response, int]:
        claims = current_claims()
        post = self._delete_use_case.execute(_parse_post_id(post_id), claims.user_id)

        audit_log(
            AuditAction.POST_DELETED,
            user_id=claims.user_id,
            ip_address=client_ip(request, trust_proxy=self._trust_proxy),
            details={"post_id": post.id},
        )
        return jsonify(PostDTO.from_entity(post).to_json()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("posts", __name__, url_prefix="/api/V1/blog-posts")
        bp.add_url_rule("", view_func=self.list_posts, methods=["GET"])
        bp.add_url_rule(
            "", endpoint="create_post", view_func=self._auth.required(self.create_post),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/<post_id>", endpoint="update_post", view_func=self._auth.required(self.update_post),
            methods=["PUT"],
        )
        bp.add_url_rule(
            "/<post_id>", endpoint="delete_post", view_func=self._auth.required(self.delete_post),
            methods=["DELETE"],
        )
        return bp
