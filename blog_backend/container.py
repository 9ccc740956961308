"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from blog_backend.application.services.password_hashing import build_password_hasher
from blog_backend.application.services.tokens import JwtTokenService
from blog_backend.application.use_cases.posts.create_post import CreatePostUseCase
from blog_backend.application.use_cases.posts.delete_post import DeletePostUseCase
from blog_backend.application.use_cases.posts.list_posts import ListPostsUseCase
from blog_backend.application.use_cases.posts.update_post import UpdatePostUseCase
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.repositories import PasswordHasher
from blog_backend.infrastructure.db import Database
from blog_backend.infrastructure.repositories import (SqlAlchemyPostRepository,
                                                      SqlAlchemyUserRepository)
from blog_backend.interfaces.http.controllers.auth_controller import AuthController
from blog_backend.interfaces.http.controllers.misc_controller import MiscController
from blog_backend.interfaces.http.controllers.posts_controller import PostsController
from blog_backend.shared.config import AppConfig
from blog_backend.shared.middleware.auth import TokenAuthenticator
from blog_backend.shared.middleware.rate_limit import FixedWindowRateLimiter


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def rate_limiter(self) -> FixedWindowRateLimiter:
        return FixedWindowRateLimiter(
            self.config.security.rate_limit_requests,
            self.config.security.rate_limit_window,
        )

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return build_password_hasher(self.config.auth)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self.config.auth.jwt_secret,
            lifetime_seconds=self.config.auth.token_lifetime_seconds,
            algorithm=self.config.auth.jwt_algorithm,
        )

    @cached_property
    def authenticator(self) -> TokenAuthenticator:
        return TokenAuthenticator(self.token_service)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def post_repository(self) -> SqlAlchemyPostRepository:
        return SqlAlchemyPostRepository(self.database.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            trust_proxy=self.config.security.trust_proxy,
        )

    @cached_property
    def posts_controller(self) -> PostsController:
        return PostsController(
            authenticator=self.authenticator,
            create_use_case=CreatePostUseCase(posts=self.post_repository),
            list_use_case=ListPostsUseCase(posts=self.post_repository),
            update_use_case=UpdatePostUseCase(posts=self.post_repository),
            delete_use_case=DeletePostUseCase(posts=self.post_repository),
            trust_proxy=self.config.security.trust_proxy,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)

    def close(self) -> None:
        if "database" in self.__dict__:
            self.database.dispose()
