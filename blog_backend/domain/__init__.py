# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .posts.entities import Post, PostChanges
from .users.entities import TokenClaims, User

__all__ = [
    "Post",
    "PostChanges",
    "TokenClaims",
    "User",
]
