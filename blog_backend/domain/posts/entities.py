# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Post:

    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class PostChanges:
    """Fields of a post an author may change; ``None`` leaves a field as is."""

    title: str | None = None
    content: str | None = None

    def as_values(self) -> dict[str, str]:
        values: dict[str, str] = {}
        if self.title is not None:
            values["title"] = self.title
        if self.content is not None:
            values["content"] = self.content
        return values
