from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator
from pydantic_core import PydanticCustomError

from blog_backend.domain.posts.entities import Post, PostChanges

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 20_000


class PostCreateDTO(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)


class PostUpdateDTO(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(None, min_length=1, max_length=CONTENT_MAX_LENGTH)

    @model_validator(mode="after")
    def _require_a_change(self) -> "PostUpdateDTO":
        if self.title is None and self.content is None:
            raise PydanticCustomError(
                "missing_changes",
                "At least one of title or content is required",
                {},
            )
        return self

    def to_changes(self) -> PostChanges:
        return PostChanges(title=self.title, content=self.content)


class PostDTO(BaseModel):
    id: int
    title: str
    content: str
    author_id: int = Field(serialization_alias="authorId")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def from_entity(cls, post: Post) -> "PostDTO":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def to_json(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)
