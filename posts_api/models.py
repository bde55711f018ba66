from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PostFields(BaseModel):
    """Caller-supplied part of a post. Values are opaque strings."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    title: str | None = None
    description: str | None = None
    author: str | None = None
    publication_date: str | None = Field(default=None, alias="publicationDate")

    def to_item(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Post(PostFields):
    id: str

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Post":
        return cls.model_validate(item)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
