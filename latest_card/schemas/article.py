"""Article metadata schemas shared by the scraper, renderer and cache."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class ArticleMeta(BaseModel):
    """Metadata of the latest blog post. Empty strings mean "not found"."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    link: str = ""
    created_at: str = Field(default="", alias="createdAt")
    views: str = ""
    tags: str = ""
    comments: str = ""
    words: str = ""
    read_time: str = Field(default="", alias="readTime")


class CacheMeta(ArticleMeta):
    """Metadata persisted next to the cached card image."""

    updated_at: str = Field(default="", alias="updatedAt")

    @model_serializer(mode="wrap")
    def _updated_at_first(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # cache.json leads with the render timestamp
        data = handler(self)
        key = "updatedAt" if "updatedAt" in data else "updated_at"
        return {key: data.pop(key), **data}
