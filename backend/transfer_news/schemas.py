from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from datetime import datetime

class Article(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str = ""
    title: str = ""
    description: str = ""
    url: str = ""
    source: str = ""
    image: str | None = None
    category: str = ""
    language: str = ""
    country: str = ""
    published_at: str = Field(default="", validation_alias=AliasChoices("published_at", "publishedAt"))

    @field_validator(
        "author", "title", "description", "url", "source",
        "category", "language", "country", "published_at",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v):
        # upstream sends null for missing author/description
        return "" if v is None else v

class Pagination(BaseModel):
    limit: int = 0
    offset: int = 0
    count: int = 0
    total: int = 0

class ApiErrorBody(BaseModel):
    message: str = ""
    code: str = ""
    context: dict | list | str | None = None

class NewsEnvelope(BaseModel):
    pagination: Pagination | None = None
    data: list[dict] = []
    error: ApiErrorBody | None = None

class ArticleOut(BaseModel):
    author: str
    title: str
    description: str
    url: str
    source: str
    image: str | None
    category: str
    language: str
    country: str
    published_at: str
    placeholder: bool = False

class FeedOut(BaseModel):
    items: list[ArticleOut]
    total: int
    placeholder: bool
    error: str | None
    detail: str | None = None
    fetched_at: datetime
