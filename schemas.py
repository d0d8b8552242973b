from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from starlette.requests import ClientDisconnect, Request

from models import Article

WIRE_KEYS = ("id", "title", "desc", "content")


class ArticleError(Exception):
    """Base class for request body errors."""


class BodyReadError(ArticleError):
    """The request body could not be read."""


class DecodeError(ArticleError):
    """The request body is not a JSON article."""


class ArticleSchema(BaseModel):
    """Wire form of an article. ``description`` travels as ``desc``."""

    id: str = ""
    title: str = ""
    description: str = Field(default="", alias="desc")
    content: str = ""

    @model_validator(mode="before")
    @classmethod
    def fold_keys(cls, data: Any) -> Any:
        # A JSON null decodes to an empty article; keys match case-insensitively.
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data
        folded = {}
        for key, value in data.items():
            if key in WIRE_KEYS:
                folded[key] = value
            elif isinstance(key, str) and key.lower() in WIRE_KEYS:
                folded.setdefault(key.lower(), value)
        return folded

    @classmethod
    def from_article(cls, article: Article) -> "ArticleSchema":
        return cls(
            id=article.id,
            title=article.title,
            desc=article.description,
            content=article.content,
        )

    def to_article(self) -> Article:
        return Article(
            id=self.id,
            title=self.title,
            description=self.description,
            content=self.content,
        )


async def read_body(request: Request) -> bytes:
    try:
        return await request.body()
    except ClientDisconnect as e:
        raise BodyReadError("client disconnected while sending body") from e


def decode_article(body: bytes) -> Article:
    try:
        return ArticleSchema.model_validate_json(body).to_article()
    except ValidationError as e:
        raise DecodeError(str(e)) from e
