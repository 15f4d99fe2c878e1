# app/feed/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime


class CamelModel(BaseModel):
    """Salida en camelCase (imageUrl, createdAt...) como espera el cliente web."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorMini(CamelModel):
    id: int
    username: str
    email: str


class FeedCommentOut(CamelModel):
    id: int
    content: str
    created_at: datetime
    user: AuthorMini


class PostRecordOut(CamelModel):
    """La fila del post, sin autor ni comentarios."""
    id: int
    content: str
    image_url: str | None = None
    video_url: str | None = None
    created_at: datetime
    likes_count: int
    user_id: int


class PostOut(PostRecordOut):
    user: AuthorMini
    comments: list[FeedCommentOut] = []


class PostMessageOut(BaseModel):
    message: str
    post: PostRecordOut


class LikeToggleOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    liked: bool
    updated_post: PostRecordOut = Field(serialization_alias="updatedPost")


class PostUpdate(BaseModel):
    """
    Payload para edición de post (solo el contenido).
    """
    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., max_length=10000)
