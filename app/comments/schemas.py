# app/comments/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime

from app.core.deps import MAX_ID


class CommentIn(BaseModel):
    """Body de POST /comments/{post_id}."""
    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., max_length=5000)


class CommentCreate(CommentIn):
    """
    Body de POST /comment. `userId` se acepta por compatibilidad con el
    cliente viejo, pero el autor siempre es el dueño del token.
    """
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    post_id: int = Field(..., ge=1, le=MAX_ID)
    user_id: int | None = None


class CommentOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime


class CommentSavedOut(BaseModel):
    message: str
    comment: CommentOut


class CommentListItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    content: str
    user_id: int
    created_at: datetime


class CommentListOut(BaseModel):
    comments: list[CommentListItem]
