# app/comments/service.py
from __future__ import annotations
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.comments import repository as repo
from app.comments.models import Comment
from app.core.errors import BadRequest, Forbidden, NotFound
from app.feed.repository import get_post

log = logging.getLogger("uvicorn")


async def add_comment(
    db: AsyncSession,
    *,
    author_id: int,
    post_id: int,
    content: str,
    claimed_user_id: int | None = None,
) -> Comment:
    """
    Único camino para comentar. El autor sale del token; si el body trae
    un userId distinto, se rechaza. Cualquier usuario puede comentar
    cualquier post.
    """
    if claimed_user_id is not None and claimed_user_id != author_id:
        raise Forbidden("You can only comment as yourself")
    if not content or not content.strip():
        raise BadRequest("Comment content is required")
    if not await get_post(db, post_id):
        raise NotFound("Post not found")

    c = await repo.create_comment(
        db,
        user_id=author_id,
        post_id=post_id,
        content=content.strip(),
    )
    log.info("comment %s on post %s by user %s", c.id, post_id, author_id)
    return c
