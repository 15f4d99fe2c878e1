# app/comments/repository.py
from __future__ import annotations

from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment


async def create_comment(
    db: AsyncSession,
    *,
    user_id: int,
    post_id: int,
    content: str,
) -> Comment:
    c = Comment(
        user_id=user_id,
        post_id=post_id,
        content=content,
    )
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def list_post_comments(db: AsyncSession, post_id: int) -> List[Comment]:
    # todos los comentarios del post en orden de llegada (id para desempatar)
    res = await db.execute(
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return list(res.scalars())
