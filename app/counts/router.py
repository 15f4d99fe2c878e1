# app/counts/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, get_current_user
from app.db.session import get_session
from app.feed.repository import count_posts_by_user

router = APIRouter(tags=["counts"])


@router.get("/post-count")
async def post_count(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return {"postCount": await count_posts_by_user(db, current.id)}
