# app/follows/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, EntityId, get_current_user
from app.db.session import get_session
from app.follows.schemas import FollowToggleOut, FollowCountsOut
from app.follows import service as svc

router = APIRouter(tags=["follows"])


@router.post("/follow/{user_id}", response_model=FollowToggleOut)
async def follow_unfollow(
    user_id: EntityId,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    # solo el mensaje; el cliente deduce si quedó siguiendo o no
    message = await svc.toggle_follow(db, current.id, user_id)
    await db.commit()
    return {"message": message}


@router.get("/followers-following/{user_id}", response_model=FollowCountsOut)
async def followers_following(
    user_id: EntityId,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await svc.follow_counts(db, user_id)
