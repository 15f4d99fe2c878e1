# app/follows/service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import BadRequest, Conflict, NotFound
from app.follows import repository as repo
from app.users.repository import get_by_id

log = logging.getLogger("uvicorn")


async def toggle_follow(db: AsyncSession, follower_id: int, target_id: int) -> str:
    if follower_id == target_id:
        raise BadRequest("You cannot follow yourself.")
    if not await get_by_id(db, target_id):
        raise NotFound("User not found")

    try:
        following = await repo.toggle_follow(db, follower_id, target_id)
    except IntegrityError:
        await db.rollback()
        raise Conflict("Follow already recorded.")

    log.info(
        "user %s %s user %s",
        follower_id,
        "followed" if following else "unfollowed",
        target_id,
    )
    return "Followed successfully." if following else "Unfollowed successfully."


async def follow_counts(db: AsyncSession, user_id: int) -> dict:
    return {
        "followers_count": await repo.count_followers(db, user_id),
        "following_count": await repo.count_following(db, user_id),
    }
