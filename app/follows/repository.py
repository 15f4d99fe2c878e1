# app/follows/repository.py
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.follows.models import Follower


async def get_edge(db: AsyncSession, follower_id: int, following_id: int) -> Follower | None:
    res = await db.execute(
        select(Follower).where(
            Follower.follower_id == follower_id,
            Follower.following_id == following_id,
        )
    )
    return res.scalar_one_or_none()


async def toggle_follow(db: AsyncSession, follower_id: int, following_id: int) -> bool:
    """
    Crea la arista si no existe, la borra si existe.
    Devuelve True si quedó siguiendo.
    """
    existing = await get_edge(db, follower_id, following_id)
    if existing:
        await db.execute(delete(Follower).where(Follower.id == existing.id))
        await db.flush()
        return False

    db.add(Follower(follower_id=follower_id, following_id=following_id))
    await db.flush()
    return True


async def count_followers(db: AsyncSession, user_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Follower).where(Follower.following_id == user_id)
    )
    return int(res.scalar_one() or 0)


async def count_following(db: AsyncSession, user_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Follower).where(Follower.follower_id == user_id)
    )
    return int(res.scalar_one() or 0)
