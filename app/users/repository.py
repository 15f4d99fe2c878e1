# app/users/repository.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.users.models import User

async def get_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()

async def get_by_id(db: AsyncSession, user_id: int) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()

async def create_user(db: AsyncSession, username: str, email: str, hashed_password: str) -> User:
    user = User(username=username, email=email, hashed_password=hashed_password)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user

async def search_users(db: AsyncSession, query: str) -> list[User]:
    """
    Coincidencia por substring, sin distinguir mayúsculas, en username O email.
    autoescape: un "%" o "_" en la búsqueda se toma literal.
    """
    q = (
        select(User)
        .where(
            User.username.icontains(query, autoescape=True)
            | User.email.icontains(query, autoescape=True)
        )
        .order_by(User.id.asc())
    )
    res = await db.execute(q)
    return list(res.scalars())
