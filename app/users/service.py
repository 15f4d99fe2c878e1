# app/users/service.py
from __future__ import annotations
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from app.users.models import User
from app.users.repository import get_by_email, get_by_id, create_user
from app.users.schemas import SignupIn, LoginIn
from app.core.errors import Conflict, NotFound, Unauthorized
from app.core.security import hash_password, create_access_token, verify_password

log = logging.getLogger("uvicorn")


def issue_token(user: User) -> str:
    return create_access_token(
        user_id=user.id,
        email=user.email,
        username=user.username,
    )


async def register_user(db: AsyncSession, data: SignupIn) -> str:
    if await get_by_email(db, data.email):
        raise Conflict("User already exists, please try logging in")

    hashed = hash_password(data.password)
    user = await create_user(db, data.username, data.email, hashed)
    log.info("signup: user %s created", user.id)

    # El commit lo hace el router
    return issue_token(user)


async def login_user(db: AsyncSession, data: LoginIn) -> str:
    user = await get_by_email(db, data.email)
    if not user:
        raise NotFound("User does not exist, please sign up")
    if not verify_password(data.password, user.hashed_password):
        raise Unauthorized("Invalid credentials")
    return issue_token(user)


async def get_profile(db: AsyncSession, user_id: int) -> User:
    user = await get_by_id(db, user_id)
    if not user:
        # el token sigue siendo válido pero el usuario ya no existe
        raise NotFound("User not found")
    return user
