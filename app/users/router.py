# app/users/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, get_current_user
from app.db.session import get_session
from app.users.schemas import SignupIn, LoginIn, TokenOut, ProfileOut, UserOut
from app.users import service as svc

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupIn, db: AsyncSession = Depends(get_session)):
    token = await svc.register_user(db, payload)
    await db.commit()
    return {"message": "User created successfully", "token": token}


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, db: AsyncSession = Depends(get_session)):
    """
    JSON con email + password. Devuelve el mismo formato de token que /signup.
    """
    token = await svc.login_user(db, payload)
    return {"message": "User logged in successfully", "token": token}


@router.get("/profile", response_model=ProfileOut)
async def profile(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    user = await svc.get_profile(db, current.id)
    return {
        "message": "Profile retrieved successfully",
        "user": UserOut.model_validate(user),
    }
