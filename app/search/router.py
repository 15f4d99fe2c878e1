# app/search/router.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, get_current_user
from app.core.errors import BadRequest
from app.db.session import get_session
from app.users.repository import search_users
from app.users.schemas import UserOut

router = APIRouter(tags=["search"])


@router.get("/search", response_model=List[UserOut])
async def search(
    query: str | None = Query(None),
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    """
    Busca usuarios por username o email (substring, sin distinguir mayúsculas).
    """
    if not query or not query.strip():
        raise BadRequest("Invalid search query.")
    users = await search_users(db, query.strip())
    return [UserOut.model_validate(u) for u in users]
