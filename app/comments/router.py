#app/comments/router.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, EntityId, MAX_ID, get_current_user
from app.core.errors import BadRequest
from app.db.session import get_session
from app.comments.schemas import (
    CommentIn,
    CommentCreate,
    CommentOut,
    CommentSavedOut,
    CommentListOut,
    CommentListItem,
)
from app.comments import repository as repo
from app.comments import service as svc

router = APIRouter(tags=["comments"])


@router.post("/comment", response_model=CommentSavedOut)
async def create_comment_endpoint(
    payload: CommentCreate,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    c = await svc.add_comment(
        db,
        author_id=current.id,
        post_id=payload.post_id,
        content=payload.content,
        claimed_user_id=payload.user_id,
    )
    await db.commit()
    return {"message": "Comment saved successfully", "comment": CommentOut.model_validate(c)}


@router.post(
    "/comments/{post_id}",
    response_model=CommentSavedOut,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_post(
    post_id: EntityId,
    payload: CommentIn,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    c = await svc.add_comment(
        db,
        author_id=current.id,
        post_id=post_id,
        content=payload.content,
    )
    await db.commit()
    return {"message": "Comment saved successfully", "comment": CommentOut.model_validate(c)}


@router.get("/getcomments", response_model=CommentListOut)
async def comments_for_post(
    post_id: Annotated[int | None, Query(alias="postId", ge=1, le=MAX_ID)] = None,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    # valores no numéricos o fuera de rango ya salen como 400 por validación
    if post_id is None:
        raise BadRequest("Invalid postId")

    comments = await repo.list_post_comments(db, post_id)
    return {"comments": [CommentListItem.model_validate(c) for c in comments]}
