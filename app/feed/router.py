# app/feed/router.py
from typing import List

from fastapi import (
    APIRouter,
    Depends,
    UploadFile,
    File,
    Form,
    status,
)
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, EntityId, get_current_user
from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.feed.schemas import PostOut, PostMessageOut, PostRecordOut, LikeToggleOut, PostUpdate
from app.feed import service as svc

router = APIRouter(
    tags=["posts"],
    default_response_class=UTF8JSONResponse,
)


@router.post("/upload", response_model=PostMessageOut, status_code=status.HTTP_201_CREATED)
async def upload(
    content: str | None = Form(None),
    file: UploadFile | None = File(None),
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    """
    Publicar nueva pieza de feed (imagen o video) con su texto.
    Multipart: `file` + `content`.
    """
    post = await svc.publish_post(db, current.id, content, file)
    await db.commit()
    return {
        "message": "File uploaded and post created successfully.",
        "post": PostRecordOut.model_validate(post),
    }


@router.get("/posts", response_model=List[PostOut])
async def feed_list(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await svc.list_feed(db)


@router.get("/posts/me", response_model=List[PostOut])
async def my_posts(
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    return await svc.list_user_posts(db, current.id)


@router.post("/update/{post_id}", response_model=PostMessageOut)
async def edit_post(
    post_id: EntityId,
    body: PostUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    post = await svc.update_post(db, post_id, current.id, body.content)
    await db.commit()
    return {
        "message": "Post updated successfully",
        "post": PostRecordOut.model_validate(post),
    }


@router.delete("/delete/{post_id}", response_model=PostMessageOut)
async def delete_post_endpoint(
    post_id: EntityId,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    """
    Elimina una publicación con sus likes y comentarios.
    Solo el autor puede borrar. También intenta borrar el archivo físico.
    """
    snapshot, media_rel = await svc.delete_post(db, post_id, current.id)
    await db.commit()

    svc.remove_post_media(post_id, media_rel)
    return {"message": "Post deleted successfully", "post": snapshot}


@router.post("/post/{post_id}/like-unlike", response_model=LikeToggleOut)
async def like_unlike(
    post_id: EntityId,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    liked, post = await svc.toggle_like(db, post_id, current.id)
    await db.commit()
    return {
        "message": "Post liked." if liked else "Post unliked.",
        "liked": liked,
        "updated_post": PostRecordOut.model_validate(post),
    }
