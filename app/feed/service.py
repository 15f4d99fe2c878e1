# app/feed/service.py
import logging
from typing import Iterable

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.core.errors import BadRequest, Conflict, Forbidden, NotFound
from app.feed import repository as repo
from app.feed.models import Post
from app.feed.schemas import PostRecordOut
from app.media.storage import save_post_media, delete_post_media
from app.users.models import User

log = logging.getLogger("uvicorn")


def _author(user: User) -> dict:
    return {"id": user.id, "username": user.username, "email": user.email}


async def _users_by_id(db: AsyncSession, ids: Iterable[int]) -> dict[int, User]:
    ids = set(ids)
    if not ids:
        return {}
    res = await db.execute(select(User).where(User.id.in_(ids)))
    return {u.id: u for u in res.scalars()}


async def hydrate_posts(db: AsyncSession, posts: list[Post]) -> list[dict]:
    """
    Arma lo que espera el front para cada post:
    - autor (id/username/email)
    - likesCount
    - todos los comentarios con su autor
    Se resuelve con 3 queries para toda la lista (no una por post).
    """
    if not posts:
        return []

    post_ids = [p.id for p in posts]
    cres = await db.execute(
        select(Comment)
        .where(Comment.post_id.in_(post_ids))
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    comments = list(cres.scalars())

    users = await _users_by_id(
        db, [p.user_id for p in posts] + [c.user_id for c in comments]
    )

    by_post: dict[int, list[dict]] = {pid: [] for pid in post_ids}
    for c in comments:
        by_post[c.post_id].append(
            {
                "id": c.id,
                "content": c.content,
                "created_at": c.created_at,
                "user": _author(users[c.user_id]),
            }
        )

    return [
        {
            "id": p.id,
            "content": p.content,
            "image_url": p.image_url,
            "video_url": p.video_url,
            "created_at": p.created_at,
            "likes_count": p.likes_count,
            "user_id": p.user_id,
            "user": _author(users[p.user_id]),
            "comments": by_post[p.id],
        }
        for p in posts
    ]


async def publish_post(
    db: AsyncSession,
    user_id: int,
    content: str | None,
    file: UploadFile | None,
) -> Post:
    """
    Publicar nueva pieza de feed (imagen o video + texto).
    Se guarda exactamente una de image_url / video_url.
    """
    if file is None or not file.filename:
        raise BadRequest("No file uploaded.")
    if not content or not content.strip():
        raise BadRequest("Please enter the content.")

    media = save_post_media(file)
    try:
        post = await repo.create_post(
            db,
            user_id,
            content.strip(),
            image_url=media.url if media.kind == "image" else None,
            video_url=media.url if media.kind == "video" else None,
            media_path=media.rel_path,
        )
    except Exception:
        # sin fila no hay post: el archivo quedaría huérfano
        delete_post_media(media.rel_path)
        raise
    log.info("post %s created by user %s (%s)", post.id, user_id, media.kind)
    return post


async def _owned_post(db: AsyncSession, post_id: int, user_id: int, action: str) -> Post:
    post = await repo.get_post(db, post_id)
    if not post:
        raise NotFound("Post not found")
    if post.user_id != user_id:
        raise Forbidden(f"You do not have permission to {action} this post")
    return post


async def update_post(db: AsyncSession, post_id: int, user_id: int, content: str) -> Post:
    """Solo el autor puede editar, y solo el contenido."""
    if not content or not content.strip():
        raise BadRequest("Post ID and content are required")

    post = await _owned_post(db, post_id, user_id, "update")
    post.content = content.strip()
    await db.flush()
    await db.refresh(post)
    log.info("post %s updated by user %s", post.id, user_id)
    return post


async def delete_post(
    db: AsyncSession, post_id: int, user_id: int
) -> tuple[PostRecordOut, str | None]:
    """
    Solo el autor puede borrar. Devuelve una foto del post tal como estaba.
    El archivo de media se borra aparte (ver remove_post_media), después del commit.
    """
    post = await _owned_post(db, post_id, user_id, "delete")
    snapshot = PostRecordOut.model_validate(post)
    media_rel = post.media_path

    await repo.delete_post_cascade(db, post)
    log.info("post %s deleted by user %s", post_id, user_id)
    return snapshot, media_rel


def remove_post_media(post_id: int, media_rel: str | None) -> None:
    # best-effort: si falla, el post ya no existe y solo queda un archivo huérfano
    try:
        delete_post_media(media_rel)
    except OSError:
        log.warning("could not remove media of post %s (%s)", post_id, media_rel, exc_info=True)


async def toggle_like(db: AsyncSession, post_id: int, user_id: int) -> tuple[bool, Post]:
    # FOR UPDATE: los toggles sobre el mismo post se serializan
    post = await repo.get_post(db, post_id, for_update=True)
    if not post:
        raise NotFound("Post not found")

    try:
        liked = await repo.toggle_post_like(db, post, user_id)
    except IntegrityError:
        # otro request del mismo usuario insertó el like primero
        await db.rollback()
        raise Conflict("Like already recorded.")

    await db.refresh(post)
    return liked, post


async def list_feed(db: AsyncSession) -> list[dict]:
    posts = await repo.list_posts(db)
    return await hydrate_posts(db, posts)


async def list_user_posts(db: AsyncSession, user_id: int) -> list[dict]:
    posts = await repo.list_posts_by_user(db, user_id)
    return await hydrate_posts(db, posts)
