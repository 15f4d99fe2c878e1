# app/feed/repository.py
from sqlalchemy import select, desc, func, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.feed.models import Post, PostLike
from app.comments.models import Comment


# -------------------------
# POSTS
# -------------------------
async def create_post(
    db: AsyncSession,
    user_id: int,
    content: str,
    *,
    image_url: str | None = None,
    video_url: str | None = None,
    media_path: str | None = None,
) -> Post:
    post = Post(
        user_id=user_id,
        content=content,
        image_url=image_url,
        video_url=video_url,
        media_path=media_path,
        likes_count=0,
    )
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def list_posts(db: AsyncSession) -> list[Post]:
    # sin paginación: el feed devuelve todo
    q = select(Post).order_by(desc(Post.created_at), desc(Post.id))
    res = await db.execute(q)
    return list(res.scalars())


async def list_posts_by_user(db: AsyncSession, user_id: int) -> list[Post]:
    """
    Devuelve publicaciones de un usuario en orden descendente por fecha.
    """
    q = (
        select(Post)
        .where(Post.user_id == user_id)
        .order_by(desc(Post.created_at), desc(Post.id))
    )
    res = await db.execute(q)
    return list(res.scalars())


def post_query(post_id: int, *, for_update: bool = False):
    q = select(Post).where(Post.id == post_id)
    if for_update:
        # bloquea la fila del post hasta el commit (sqlite lo ignora)
        q = q.with_for_update()
    return q


async def get_post(db: AsyncSession, post_id: int, *, for_update: bool = False) -> Post | None:
    res = await db.execute(post_query(post_id, for_update=for_update))
    return res.scalar_one_or_none()


async def count_posts_by_user(db: AsyncSession, user_id: int) -> int:
    q = select(func.count()).select_from(Post).where(Post.user_id == user_id)
    res = await db.execute(q)
    return int(res.scalar_one() or 0)


async def delete_post_cascade(db: AsyncSession, post: Post) -> None:
    """
    Borra likes y comentarios del post y luego el post.
    Todo dentro de la misma transacción (el commit lo hace el router).
    """
    await db.execute(delete(PostLike).where(PostLike.post_id == post.id))
    await db.execute(delete(Comment).where(Comment.post_id == post.id))
    await db.delete(post)
    await db.flush()


# -------------------------
# ❤️ LIKES SOBRE POSTS
# -------------------------
async def count_post_likes(db: AsyncSession, post_id: int) -> int:
    q = select(func.count()).select_from(PostLike).where(PostLike.post_id == post_id)
    res = await db.execute(q)
    return int(res.scalar_one() or 0)


async def get_like(db: AsyncSession, post_id: int, user_id: int) -> PostLike | None:
    q = select(PostLike).where(
        PostLike.post_id == post_id,
        PostLike.user_id == user_id,
    )
    res = await db.execute(q)
    return res.scalar_one_or_none()


async def toggle_post_like(
    db: AsyncSession,
    post: Post,
    user_id: int,
) -> bool:
    """
    Activa/desactiva el like de un usuario sobre un post y deja
    post.likes_count igual al número real de filas.
    El caller debe tener el post bloqueado (get_post(..., for_update=True))
    para que dos toggles concurrentes no cuenten a la vez.
    Devuelve True si quedó con like.
    """
    existing = await get_like(db, post.id, user_id)

    if existing:
        # quitar
        await db.execute(delete(PostLike).where(PostLike.id == existing.id))
        liked = False
    else:
        # crear; si otro request ganó la carrera, el flush lanza IntegrityError
        db.add(PostLike(post_id=post.id, user_id=user_id))
        liked = True
    await db.flush()

    post.likes_count = await count_post_likes(db, post.id)
    await db.flush()
    return liked
