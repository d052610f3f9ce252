"""
Post service — persistence for the Post collection.

Writes are always filtered by both the post id and the owner id.  A
caller that does not own the post therefore matches zero rows; the
returned row count lets callers tell the cases apart, but the GraphQL
layer deliberately does not surface the difference.
"""
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import Post


async def get_post(db: AsyncSession, post_id: int) -> Post | None:
    result = await db.execute(select(Post).where(Post.id == post_id))
    return result.scalar_one_or_none()


async def get_posts(db: AsyncSession, limit: int, offset: int = 0) -> list[Post]:
    """Return up to *limit* posts after skipping *offset*, oldest first."""
    q = select(Post).order_by(Post.id).offset(offset).limit(limit)
    result = await db.execute(q)
    return list(result.scalars().all())


async def get_posts_by_user(db: AsyncSession, user_id: int) -> list[Post]:
    result = await db.execute(select(Post).where(Post.user_id == user_id).order_by(Post.id))
    return list(result.scalars().all())


async def count_posts(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Post))).scalar_one()


async def create_post(db: AsyncSession, user_id: int, content: str) -> Post:
    post = Post(content=content, user_id=user_id)
    db.add(post)
    await db.flush()
    return post


async def update_post(db: AsyncSession, post_id: int, user_id: int, content: str) -> int:
    """Set *content* on the post if *user_id* owns it.  Returns rows affected."""
    result = await db.execute(
        update(Post)
        .where(Post.id == post_id, Post.user_id == user_id)
        .values(content=content)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_post(db: AsyncSession, post_id: int, user_id: int) -> int:
    result = await db.execute(
        delete(Post).where(Post.id == post_id, Post.user_id == user_id)
    )
    return result.rowcount


async def delete_posts_by_user(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(delete(Post).where(Post.user_id == user_id))
    return result.rowcount
