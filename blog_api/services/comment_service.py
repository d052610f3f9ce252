"""
Comment service — persistence for the Comment collection.

As with posts, updates and deletes are scoped to the owning user.  The
referenced post is not checked on insert: comments store the post id
verbatim and are resolved by lookup when read.
"""
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import Comment


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def get_comments_by_post(db: AsyncSession, post_id: int) -> list[Comment]:
    q = select(Comment).where(Comment.post_id == post_id).order_by(Comment.id)
    result = await db.execute(q)
    return list(result.scalars().all())


async def create_comment(db: AsyncSession, user_id: int, post_id: int, content: str) -> Comment:
    comment = Comment(content=content, user_id=user_id, post_id=post_id)
    db.add(comment)
    await db.flush()
    return comment


async def update_comment(db: AsyncSession, comment_id: int, user_id: int, content: str) -> int:
    result = await db.execute(
        update(Comment)
        .where(Comment.id == comment_id, Comment.user_id == user_id)
        .values(content=content)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_comment(db: AsyncSession, comment_id: int, user_id: int) -> int:
    result = await db.execute(
        delete(Comment).where(Comment.id == comment_id, Comment.user_id == user_id)
    )
    return result.rowcount


async def delete_comments_by_user(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(delete(Comment).where(Comment.user_id == user_id))
    return result.rowcount
