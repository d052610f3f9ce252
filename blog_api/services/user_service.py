"""
User service — persistence for the User collection.

Email uniqueness is an application-level rule: ``get_user_by_email`` is
consulted by the signup mutation before ``create_user`` is called.
"""
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import User


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email).limit(1))
    return result.scalars().first()


async def get_users(db: AsyncSession, limit: int, offset: int = 0) -> list[User]:
    """Return up to *limit* users after skipping *offset*, oldest first."""
    q = select(User).order_by(User.id).offset(offset).limit(limit)
    result = await db.execute(q)
    return list(result.scalars().all())


async def count_users(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(User))).scalar_one()


async def create_user(db: AsyncSession, name: str, email: str, password_hash: str) -> User:
    user = User(name=name, email=email, password=password_hash)
    db.add(user)
    await db.flush()
    return user


async def delete_user(db: AsyncSession, user_id: int) -> int:
    """Delete the user row only; owned posts/comments are removed by the caller."""
    result = await db.execute(delete(User).where(User.id == user_id))
    return result.rowcount
